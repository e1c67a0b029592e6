from typer.testing import CliRunner

from prepare_words import app, filter_words

runner = CliRunner()


def test_filter_words_keeps_length_letters_and_first_occurrence():
    lines = ["libro\n", "  Carta ", "LIBRO", "parola", "l'ora", "", "porta"]
    assert filter_words(lines, 5) == ["LIBRO", "CARTA", "PORTA"]


def test_command_writes_word_file(tmp_path):
    source = tmp_path / "parole.txt"
    source.write_text("albero\nlibro\nstoria\nalbero\n", encoding="utf-8")
    out = tmp_path / "words_6.txt"

    result = runner.invoke(app, [str(source), "--length", "6", "--output", str(out)])
    assert result.exit_code == 0
    assert out.read_text(encoding="utf-8").splitlines() == ["ALBERO", "STORIA"]


def test_command_rejects_unsupported_length(tmp_path):
    source = tmp_path / "parole.txt"
    source.write_text("libro\n", encoding="utf-8")
    result = runner.invoke(app, [str(source), "--length", "7"])
    assert result.exit_code == 1
