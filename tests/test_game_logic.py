from collections import Counter
from itertools import product

import pytest

from game_logic import (
    DIFFICULTIES,
    EmptyInput,
    InvalidGuess,
    LengthMismatch,
    UnsupportedDifficulty,
    Verdict,
    WORDS_BY_LENGTH,
    evaluate_guess,
    is_valid_word,
    is_win,
    max_attempts_for,
    random_word,
)

E, P, A = Verdict.EXACT, Verdict.PRESENT, Verdict.ABSENT


@pytest.mark.parametrize("guess,target,expected", [
    ("STARE", "STARE", [E, E, E, E, E]),
    ("ERATS", "STARE", [P, P, E, P, P]),
    ("ROBOT", "LIBRO", [P, P, E, A, A]),
    ("NONN", "ANNO", [P, P, E, A]),
    ("SPEED", "ABIDE", [A, A, P, A, P]),
    ("LLAMA", "HELLO", [P, P, A, A, A]),
])
def test_evaluate_scenarios(guess, target, expected):
    result = evaluate_guess(guess, target)
    assert list(result.verdicts) == expected


def test_case_is_ignored_and_guess_canonicalized():
    result = evaluate_guess("erats", "Stare")
    assert result.guess == "ERATS"
    assert result.labels == ["present", "present", "correct", "present", "present"]


def test_labels_and_solved():
    result = evaluate_guess("LIBRO", "LIBRO")
    assert result.labels == ["correct"] * 5
    assert result.solved
    assert is_win(result)
    assert not evaluate_guess("LIBRA", "LIBRO").solved


def test_evaluate_is_deterministic():
    assert evaluate_guess("NONNA", "ANNOT") == evaluate_guess("NONNA", "ANNOT")


def test_result_is_immutable():
    result = evaluate_guess("CARTA", "PORTA")
    with pytest.raises(AttributeError):
        result.guess = "PORTA"
    assert isinstance(result.verdicts, tuple)


def test_length_mismatch():
    with pytest.raises(LengthMismatch):
        evaluate_guess("AB", "ABC")


def test_length_is_compared_before_uppercasing():
    with pytest.raises(LengthMismatch):
        evaluate_guess("STRAßE", "STRASSE")


def test_letters_that_expand_when_uppercased_are_rejected():
    with pytest.raises(InvalidGuess):
        evaluate_guess("STRAßE", "STRASE")
    with pytest.raises(InvalidGuess):
        evaluate_guess("ﬁORE", "FORE")


@pytest.mark.parametrize("guess,target", [("", "ABC"), ("ABC", ""), ("", "")])
def test_empty_input(guess, target):
    with pytest.raises(EmptyInput):
        evaluate_guess(guess, target)


def test_errors_share_a_base_class():
    assert issubclass(LengthMismatch, InvalidGuess)
    assert issubclass(EmptyInput, InvalidGuess)
    assert issubclass(InvalidGuess, ValueError)


def test_invariants_hold_for_every_small_word_pair():
    words = ["".join(p) for p in product("ABN", repeat=4)]
    for target in words:
        target_counts = Counter(target)
        for guess in words:
            verdicts = evaluate_guess(guess, target).verdicts
            claimed = Counter(g for g, v in zip(guess, verdicts) if v is not A)
            for letter, count in claimed.items():
                assert count <= target_counts[letter]
            for i, (g, t) in enumerate(zip(guess, target)):
                if g == t:
                    assert verdicts[i] is E
        assert evaluate_guess(target, target).solved


def test_difficulty_tiers():
    assert DIFFICULTIES == {5: 6, 6: 7, 8: 8}
    assert max_attempts_for(6) == 7
    with pytest.raises(UnsupportedDifficulty):
        max_attempts_for(7)


@pytest.mark.parametrize("length", sorted(DIFFICULTIES))
def test_word_lists_match_their_tier(length):
    words = WORDS_BY_LENGTH[length]
    assert words
    assert all(len(w) == length and w.isupper() for w in words)
    assert random_word(length) in words


def test_random_word_rejects_unknown_tier():
    with pytest.raises(UnsupportedDifficulty):
        random_word(4)


def test_is_valid_word():
    assert is_valid_word("libro")
    assert not is_valid_word("XYZZY")
