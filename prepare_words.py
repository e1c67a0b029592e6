"""
Build a difficulty word list from a raw dictionary file.
"""
from __future__ import annotations
import pathlib
from typing import Iterable, List, Optional

import typer
from rich import print

from game_logic import DATA_DIR, DIFFICULTIES

app = typer.Typer()


def filter_words(lines: Iterable[str], length: int) -> List[str]:
    seen = set()
    words = []
    for line in lines:
        word = line.strip().upper()
        if len(word) != length or not word.isalpha() or word in seen:
            continue
        seen.add(word)
        words.append(word)
    return words


@app.command()
def main(source: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False),
         length: int = typer.Option(5, "--length", "-n"),
         output: Optional[pathlib.Path] = typer.Option(None, "--output", "-o")):
    if length not in DIFFICULTIES:
        print(f"[red]Unsupported length[/] {length}; choose one of {sorted(DIFFICULTIES)}")
        raise typer.Exit(code=1)

    out = output or pathlib.Path(DATA_DIR) / f"words_{length}.txt"
    with source.open("r", encoding="utf-8") as f:
        words = filter_words(f, length)

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("".join(w + "\n" for w in words), encoding="utf-8")
    print(f"[green]Wrote[/] {len(words)} words of length {length} to {out}")


if __name__ == "__main__":
    app()
