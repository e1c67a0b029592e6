import os
import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

# Word length -> maximum attempts for each difficulty tier
DIFFICULTIES: Dict[int, int] = {5: 6, 6: 7, 8: 8}


class InvalidGuess(ValueError):
    """Base class for guesses the evaluator refuses to score."""


class EmptyInput(InvalidGuess):
    pass


class LengthMismatch(InvalidGuess):
    pass


class UnsupportedDifficulty(ValueError):
    pass


class Verdict(Enum):
    EXACT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


@dataclass(frozen=True)
class EvaluationResult:
    guess: str
    verdicts: Tuple[Verdict, ...]

    @property
    def labels(self) -> List[str]:
        return [v.value for v in self.verdicts]

    @property
    def solved(self) -> bool:
        return all(v is Verdict.EXACT for v in self.verdicts)


# Load the word list for one difficulty tier
def load_words(length: int, data_dir: str = DATA_DIR) -> List[str]:
    path = os.path.join(data_dir, f"words_{length}.txt")
    if not os.path.exists(path):
        return []
    with open(path, "r", encoding="utf-8") as f:
        return [word.strip().upper() for word in f if word.strip()]


WORDS_BY_LENGTH: Dict[int, List[str]] = {length: load_words(length) for length in DIFFICULTIES}
VALID_WORDS = set(word for words in WORDS_BY_LENGTH.values() for word in words)


def max_attempts_for(length: int) -> int:
    if length not in DIFFICULTIES:
        raise UnsupportedDifficulty(f"Unsupported difficulty: {length}")
    return DIFFICULTIES[length]


# Pick a random target word for a difficulty tier.
def random_word(length: int = 5) -> str:
    max_attempts_for(length)
    words = WORDS_BY_LENGTH.get(length)
    if not words:
        raise UnsupportedDifficulty(f"No words available for difficulty {length}")
    return random.choice(words)


# Check if a word is valid for gameplay.
def is_valid_word(word: str) -> bool:
    return word.upper() in VALID_WORDS


# Evaluate a guess against the target word.
def evaluate_guess(guess: str, target: str) -> EvaluationResult:
    if not guess or not target:
        raise EmptyInput("Guess and target must not be empty")
    if len(guess) != len(target):
        raise LengthMismatch(
            f"Guess has {len(guess)} letters, target has {len(target)}"
        )

    # Letters such as 'ß' expand when uppercased and would shift positions
    for word in (guess, target):
        if len(word.upper()) != len(word):
            raise InvalidGuess(f"'{word}' changes length when uppercased")
    guess = guess.upper()
    target = target.upper()

    verdicts = [Verdict.ABSENT] * len(guess)

# First pass: mark exact positions and count the unconsumed target letters
    remaining = Counter()
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            verdicts[i] = Verdict.EXACT
        else:
            remaining[t] += 1

# Second pass: claim one unconsumed occurrence per present letter, left to right
    for i, g in enumerate(guess):
        if verdicts[i] is Verdict.EXACT:
            continue
        if remaining[g] > 0:
            verdicts[i] = Verdict.PRESENT
            remaining[g] -= 1

    return EvaluationResult(guess=guess, verdicts=tuple(verdicts))


def is_win(result: EvaluationResult) -> bool:
    return result.solved
