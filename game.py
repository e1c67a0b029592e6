"""
Single-round game state.

A round holds the target word, the guesses submitted so far and their
verdict labels. It is stored in the server-side session as a plain dict.
"""
import time
from typing import Dict, List, Optional

from game_logic import EvaluationResult, evaluate_guess, max_attempts_for

IN_PROGRESS = "in_progress"
WON = "won"
LOST = "lost"


class RoundFinished(RuntimeError):
    pass


class GameRound:
    """State machine for one round: in_progress -> won | lost."""

    def __init__(self, target: str, player: str = "", max_attempts: Optional[int] = None,
                 guesses: Optional[List[Dict]] = None, status: str = IN_PROGRESS,
                 started_at: Optional[float] = None, finished_at: Optional[float] = None):
        self.target = target.upper()
        self.player = player
        self.max_attempts = max_attempts or max_attempts_for(len(self.target))
        self.guesses = list(guesses or [])
        self.status = status
        self.started_at = started_at if started_at is not None else time.time()
        self.finished_at = finished_at

    @property
    def difficulty(self) -> int:
        return len(self.target)

    @property
    def attempts(self) -> int:
        return len(self.guesses)

    @property
    def is_over(self) -> bool:
        return self.status != IN_PROGRESS

    @property
    def elapsed_seconds(self) -> int:
        end = self.finished_at if self.finished_at is not None else time.time()
        return int(end - self.started_at)

    def submit(self, guess: str) -> EvaluationResult:
        """
        Evaluate a guess against the target and advance the round.

        Raises:
            RoundFinished: the round is already won or lost
            InvalidGuess: the guess is empty or its length differs from the target
        """
        if self.is_over:
            raise RoundFinished("Round is already over")

        result = evaluate_guess(guess, self.target)
        self.guesses.append({"guess": result.guess, "result": result.labels})

        if result.solved:
            self.status = WON
        elif self.attempts >= self.max_attempts:
            self.status = LOST
        if self.is_over:
            self.finished_at = time.time()
        return result

    def public_view(self) -> Dict:
        view = {
            "player": self.player,
            "length": self.difficulty,
            "max_attempts": self.max_attempts,
            "attempts": self.attempts,
            "guesses": self.guesses,
            "status": self.status,
            "target": self.target if self.is_over else None,
        }
        if self.is_over:
            view["time"] = self.elapsed_seconds
        return view

    def to_dict(self) -> Dict:
        return {
            "target": self.target,
            "player": self.player,
            "max_attempts": self.max_attempts,
            "guesses": self.guesses,
            "status": self.status,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "GameRound":
        return cls(**data)

    def __repr__(self):
        return f"<GameRound(player='{self.player}', attempts={self.attempts}/{self.max_attempts}, status='{self.status}')>"
