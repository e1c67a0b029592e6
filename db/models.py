"""
Database models for Wordle Italiano.
"""
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class GameResult(Base):
    """One finished game as reported by a player."""
    __tablename__ = 'game_results'

    id = Column(Integer, primary_key=True)
    player = Column(String(50), nullable=False, index=True)
    word = Column(String(16), nullable=False)
    attempts = Column(Integer, nullable=False, default=0)
    time_seconds = Column(Integer, nullable=False, default=0)
    difficulty = Column(Integer, nullable=False, index=True)
    won = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "player": self.player,
            "word": self.word,
            "attempts": self.attempts,
            "time": self.time_seconds,
            "difficulty": self.difficulty,
            "won": self.won,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<GameResult(id={self.id}, player='{self.player}', word='{self.word}', won={self.won})>"
