"""
Append and read game records.
"""
from typing import Dict, List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from db.models import GameResult


def save_result(db: Session, player: str, word: str, attempts: int, time_seconds: int,
                difficulty: int, won: bool) -> GameResult:
    """
    Append a finished game.

    Args:
        db: Open database session
        player: Name the player entered
        word: Target word of the round
        attempts: Guesses used
        time_seconds: Time spent on the round
        difficulty: Word length of the round
        won: Whether the target was found

    Returns:
        The stored record
    """
    result = GameResult(
        player=player,
        word=word.upper(),
        attempts=attempts,
        time_seconds=time_seconds,
        difficulty=difficulty,
        won=won,
    )
    db.add(result)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(result)
    return result


def list_results(db: Session, difficulty: Optional[int] = None, limit: int = 50) -> List[GameResult]:
    """Newest records first, optionally for one difficulty."""
    query = db.query(GameResult)
    if difficulty is not None:
        query = query.filter(GameResult.difficulty == difficulty)
    return query.order_by(GameResult.created_at.desc(), GameResult.id.desc()).limit(limit).all()


def leaderboard(db: Session, difficulty: Optional[int] = None, limit: int = 10) -> List[Dict]:
    """
    Rank players by wins, tiebreaker by fewest losses, then name.
    """
    wins = func.sum(case((GameResult.won.is_(True), 1), else_=0))
    games = func.count(GameResult.id)
    best = func.min(case((GameResult.won.is_(True), GameResult.attempts)))

    query = db.query(GameResult.player, wins.label("wins"), games.label("games"), best.label("best"))
    if difficulty is not None:
        query = query.filter(GameResult.difficulty == difficulty)
    rows = (
        query.group_by(GameResult.player)
        .order_by(wins.desc(), (games - wins).asc(), GameResult.player.asc())
        .limit(limit)
        .all()
    )

    board = []
    for i, row in enumerate(rows, start=1):
        board.append({
            "rank": i,
            "player": row.player,
            "wins": int(row.wins or 0),
            "losses": int(row.games - (row.wins or 0)),
            "best_attempts": row.best,
        })
    return board
