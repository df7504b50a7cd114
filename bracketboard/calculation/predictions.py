from typing import List, Optional, Sequence

from loguru import logger

from bracketboard.models.match import Match
from bracketboard.models.prediction import CLEARED, Predicted


class BoardError(Exception):
    """Base exception for invalid operations on the tournament board."""

    pass


class InvalidPredictionError(BoardError):
    """Raised when a prediction cannot be applied to a match."""

    pass


def get_upcoming(matches: Sequence[Match]) -> List[Match]:
    """Matches without a recorded winner, i.e. the ones open to prediction."""
    return [m for m in matches if m.winner_id is None]


def set_prediction(match: Match, team_id: Optional[int]) -> None:
    """Predicts ``team_id`` as the winner, or clears the pick when None.

    Raises:
        InvalidPredictionError: ``team_id`` does not play in this match. The
            match is left as it was.
    """
    if team_id is None:
        match.prediction = CLEARED
        return
    if not match.involves(team_id):
        raise InvalidPredictionError(
            f"Team {team_id} cannot win {match.description}"
        )
    match.prediction = Predicted(team_id=team_id)


def toggle_prediction(match: Match, team_id: int) -> None:
    """Picks ``team_id``, or clears the pick if it was already selected."""
    if match.predicted_winner_id == team_id:
        set_prediction(match, None)
    else:
        set_prediction(match, team_id)


def clear_all_predictions(matches: Sequence[Match]) -> int:
    """Clears the prediction of every undecided match.

    Returns:
        The number of matches cleared. Decided matches are not touched.
    """
    cleared = 0
    for match in get_upcoming(matches):
        match.prediction = CLEARED
        cleared += 1
    logger.debug(f"Cleared predictions on {cleared} upcoming matches")
    return cleared
