from typing import Optional

from bracketboard.models.match import Match
from bracketboard.models.prediction import Cleared, Predicted, Unset


def effective_winner(match: Match) -> Optional[int]:
    """Returns the winner that counts for standings, or None.

    A prediction that has been set, even one cleared back to "no winner",
    takes precedence over the recorded ``winner_id``.
    """
    prediction = match.prediction
    if isinstance(prediction, Predicted):
        return prediction.team_id
    if isinstance(prediction, Cleared):
        return None
    if isinstance(prediction, Unset):
        return match.winner_id
    raise TypeError(f"Unknown prediction variant: {prediction!r}")
