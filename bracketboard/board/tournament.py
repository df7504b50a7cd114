"""
Tournament board: the owned store of teams and matches.

Every mutation runs through the same pipeline (validate, mutate, recompute)
and hands back a fresh snapshot, so callers never observe standings or a
matrix that lag behind the match list.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger
from pydantic import BaseModel

from bracketboard.calculation.matrix import compute_matrix
from bracketboard.calculation.predictions import (
    InvalidPredictionError,
    clear_all_predictions,
    set_prediction,
    toggle_prediction,
)
from bracketboard.calculation.standings import compute_standings, default_thresholds
from bracketboard.models.match import Match
from bracketboard.models.matrix import MatchMatrix
from bracketboard.models.standing import BracketThresholds, RankedStanding
from bracketboard.models.team import Team


class BoardSnapshot(BaseModel):
    """Derived view of the board. Rebuilt after every mutation."""

    standings: List[RankedStanding]
    matrix: MatchMatrix


class TournamentBoard:
    """Holds the session's teams and matches and recomputes on change."""

    def __init__(
        self,
        teams: Sequence[Team],
        matches: Sequence[Match],
        thresholds: Optional[BracketThresholds] = None,
    ):
        self.teams: List[Team] = list(teams)
        self.matches: List[Match] = list(matches)
        self.thresholds = thresholds or default_thresholds()
        self._teams_by_id: Dict[int, Team] = {team.id: team for team in self.teams}
        self._snapshot = self.recompute()
        logger.info(
            f"Board ready with {len(self.teams)} teams and {len(self.matches)} matches"
        )

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._snapshot

    def recompute(self) -> BoardSnapshot:
        self._snapshot = BoardSnapshot(
            standings=compute_standings(self.teams, self.matches, self.thresholds),
            matrix=compute_matrix(self.teams, self.matches),
        )
        return self._snapshot

    def team(self, team_id: int) -> Optional[Team]:
        return self._teams_by_id.get(team_id)

    def upcoming(self) -> List[Tuple[int, Match]]:
        """Undecided matches paired with their index in ``matches``."""
        return [(i, m) for i, m in enumerate(self.matches) if m.winner_id is None]

    def predict(self, match_index: int, team_id: Optional[int]) -> BoardSnapshot:
        match = self._open_match(match_index)
        set_prediction(match, team_id)
        logger.debug(f"Prediction for {match.description} set to {match.prediction}")
        return self.recompute()

    def toggle(self, match_index: int, team_id: int) -> BoardSnapshot:
        match = self._open_match(match_index)
        toggle_prediction(match, team_id)
        logger.debug(f"Prediction for {match.description} toggled to {match.prediction}")
        return self.recompute()

    def clear_predictions(self) -> BoardSnapshot:
        cleared = clear_all_predictions(self.matches)
        logger.info(f"Cleared {cleared} predictions")
        return self.recompute()

    def _open_match(self, match_index: int) -> Match:
        """Looks up a match that may still take a prediction."""
        if not 0 <= match_index < len(self.matches):
            raise InvalidPredictionError(f"No match at index {match_index}")
        match = self.matches[match_index]
        if match.is_decided:
            raise InvalidPredictionError(
                f"{match.description} is already decided (winner {match.winner_id})"
            )
        return match
