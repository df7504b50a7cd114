from typing import Optional

from pydantic import BaseModel, Field

from .prediction import Prediction, Predicted, Unset


class Match(BaseModel):
    """A head-to-head pairing between two teams.

    ``winner_id`` is the recorded outcome (None while the match is still to be
    played). ``prediction`` is the user's override and the only field that
    changes during a session.
    """

    team1_id: int
    team2_id: int
    winner_id: Optional[int] = None
    prediction: Prediction = Field(default_factory=Unset)

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def team_ids(self) -> tuple[int, int]:
        return (self.team1_id, self.team2_id)

    def involves(self, team_id: int) -> bool:
        return team_id in self.team_ids

    def connects(self, team_a: int, team_b: int) -> bool:
        """True if this match is between the two teams, in either orientation."""
        return (self.team1_id == team_a and self.team2_id == team_b) or (
            self.team1_id == team_b and self.team2_id == team_a
        )

    def opponent_of(self, team_id: int) -> int:
        if team_id == self.team1_id:
            return self.team2_id
        if team_id == self.team2_id:
            return self.team1_id
        raise ValueError(f"Team {team_id} does not play in {self.description}")

    @property
    def predicted_winner_id(self) -> Optional[int]:
        if isinstance(self.prediction, Predicted):
            return self.prediction.team_id
        return None

    @property
    def description(self) -> str:
        return f"match {self.team1_id} vs {self.team2_id}"
