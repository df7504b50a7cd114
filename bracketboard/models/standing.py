from pydantic import BaseModel, Field, model_validator

from .enums import Classification
from .team import Team


class TeamRecord(BaseModel):
    """Win/loss tally for one team."""

    wins: int = 0
    losses: int = 0

    @property
    def sort_key(self) -> tuple[int, int]:
        return (-self.wins, self.losses)


class BracketThresholds(BaseModel):
    """Rank cut-offs deciding which bracket a team falls into."""

    winners_max_rank: int = Field(4, ge=1)
    losers_max_rank: int = Field(6, ge=1)

    @model_validator(mode="after")
    def check_order(self) -> "BracketThresholds":
        if self.losers_max_rank < self.winners_max_rank:
            raise ValueError("losers_max_rank must be >= winners_max_rank")
        return self

    def classify(self, rank: int) -> Classification:
        if rank <= self.winners_max_rank:
            return Classification.WINNERS
        if rank <= self.losers_max_rank:
            return Classification.LOSERS
        return Classification.ELIMINATED


class RankedStanding(BaseModel):
    """One row of the standings table."""

    team: Team
    wins: int
    losses: int
    rank: int
    classification: Classification

    @property
    def record(self) -> str:
        return f"{self.wins} - {self.losses}"
