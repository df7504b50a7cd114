# bracketboard/models/team.py
from pydantic import BaseModel, ConfigDict


class Team(BaseModel):
    """A tournament participant. Immutable for the whole session."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    logo: str = ""
