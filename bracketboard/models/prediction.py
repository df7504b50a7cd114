"""
Tagged variant for a user's predicted winner.

A match starts with no prediction at all (``Unset``). Once the user has
interacted with it, the prediction is either ``Predicted(team_id)`` or
``Cleared`` (the user deselected their pick, or cleared everything).
``Cleared`` still counts as a set prediction: it overrides the recorded
winner with "no winner".
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Unset(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unset"] = "unset"


class Cleared(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["cleared"] = "cleared"


class Predicted(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["predicted"] = "predicted"
    team_id: int


Prediction = Annotated[Union[Unset, Cleared, Predicted], Field(discriminator="kind")]

UNSET = Unset()
CLEARED = Cleared()
