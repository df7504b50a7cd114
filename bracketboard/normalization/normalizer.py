from typing import Any, Dict, List, Tuple, Union

from loguru import logger
from pydantic import ValidationError

from bracketboard.models.match import Match
from bracketboard.models.prediction import CLEARED, UNSET, Predicted, Prediction
from bracketboard.models.team import Team

RawPayload = Union[Dict[str, Any], List[Dict[str, Any]]]

# Type alias for the output of normalization
NormalizedData = Tuple[List[Team], List[Match]]


class NormalizationError(Exception):
    """Custom exception for data normalization errors."""

    pass


class Normalizer:
    """Turns raw team/match payloads into typed models.

    Payloads are either wrapped (``{"teams": [...]}``, as in the JSON files)
    or bare lists of rows (as returned by Supabase).
    """

    def normalize(self, raw_teams: RawPayload, raw_matches: RawPayload) -> NormalizedData:
        teams = self.normalize_teams(raw_teams)
        matches = self.normalize_matches(raw_matches)
        logger.info(f"Normalized {len(teams)} teams and {len(matches)} matches.")
        return teams, matches

    def normalize_teams(self, raw: RawPayload) -> List[Team]:
        rows = self._unwrap(raw, "teams")
        teams = []
        for i, row in enumerate(rows):
            try:
                teams.append(Team.model_validate(row))
            except ValidationError as e:
                raise NormalizationError(f"Invalid team record #{i}: {e}") from e
        return teams

    def normalize_matches(self, raw: RawPayload) -> List[Match]:
        rows = self._unwrap(raw, "matches")
        matches = []
        for i, row in enumerate(rows):
            try:
                matches.append(
                    Match(
                        team1_id=row.get("team1_id"),
                        team2_id=row.get("team2_id"),
                        winner_id=row.get("winner_id"),
                        prediction=self._parse_prediction(row),
                    )
                )
            except (ValidationError, AttributeError) as e:
                raise NormalizationError(f"Invalid match record #{i}: {e}") from e
        return matches

    @staticmethod
    def _parse_prediction(row: Dict[str, Any]) -> Prediction:
        # Key absent -> never touched; explicit null -> cleared
        if "predicted_winner_id" not in row:
            return UNSET
        value = row["predicted_winner_id"]
        if value is None:
            return CLEARED
        return Predicted(team_id=value)

    @staticmethod
    def _unwrap(raw: RawPayload, key: str) -> List[Dict[str, Any]]:
        if isinstance(raw, dict):
            if key not in raw:
                raise NormalizationError(f"Payload has no '{key}' collection")
            raw = raw[key]
        if not isinstance(raw, list):
            raise NormalizationError(
                f"Expected a list of {key}, got {type(raw).__name__}"
            )
        return raw
