from typing import Optional, Sequence

from loguru import logger

from bracketboard.models.enums import CellState
from bracketboard.models.match import Match
from bracketboard.models.matrix import MatchMatrix, MatrixCell
from bracketboard.models.prediction import Unset
from bracketboard.models.team import Team

from .outcome import effective_winner


def find_match(team_a: int, team_b: int, matches: Sequence[Match]) -> Optional[Match]:
    """First match between the two teams, whichever side each one is on."""
    return next((m for m in matches if m.connects(team_a, team_b)), None)


def resolve_cell(
    row_team_id: int, col_team_id: int, matches: Sequence[Match]
) -> MatrixCell:
    """Resolves one head-to-head cell from the row team's point of view."""
    cell = MatrixCell(row_team_id=row_team_id, col_team_id=col_team_id)
    if row_team_id == col_team_id:
        cell.state = CellState.SELF
        return cell

    match = find_match(row_team_id, col_team_id, matches)
    if match is None:
        return cell

    # A prediction only shows as such while the real result is unknown;
    # a decided match always displays its recorded winner.
    is_predicted = not isinstance(match.prediction, Unset) and not match.is_decided
    winner_id = effective_winner(match) if is_predicted else match.winner_id
    if winner_id is None:
        return cell
    if not match.involves(winner_id):
        logger.warning(
            f"Skipping {match.description}: winner {winner_id} is not a participant"
        )
        return cell

    if winner_id == row_team_id:
        cell.state = CellState.PREDICTED_WIN if is_predicted else CellState.WIN
        cell.label = "W"
    else:
        cell.state = CellState.PREDICTED_LOSS if is_predicted else CellState.LOSS
        cell.label = "L"
    return cell


def compute_matrix(teams: Sequence[Team], matches: Sequence[Match]) -> MatchMatrix:
    """Builds the full grid, rows and columns in ascending team id order."""
    team_ids = sorted(team.id for team in teams)
    rows = [
        [resolve_cell(row_id, col_id, matches) for col_id in team_ids]
        for row_id in team_ids
    ]
    return MatchMatrix(team_ids=team_ids, rows=rows)
