from typing import List

from pydantic import BaseModel

from .enums import CellState


class MatrixCell(BaseModel):
    """Head-to-head outcome seen from the row team's side."""

    row_team_id: int
    col_team_id: int
    state: CellState = CellState.NONE
    label: str = ""

    @property
    def is_predicted(self) -> bool:
        return self.state in (CellState.PREDICTED_WIN, CellState.PREDICTED_LOSS)


class MatchMatrix(BaseModel):
    """Square grid of cells; rows and columns share ``team_ids`` order."""

    team_ids: List[int]
    rows: List[List[MatrixCell]]

    def cell(self, row_team_id: int, col_team_id: int) -> MatrixCell:
        row = self.team_ids.index(row_team_id)
        col = self.team_ids.index(col_team_id)
        return self.rows[row][col]
