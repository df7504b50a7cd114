from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bracketboard.board.tournament import BoardSnapshot, TournamentBoard
from bracketboard.models.enums import CellState, Classification
from bracketboard.models.standing import RankedStanding

CLASSIFICATION_STYLES = {
    Classification.WINNERS: "bold green",
    Classification.LOSERS: "yellow",
    Classification.ELIMINATED: "dim red",
}

CELL_STYLES = {
    CellState.SELF: "on grey11",
    CellState.NONE: "",
    CellState.WIN: "bold white on green4",
    CellState.LOSS: "bold white on red3",
    CellState.PREDICTED_WIN: "italic green",
    CellState.PREDICTED_LOSS: "italic red",
}


class BoardRenderer:
    """Draws the board's standings, matrix and upcoming matches."""

    def __init__(self, board: TournamentBoard, console: Optional[Console] = None):
        self.board = board
        self.console = console or Console()

    def render(self, snapshot: Optional[BoardSnapshot] = None) -> None:
        snapshot = snapshot or self.board.snapshot
        self.console.print(
            Group(
                self.standings_table(snapshot.standings),
                self.matrix_table(snapshot),
                self.upcoming_panel(),
            )
        )

    def standings_table(self, standings: List[RankedStanding]) -> Table:
        table = Table(title="Standings")
        table.add_column("#", justify="center")
        table.add_column("Team")
        table.add_column("Record", justify="center")
        table.add_column("Bracket")
        for row in standings:
            table.add_row(
                str(row.rank),
                row.team.name,
                row.record,
                row.classification.value,
                style=CLASSIFICATION_STYLES[row.classification],
            )
        return table

    def matrix_table(self, snapshot: BoardSnapshot) -> Table:
        matrix = snapshot.matrix
        table = Table(title="Head to head", show_lines=True)
        table.add_column("")
        for team_id in matrix.team_ids:
            table.add_column(self._short_name(team_id), justify="center")
        for team_id, cells in zip(matrix.team_ids, matrix.rows):
            table.add_row(
                self._short_name(team_id),
                *(Text(cell.label, style=CELL_STYLES[cell.state]) for cell in cells),
            )
        return table

    def upcoming_panel(self) -> Panel:
        lines = []
        for index, match in self.board.upcoming():
            lines.append(
                Text.assemble(
                    f"[{index}] ",
                    self._pick_label(match.team1_id, match.predicted_winner_id),
                    " vs ",
                    self._pick_label(match.team2_id, match.predicted_winner_id),
                )
            )
        if not lines:
            lines.append(Text("No upcoming matches.", style="dim"))
        return Panel(
            Group(*lines),
            title="Upcoming matches",
            subtitle="<match> <team id> to pick, c to clear, q to quit",
        )

    def _pick_label(self, team_id: int, picked_id: Optional[int]) -> Text:
        team = self.board.team(team_id)
        name = f"{team.name} ({team_id})" if team else f"? ({team_id})"
        return Text(name, style="reverse" if team_id == picked_id else "")

    def _short_name(self, team_id: int) -> str:
        team = self.board.team(team_id)
        return team.name[:3].upper() if team else str(team_id)
