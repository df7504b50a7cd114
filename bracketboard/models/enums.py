from enum import Enum


class DataSource(str, Enum):
    FILE = "file"
    HTTP = "http"
    SUPABASE = "supabase"


class Classification(str, Enum):
    WINNERS = "winners"
    LOSERS = "losers"
    ELIMINATED = "eliminated"


class CellState(str, Enum):
    SELF = "SELF"  # Diagonal, a team against itself
    NONE = "NONE"
    WIN = "WIN"
    LOSS = "LOSS"
    PREDICTED_WIN = "PREDICTED_WIN"
    PREDICTED_LOSS = "PREDICTED_LOSS"
