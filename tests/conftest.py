# tests/conftest.py
import json

import pytest

from bracketboard.models.match import Match
from bracketboard.models.prediction import CLEARED, Predicted
from bracketboard.models.team import Team


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


def make_teams(*ids):
    return [Team(id=i, name=f"Team {i}", logo=f"logos/{i}.png") for i in ids]


def make_match(team1_id, team2_id, winner_id=None, predicted=...):
    """Builds a match; ``predicted`` left out means no prediction was ever made."""
    match = Match(team1_id=team1_id, team2_id=team2_id, winner_id=winner_id)
    if predicted is None:
        match.prediction = CLEARED
    elif predicted is not ...:
        match.prediction = Predicted(team_id=predicted)
    return match


@pytest.fixture
def four_teams():
    return make_teams(1, 2, 3, 4)


@pytest.fixture
def scenario_matches():
    """1 beat 2; 3 vs 4 still open with 3 picked to win."""
    return [make_match(1, 2, winner_id=1), make_match(3, 4, predicted=3)]


@pytest.fixture
def raw_teams():
    return {
        "teams": [
            {"id": 1, "name": "Falcons", "logo": "logos/falcons.png"},
            {"id": 2, "name": "Wolves", "logo": "logos/wolves.png"},
            {"id": 3, "name": "Titans", "logo": "logos/titans.png"},
        ]
    }


@pytest.fixture
def raw_matches():
    return {
        "matches": [
            {"team1_id": 1, "team2_id": 2, "winner_id": 1},
            {"team1_id": 2, "team2_id": 3, "winner_id": None},
            {"team1_id": 1, "team2_id": 3, "winner_id": None, "predicted_winner_id": 3},
        ]
    }


@pytest.fixture
def dataset_files(tmp_path, raw_teams, raw_matches):
    teams_path = tmp_path / "teams.json"
    matches_path = tmp_path / "matches.json"
    teams_path.write_text(json.dumps(raw_teams), encoding="utf-8")
    matches_path.write_text(json.dumps(raw_matches), encoding="utf-8")
    return teams_path, matches_path
