from typing import Dict, Iterable, List, Optional, Sequence

from loguru import logger

from bracketboard.config.settings import settings
from bracketboard.models.match import Match
from bracketboard.models.standing import BracketThresholds, RankedStanding, TeamRecord
from bracketboard.models.team import Team

from .outcome import effective_winner


def aggregate(teams: Iterable[Team], matches: Iterable[Match]) -> Dict[int, TeamRecord]:
    """Folds the effective winner of every match into per-team tallies.

    Matches pointing at unknown teams, or whose winner is not one of the two
    participants, are skipped so one bad record cannot break the table.
    """
    records: Dict[int, TeamRecord] = {team.id: TeamRecord() for team in teams}

    for match in matches:
        winner_id = effective_winner(match)
        if winner_id is None:
            continue

        if match.team1_id not in records or match.team2_id not in records:
            logger.warning(f"Skipping {match.description}: unknown team id")
            continue
        if not match.involves(winner_id):
            logger.warning(
                f"Skipping {match.description}: winner {winner_id} is not a participant"
            )
            continue

        records[winner_id].wins += 1
        records[match.opponent_of(winner_id)].losses += 1

    return records


def rank(
    standings: Dict[int, TeamRecord],
    teams: Dict[int, Team],
    thresholds: Optional[BracketThresholds] = None,
) -> List[RankedStanding]:
    """Sorts tallies and assigns competition ranks ("1224") and brackets.

    ``sorted`` is stable, so teams with identical records stay in the order
    they appear in ``standings``. Ids missing from ``teams`` are skipped.
    """
    thresholds = thresholds or default_thresholds()
    known = []
    for team_id, record in standings.items():
        if team_id not in teams:
            logger.warning(f"Skipping standings for unknown team {team_id}")
            continue
        known.append((team_id, record))
    ordered = sorted(known, key=lambda item: item[1].sort_key)

    ranked: List[RankedStanding] = []
    current_rank = 0
    previous: Optional[TeamRecord] = None
    for position, (team_id, record) in enumerate(ordered, start=1):
        if previous is None or record.sort_key != previous.sort_key:
            current_rank = position
        ranked.append(
            RankedStanding(
                team=teams[team_id],
                wins=record.wins,
                losses=record.losses,
                rank=current_rank,
                classification=thresholds.classify(current_rank),
            )
        )
        previous = record

    return ranked


def compute_standings(
    teams: Sequence[Team],
    matches: Sequence[Match],
    thresholds: Optional[BracketThresholds] = None,
) -> List[RankedStanding]:
    """Aggregate then rank; the full standings pipeline."""
    records = aggregate(teams, matches)
    return rank(records, {team.id: team for team in teams}, thresholds)


def default_thresholds() -> BracketThresholds:
    return BracketThresholds(
        winners_max_rank=settings.winners_max_rank,
        losers_max_rank=settings.losers_max_rank,
    )
