"""Achievement badges."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from domain.common import (
    MatchRecord,
    Player,
    SetScore,
    is_on_first_side,
    is_player_in_match,
    match_sets,
    player_won_match,
    score_for_side,
)
from domain.stats.aggregator import PlayerStats

RIVAL_MATCH_THRESHOLD = 10
COMEBACK_MIN_SETS = 3

ThresholdCheck = Callable[[PlayerStats, int], bool]


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    icon: str
    check: ThresholdCheck | None = None


@dataclass(frozen=True)
class Achievement:
    id: str
    icon: str
    unlocked: bool


ACHIEVEMENT_DEFINITIONS: tuple[AchievementDefinition, ...] = (
    AchievementDefinition("first_win", "\U0001F3C6", lambda stats, _: stats.wins >= 1),
    AchievementDefinition("getting_started", "\U0001F3C5", lambda stats, _: stats.wins >= 5),
    AchievementDefinition("champion", "\U0001F451", lambda stats, _: stats.wins >= 25),
    AchievementDefinition("legend", "⭐", lambda stats, _: stats.wins >= 50),
    AchievementDefinition("on_fire", "\U0001F525", lambda stats, _: stats.streak >= 5),
    AchievementDefinition("unstoppable", "⚡", lambda stats, _: stats.streak >= 10),
    AchievementDefinition("rising_star", "\U0001F31F", lambda _, elo: elo >= 1300),
    AchievementDefinition("elite", "\U0001F48E", lambda _, elo: elo >= 1500),
    AchievementDefinition("dedicated", "\U0001F3D3", lambda stats, _: stats.total_matches >= 25),
    AchievementDefinition("century", "\U0001F4AF", lambda stats, _: stats.total_matches >= 100),
    AchievementDefinition("comeback_king", "\U0001F451"),
    AchievementDefinition("clean_sweep", "\U0001F9F9"),
    AchievementDefinition("rival", "⚔️"),
)


def has_comeback(player_id: str, player_matches: Iterable[MatchRecord]) -> bool:
    """Won a match of three or more sets after losing both of the first two."""
    for match in player_matches:
        sets = match_sets(match)
        if len(sets) < COMEBACK_MIN_SETS or not player_won_match(match, player_id):
            continue
        first_side = is_on_first_side(match, player_id)
        if all(_lost_set(score, first_side) for score in sets[:2]):
            return True
    return False


def has_clean_sweep(player_id: str, player_matches: Iterable[MatchRecord]) -> bool:
    """Won a match where every set finished 11-0."""
    for match in player_matches:
        sets = match_sets(match)
        if not sets or not player_won_match(match, player_id):
            continue
        first_side = is_on_first_side(match, player_id)
        if all(score_for_side(score, first_side) == (11, 0) for score in sets):
            return True
    return False


def has_rival(
    player_id: str,
    all_matches: Iterable[MatchRecord],
    all_players: Sequence[Player],
) -> bool:
    """Shared at least ten matches, in any seat, with one other known player."""
    known_ids = {player.id for player in all_players if player.id != player_id}
    shared_counts: Counter[str] = Counter()
    for match in all_matches:
        if not is_player_in_match(match, player_id):
            continue
        for other_id in set(match.participant_ids) & known_ids:
            shared_counts[other_id] += 1
    return any(count >= RIVAL_MATCH_THRESHOLD for count in shared_counts.values())


def compute_achievements(
    player_id: str,
    stats: PlayerStats,
    elo_rating: int,
    all_matches: Sequence[MatchRecord],
    all_players: Sequence[Player],
) -> list[Achievement]:
    player_matches = [match for match in all_matches if is_player_in_match(match, player_id)]

    achievements: list[Achievement] = []
    for definition in ACHIEVEMENT_DEFINITIONS:
        if definition.id == "comeback_king":
            unlocked = has_comeback(player_id, player_matches)
        elif definition.id == "clean_sweep":
            unlocked = has_clean_sweep(player_id, player_matches)
        elif definition.id == "rival":
            unlocked = has_rival(player_id, player_matches, all_players)
        elif definition.check is not None:
            unlocked = definition.check(stats, elo_rating)
        else:
            raise ValueError(f"achievement {definition.id!r} has no evaluation rule")
        achievements.append(Achievement(id=definition.id, icon=definition.icon, unlocked=unlocked))
    return achievements


def _lost_set(score: SetScore, first_side: bool) -> bool:
    mine, theirs = score_for_side(score, first_side)
    return mine < theirs
