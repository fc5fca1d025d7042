# dupla_engine.py
"""
Dupla formation engine.

Partitions one category's players into two-person teams by declared playing
side. Players are bucketed into drive, reves and ambos, each bucket is
shuffled, and the buckets are drained in a fixed order of passes:

    1. reves x drive
    2. reves x ambos
    3. drive x ambos
    4. ambos x ambos, reves x reves, drive x drive

Cross passes run first so that at most one bucket is non-empty when the
same-side passes start, which leaves at most one player unpaired.
"""

import logging
import random
from collections import deque
from typing import Iterable, Protocol

from app_types import Dupla, FormationResult, Player, Position, Rut
from constants import DUPLA_ID_SEPARATOR, DUPLA_NAME_SEPARATOR
from logger import log_formation_debug

logger = logging.getLogger("app.dupla_engine")

# Cross passes in priority order, as (first bucket, second bucket)
CROSS_PASSES = (
    (Position.REVES, Position.DRIVE),
    (Position.REVES, Position.AMBOS),
    (Position.DRIVE, Position.AMBOS),
)

SAME_SIDE_PASSES = (Position.AMBOS, Position.REVES, Position.DRIVE)

LEFTOVER_ORDER = (Position.DRIVE, Position.REVES, Position.AMBOS)


class Shuffler(Protocol):
    """Anything that shuffles a list in place (random.Random satisfies this)."""

    def shuffle(self, x: list) -> None: ...


def make_dupla_id(rut_a: Rut, rut_b: Rut) -> str:
    """Returns the team id for two ruts, independent of their order."""
    return DUPLA_ID_SEPARATOR.join(sorted((rut_a, rut_b)))


def _build_dupla(player_1: Player, player_2: Player) -> Dupla:
    return Dupla(
        id=make_dupla_id(player_1.rut, player_2.rut),
        players=(player_1, player_2),
        name=f"{player_1.name}{DUPLA_NAME_SEPARATOR}{player_2.name}",
    )


def make_dupla(player_1: Player, player_2: Player) -> Dupla:
    """Builds a Dupla, keeping the pairing order for the display name.

    Raises:
        ValueError: If both arguments are the same player.
    """
    if player_1.id == player_2.id:
        raise ValueError(f"A player cannot be paired with themselves: {player_1.name}")
    return _build_dupla(player_1, player_2)


def _build_buckets(
    players: Iterable[Player], shuffler: Shuffler
) -> dict[Position, deque[Player]]:
    """Splits players by position into independently shuffled, owned buckets."""
    grouped: dict[Position, list[Player]] = {position: [] for position in Position}
    for player in players:
        grouped[Position(player.position)].append(player)

    buckets = {}
    for position, members in grouped.items():
        shuffler.shuffle(members)
        buckets[position] = deque(members)
    return buckets


def form_duplas(
    players: Iterable[Player], shuffler: Shuffler | None = None
) -> FormationResult:
    """
    Pairs a category's players into duplas.

    The function is total: any number of players, with any mix of positions,
    yields a result. Every player ends up in exactly one dupla or in the
    leftovers, and there is at most one leftover.

    Args:
        players: Players of a single category (callers filter by category)
        shuffler: Randomness source; a fresh random.Random() when omitted

    Returns:
        FormationResult with duplas in pairing order and the leftover players
        in drive, reves, ambos order.
    """
    if shuffler is None:
        shuffler = random.Random()

    buckets = _build_buckets(players, shuffler)
    bucket_sizes = {position.value: len(bucket) for position, bucket in buckets.items()}

    duplas: list[Dupla] = []
    pass_counts: dict[str, int] = {}

    for first, second in CROSS_PASSES:
        first_bucket, second_bucket = buckets[first], buckets[second]
        formed = 0
        while first_bucket and second_bucket:
            duplas.append(_build_dupla(first_bucket.popleft(), second_bucket.popleft()))
            formed += 1
        pass_counts[f"{first.value}-{second.value}"] = formed

    for position in SAME_SIDE_PASSES:
        bucket = buckets[position]
        formed = 0
        while len(bucket) >= 2:
            duplas.append(_build_dupla(bucket.popleft(), bucket.popleft()))
            formed += 1
        pass_counts[f"{position.value}-{position.value}"] = formed

    leftovers = tuple(buckets[position].popleft() for position in LEFTOVER_ORDER if buckets[position])

    log_formation_debug(
        logger,
        bucket_sizes=bucket_sizes,
        num_duplas=len(duplas),
        num_leftovers=len(leftovers),
        pass_counts=pass_counts,
    )

    return FormationResult(duplas=tuple(duplas), leftovers=leftovers)
