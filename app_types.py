# app_types.py
"""
Type aliases and data classes for the Padel Duplas app.

This module defines the shared domain types used by the registration layer,
the dupla formation engine and the tournament store.
"""

from dataclasses import dataclass, field
import datetime
from enum import Enum

# =============================================================================
# Basic Type Aliases
# =============================================================================


class Position(str, Enum):
    """Declared playing side of a player."""

    DRIVE = "drive"
    REVES = "reves"
    AMBOS = "ambos"


class CategoryType(str, Enum):
    """Coarse competition type of a category."""

    VARONES = "varones"
    DAMAS = "damas"
    MIXTO = "mixto"


# Stable identifier of a player or category (uuid string)
EntityId = str

# National-id-like player credential, e.g. "12345678-9"
Rut = str

# Order-independent team identifier derived from two ruts
DuplaId = str


# =============================================================================
# Registration Data Classes
# =============================================================================


@dataclass(frozen=True)
class Player:
    """A registered player.

    Attributes:
        id: Stable identifier
        name: Display name
        rut: Credential, unique within a category
        position: Preferred playing side
        category_id: Category the player is registered in
    """

    id: EntityId
    name: str
    rut: Rut
    position: Position
    category_id: EntityId


@dataclass(frozen=True)
class Category:
    """A (type, level) bucket of a tournament."""

    id: EntityId
    type: CategoryType
    level: str

    @property
    def display_name(self) -> str:
        return f"{self.type.value} - {self.level}"


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass(frozen=True)
class Dupla:
    """A two-player team.

    Attributes:
        id: Derived from the sorted member ruts
        players: The two members, in pairing order
        name: "{player1} / {player2}" in pairing order
    """

    id: DuplaId
    players: tuple[Player, Player]
    name: str

    @property
    def member_ruts(self) -> tuple[Rut, Rut]:
        return (self.players[0].rut, self.players[1].rut)


@dataclass(frozen=True)
class FormationResult:
    """Output of one dupla formation run.

    Attributes:
        duplas: Teams in the order they were paired
        leftovers: Unpaired players (at most one)
    """

    duplas: tuple[Dupla, ...]
    leftovers: tuple[Player, ...]


@dataclass(frozen=True)
class CategoryResult:
    """A category together with its generated duplas.

    Attributes:
        preformed_dupla_ids: Ids of the duplas that were registered as
            pre-formed rather than paired by the engine
    """

    category: Category
    duplas: tuple[Dupla, ...]
    leftover_players: tuple[Player, ...]
    total_players: int
    preformed_dupla_ids: tuple[DuplaId, ...] = ()


@dataclass(frozen=True)
class ActiveTournament:
    """Snapshot of a submitted tournament handed to the fixture generator.

    Attributes:
        name: Tournament name, used as the storage key
        date: Day the tournament is played
        time: Start time as "HH:MM"
        place: Venue
        categories: One result per category, in registration order
        num_courts: Suggested number of courts (fixture generator default)
        match_duration: Default match duration in minutes
        play_third_place: Whether a third-place match is played
    """

    name: str
    date: datetime.date
    time: str
    place: str
    categories: tuple[CategoryResult, ...] = field(default_factory=tuple)
    num_courts: int = 2
    match_duration: int = 60
    play_third_place: bool = True

    @property
    def total_duplas(self) -> int:
        return sum(len(result.duplas) for result in self.categories)

    def get_category_result(self, category_id: EntityId) -> CategoryResult | None:
        for result in self.categories:
            if result.category.id == category_id:
                return result
        return None
