"""
Service layer for orchestrating tournament operations that involve both
the dupla engine and the tournament store.

This module sits between the UI (pages) and the lower-level logic/storage modules,
ensuring that business rules are applied consistently regardless of where
the operation is initiated (UI or Tests).
"""

import dataclasses
import logging
from typing import Iterable

from app_types import ActiveTournament, Category, CategoryResult, Dupla, EntityId, Player
from constants import (
    COURTS_ABOVE_THRESHOLD,
    COURTS_AT_OR_BELOW_THRESHOLD,
    COURTS_DUPLA_THRESHOLD,
    DEFAULT_MATCH_DURATION,
    DEFAULT_PLAY_THIRD_PLACE,
)
from dupla_engine import Shuffler, form_duplas, make_dupla
from exceptions import TournamentError
from registration_logic import PlayerIdPair, TournamentDraft
from tournament_store import TournamentRepository

logger = logging.getLogger("app.tournament_service")


def generate_category_result(
    category: Category,
    players: Iterable[Player],
    shuffler: Shuffler | None = None,
    fixed_pairs: Iterable[PlayerIdPair] = (),
) -> CategoryResult:
    """
    Runs the dupla engine for one category.

    Pre-formed duplas are kept as given and listed first; the engine only
    pairs the remaining players.

    Args:
        category: The category to generate duplas for
        players: Any roster; only players of this category are considered
        shuffler: Optional randomness source passed to the engine
        fixed_pairs: Player id pairs that must stay together. Pairs whose
            players are not both in this category are ignored.

    Returns:
        A fresh CategoryResult derived from the given roster.
    """
    category_players = [p for p in players if p.category_id == category.id]
    by_id = {p.id: p for p in category_players}

    preformed: list[Dupla] = []
    paired_ids: set[EntityId] = set()
    for id_1, id_2 in fixed_pairs:
        if id_1 not in by_id or id_2 not in by_id or id_1 == id_2:
            continue
        if id_1 in paired_ids or id_2 in paired_ids:
            continue
        preformed.append(make_dupla(by_id[id_1], by_id[id_2]))
        paired_ids.update((id_1, id_2))

    remaining = [p for p in category_players if p.id not in paired_ids]
    formation = form_duplas(remaining, shuffler=shuffler)
    duplas = tuple(preformed) + formation.duplas

    if formation.leftovers:
        logger.info(
            f"Category {category.display_name}: {len(duplas)} dupla(s) "
            f"({len(preformed)} pre-formed), "
            f"leftover {', '.join(p.name for p in formation.leftovers)}"
        )
    else:
        logger.info(
            f"Category {category.display_name}: {len(duplas)} dupla(s) "
            f"({len(preformed)} pre-formed)"
        )

    return CategoryResult(
        category=category,
        duplas=duplas,
        leftover_players=formation.leftovers,
        total_players=len(category_players),
        preformed_dupla_ids=tuple(d.id for d in preformed),
    )


def suggest_num_courts(total_duplas: int) -> int:
    """Default court count handed to the fixture generator."""
    if total_duplas > COURTS_DUPLA_THRESHOLD:
        return COURTS_ABOVE_THRESHOLD
    return COURTS_AT_OR_BELOW_THRESHOLD


def submit_tournament(
    draft: TournamentDraft,
    store: TournamentRepository,
    shuffler: Shuffler | None = None,
) -> ActiveTournament:
    """
    Turns a registration draft into an active tournament:
    1. Validates the draft
    2. Generates duplas for every category
    3. Applies fixture defaults
    4. Saves the snapshot to the store

    Returns:
        The saved ActiveTournament.

    Raises:
        ValidationError: If the draft is not ready for submission.
        StorageError: If saving fails.
    """
    # 1. Validate
    draft.validate_for_submission()

    # 2. Generate duplas per category
    results = tuple(
        generate_category_result(
            category, draft.players, shuffler, draft.fixed_pairs_in_category(category.id)
        )
        for category in draft.categories
    )

    # 3. Build snapshot
    total_duplas = sum(len(r.duplas) for r in results)
    tournament = ActiveTournament(
        name=draft.name.strip(),
        date=draft.date,
        time=draft.time.strip(),
        place=draft.place.strip(),
        categories=results,
        num_courts=suggest_num_courts(total_duplas),
        match_duration=DEFAULT_MATCH_DURATION,
        play_third_place=DEFAULT_PLAY_THIRD_PLACE,
    )

    # 4. Persist
    if tournament.name in store.list_tournaments():
        logger.info(f"Overwriting existing tournament '{tournament.name}'")
    store.save(tournament)
    logger.info(
        f"Tournament '{tournament.name}' registered with "
        f"{len(results)} categor(ies) and {total_duplas} dupla(s)"
    )

    return tournament


def regenerate_category(
    tournament: ActiveTournament,
    category_id: EntityId,
    players: Iterable[Player],
    store: TournamentRepository,
    shuffler: Shuffler | None = None,
    fixed_pairs: Iterable[PlayerIdPair] = (),
) -> ActiveTournament:
    """
    Re-derives one category's duplas from scratch and saves a new snapshot.

    Args:
        tournament: The current snapshot
        category_id: Category to regenerate
        players: Current roster of that category
        store: Where the new snapshot is saved
        shuffler: Optional randomness source
        fixed_pairs: Pre-formed duplas to keep, as player id pairs

    Raises:
        TournamentError: If the category is not part of the tournament.
        StorageError: If saving fails.
    """
    current = tournament.get_category_result(category_id)
    if current is None:
        raise TournamentError(
            f"Category '{category_id}' is not part of tournament '{tournament.name}'"
        )

    new_result = generate_category_result(current.category, players, shuffler, fixed_pairs)
    categories = tuple(
        new_result if r.category.id == category_id else r for r in tournament.categories
    )
    updated = dataclasses.replace(tournament, categories=categories)

    store.save(updated)
    return updated


def roster_from_tournament(tournament: ActiveTournament, category_id: EntityId) -> list[Player]:
    """All players a category was generated from (dupla members and leftovers)."""
    result = tournament.get_category_result(category_id)
    if result is None:
        return []
    players = [p for dupla in result.duplas for p in dupla.players]
    players.extend(result.leftover_players)
    return players


def fixed_pairs_from_tournament(
    tournament: ActiveTournament, category_id: EntityId
) -> list[PlayerIdPair]:
    """The pre-formed duplas of a category, as player id pairs."""
    result = tournament.get_category_result(category_id)
    if result is None:
        return []
    preformed = set(result.preformed_dupla_ids)
    return [
        (dupla.players[0].id, dupla.players[1].id)
        for dupla in result.duplas
        if dupla.id in preformed
    ]


# =============================================================================
# Consumer records
# =============================================================================


def player_to_record(player: Player) -> dict:
    return {
        "id": player.id,
        "name": player.name,
        "rut": player.rut,
        "position": player.position.value,
        "categoryId": player.category_id,
    }


def dupla_to_record(dupla: Dupla) -> dict:
    return {
        "id": dupla.id,
        "memberCredentials": list(dupla.member_ruts),
        "displayName": dupla.name,
    }


def category_result_to_record(result: CategoryResult) -> dict:
    """Per-category record consumed by the fixture generator."""
    return {
        "categoryId": result.category.id,
        "categoryType": result.category.type.value,
        "categoryLevel": result.category.level,
        "duplas": [dupla_to_record(d) for d in result.duplas],
        "leftoverPlayers": [player_to_record(p) for p in result.leftover_players],
        "totalPlayerCount": result.total_players,
    }


def tournament_to_record(tournament: ActiveTournament) -> dict:
    """Aggregate record handed to the fixture generator (JSON-serializable)."""
    return {
        "tournamentName": tournament.name,
        "date": tournament.date.isoformat(),
        "time": tournament.time,
        "place": tournament.place,
        "categoriesWithDuplas": [
            category_result_to_record(r) for r in tournament.categories
        ],
        "numCourts": tournament.num_courts,
        "matchDuration": tournament.match_duration,
        "playThirdPlace": tournament.play_third_place,
    }
