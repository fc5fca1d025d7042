import pytest

from app_types import CategoryType
from registration_logic import TournamentDraft
from tournament_store import MappingTournamentStore
from tests.utils import make_category, make_players


@pytest.fixture
def category():
    """Returns a single varones category."""
    return make_category()


@pytest.fixture
def sample_players(category):
    """Returns ten players of one category with mixed positions."""
    return make_players(drive=4, reves=3, ambos=3, category_id=category.id)


@pytest.fixture
def store():
    """Returns an empty in-memory tournament store."""
    return MappingTournamentStore({})


@pytest.fixture
def ready_draft():
    """Returns a draft that passes submission validation (two categories)."""
    from datetime import date

    draft = TournamentDraft(
        name="Padelazo de Verano",
        date=date(2026, 1, 15),
        time="09:30",
        place="Club Padel Masters",
    )
    varones = draft.add_category(CategoryType.VARONES, "3° Categoría")
    damas = draft.add_category(CategoryType.DAMAS, "Categoría A")

    for player in make_players(drive=3, reves=3, ambos=1, category_id=varones.id):
        draft.add_player(player.name, player.rut, player.position, varones.id)
    for player in make_players(ambos=4, category_id=damas.id, start=100):
        draft.add_player(player.name, player.rut, player.position, damas.id)
    return draft
