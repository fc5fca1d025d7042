# demo_data.py
import random
from datetime import date

from app_types import CategoryType, Position
from registration_logic import TournamentDraft

DEMO_CATEGORIES = [
    (CategoryType.VARONES, "3° Categoría"),
    (CategoryType.DAMAS, "Categoría A"),
    (CategoryType.MIXTO, "Mixto B"),
]

# First RUT number handed out to demo players
DEMO_RUT_START = 10000000


def fill_with_demo_data(
    draft: TournamentDraft,
    players_per_category: int = 12,
    rng: random.Random | None = None,
) -> TournamentDraft:
    """Resets the draft to a sample tournament with random playing positions."""
    rng = rng or random.Random()

    draft.name = "Torneo Random de Prueba"
    draft.date = date.today()
    draft.time = "14:30"
    draft.place = "Club Padel Masters"
    draft.categories = []
    draft.players = []
    draft.fixed_pairs = []

    number = 0
    for category_type, level in DEMO_CATEGORIES:
        category = draft.add_category(category_type, level)
        for _ in range(players_per_category):
            number += 1
            draft.add_player(
                name=f"Atleta {number}",
                rut=f"{DEMO_RUT_START + number}-{number % 10}",
                position=rng.choice(list(Position)),
                category_id=category.id,
            )
    return draft
