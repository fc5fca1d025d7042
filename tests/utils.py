from collections import Counter

from app_types import Category, CategoryType, FormationResult, Player, Position

DEFAULT_CATEGORY_ID = "cat-1"


class NoShuffle:
    """Shuffler that keeps bucket order, so pairings are fully predictable."""

    def shuffle(self, x: list) -> None:
        pass


def make_category(
    category_id=DEFAULT_CATEGORY_ID, category_type=CategoryType.VARONES, level="3° Categoría"
):
    return Category(id=category_id, type=category_type, level=level)


def make_players(
    drive: int = 0,
    reves: int = 0,
    ambos: int = 0,
    category_id: str = DEFAULT_CATEGORY_ID,
    start: int = 1,
) -> list[Player]:
    """
    Generates players named D1.., R1.., A1.. by position, with unique RUTs.

    Args:
        drive: Number of drive players
        reves: Number of reves players
        ambos: Number of ambos players
        category_id: Category every player is registered in
        start: First RUT number offset (keeps RUTs unique across calls)

    Returns:
        List of Player objects (drive first, then reves, then ambos).
    """
    players = []
    number = start
    for position, count, prefix in (
        (Position.DRIVE, drive, "D"),
        (Position.REVES, reves, "R"),
        (Position.AMBOS, ambos, "A"),
    ):
        for i in range(1, count + 1):
            players.append(
                Player(
                    id=f"{prefix}{i}-{number}",
                    name=f"{prefix}{i}",
                    rut=f"{10000000 + number}-{number % 10}",
                    position=position,
                    category_id=category_id,
                )
            )
            number += 1
    return players


def assert_full_coverage(players: list[Player], result: FormationResult) -> None:
    """Every input player appears exactly once across duplas and leftovers."""
    placed = [p for dupla in result.duplas for p in dupla.players]
    placed.extend(result.leftovers)
    assert Counter(placed) == Counter(players)
    assert 2 * len(result.duplas) + len(result.leftovers) == len(players)
    assert len(result.leftovers) <= 1
