"""
Service layer for roster and result tables.

This module handles conversion between Player objects and pandas DataFrames
for the roster editor, CSV import, and the dupla/leftover tables shown on
the tournament page.
"""

import logging

import pandas as pd

from app_types import Category, CategoryResult, Player
from exceptions import ValidationError
from registration_logic import new_id

logger = logging.getLogger("app.roster_service")

ROSTER_COLUMNS = ["Player Name", "RUT", "Position", "Category"]


def _category_lookup(categories: list[Category]) -> dict[str, Category]:
    return {c.display_name: c for c in categories}


def create_roster_dataframe(
    players: list[Player], categories: list[Category]
) -> pd.DataFrame:
    """Creates a DataFrame for the roster editor from the player list."""
    names_by_id = {c.id: c.display_name for c in categories}
    return pd.DataFrame(
        {
            "#": range(1, len(players) + 1),
            "Player Name": [p.name for p in players],
            "RUT": [p.rut for p in players],
            "Position": [p.position.value for p in players],
            "Category": [names_by_id.get(p.category_id, "") for p in players],
            "player_id": [p.id for p in players],
        },
        columns=["#", *ROSTER_COLUMNS, "player_id"],
    )


def dataframe_to_players(
    edited_df: pd.DataFrame, categories: list[Category]
) -> list[Player]:
    """
    Converts an edited roster DataFrame into a list of Players.

    Rows without a name are dropped. New rows (no player_id) get a fresh id.
    Field contents are not validated here; TournamentDraft.replace_roster
    does that.

    Args:
        edited_df: DataFrame from the Streamlit data_editor or a CSV file
        categories: Categories of the draft, matched by display name

    Returns:
        List of Player objects in row order

    Raises:
        ValidationError: If a row names an unknown category.
    """
    lookup = _category_lookup(categories)
    players = []
    for _, row in edited_df.dropna(subset=["Player Name"]).iterrows():
        category_name = "" if pd.isna(row.get("Category")) else str(row["Category"]).strip()
        category = lookup.get(category_name)
        if category is None:
            raise ValidationError(
                f"Unknown category '{category_name}' for player {row['Player Name']}.",
                field="category_id",
            )

        player_id = row.get("player_id")
        player_id = new_id() if player_id is None or pd.isna(player_id) else str(player_id)
        rut = "" if pd.isna(row.get("RUT")) else str(row["RUT"]).strip()
        position = "" if pd.isna(row.get("Position")) else str(row["Position"]).strip().lower()

        players.append(
            Player(
                id=player_id,
                name=str(row["Player Name"]).strip(),
                rut=rut,
                position=position,
                category_id=category.id,
            )
        )
    return players


def read_roster_csv(file, categories: list[Category]) -> list[Player]:
    """
    Reads an uploaded roster CSV.

    Raises:
        ValidationError: If required columns are missing or a category is unknown.
    """
    df = pd.read_csv(file, dtype=str)
    missing = [col for col in ROSTER_COLUMNS if col not in df.columns]
    if missing:
        raise ValidationError(
            f"CSV must contain the following columns: {', '.join(ROSTER_COLUMNS)}"
        )
    players = dataframe_to_players(df, categories)
    logger.info(f"Read {len(players)} player(s) from CSV")
    return players


def create_duplas_dataframe(result: CategoryResult) -> pd.DataFrame:
    """Creates a DataFrame listing the duplas of a category."""
    return pd.DataFrame(
        {
            "#": range(1, len(result.duplas) + 1),
            "Dupla": [d.name for d in result.duplas],
            "Positions": [
                f"{d.players[0].position.value} / {d.players[1].position.value}"
                for d in result.duplas
            ],
            "dupla_id": [d.id for d in result.duplas],
        },
        columns=["#", "Dupla", "Positions", "dupla_id"],
    )


def create_leftovers_dataframe(result: CategoryResult) -> pd.DataFrame:
    """Creates a DataFrame listing the players left without a dupla."""
    return pd.DataFrame(
        {
            "Player Name": [p.name for p in result.leftover_players],
            "RUT": [p.rut for p in result.leftover_players],
            "Position": [p.position.value for p in result.leftover_players],
        },
        columns=["Player Name", "RUT", "Position"],
    )
