"""
Tests for roster table conversions.

These tests verify the behavior of processing roster data from the UI
editor and from uploaded CSV files.
"""

import io

import pandas as pd
import pytest

from app_types import CategoryType, Position
from exceptions import ValidationError
from registration_logic import TournamentDraft
from roster_service import (
    create_duplas_dataframe,
    create_leftovers_dataframe,
    create_roster_dataframe,
    dataframe_to_players,
    read_roster_csv,
)
from tournament_service import generate_category_result
from tests.utils import NoShuffle, make_players


@pytest.fixture
def draft():
    draft = TournamentDraft()
    draft.add_category(CategoryType.VARONES, "3° Categoría")
    draft.add_category(CategoryType.DAMAS, "Categoría A")
    return draft


class TestRosterEditor:
    """Tests for processing roster data from the editor."""

    def test_roster_dataframe_round_trips_existing_players(self, draft):
        varones, damas = draft.categories
        draft.add_player("Juan", "12345678-9", "drive", varones.id)
        draft.add_player("Ana", "11111111-K", "ambos", damas.id)

        df = create_roster_dataframe(draft.players, draft.categories)
        assert list(df["Category"]) == ["varones - 3° Categoría", "damas - Categoría A"]

        players = dataframe_to_players(df, draft.categories)
        assert players == draft.players

    def test_new_row_gets_an_id_and_is_validated_by_the_draft(self, draft):
        varones = draft.categories[0]
        df = create_roster_dataframe([], draft.categories)

        # Simulate: user adds a row via data_editor (hidden player_id left empty)
        new_row = pd.DataFrame(
            [
                {
                    "#": 1,
                    "Player Name": "NewPlayer",
                    "RUT": "7654321-k",
                    "Position": "Reves",
                    "Category": varones.display_name,
                    "player_id": None,
                }
            ]
        )
        edited_df = pd.concat([df, new_row], ignore_index=True)

        players = dataframe_to_players(edited_df, draft.categories)
        draft.replace_roster(players)

        (player,) = draft.players
        assert player.id
        assert player.name == "NewPlayer"
        assert player.rut == "7654321-K"
        assert player.position is Position.REVES
        assert player.category_id == varones.id

    def test_rows_without_name_are_dropped(self, draft):
        df = pd.DataFrame(
            {
                "Player Name": [None, "Pedro"],
                "RUT": ["11111111-1", "22222222-2"],
                "Position": ["drive", "drive"],
                "Category": [draft.categories[0].display_name] * 2,
            }
        )

        players = dataframe_to_players(df, draft.categories)

        assert [p.name for p in players] == ["Pedro"]

    def test_unknown_category_is_rejected(self, draft):
        df = pd.DataFrame(
            {
                "Player Name": ["Pedro"],
                "RUT": ["22222222-2"],
                "Position": ["drive"],
                "Category": ["mixto - Mixto Z"],
            }
        )

        with pytest.raises(ValidationError) as exc_info:
            dataframe_to_players(df, draft.categories)

        assert exc_info.value.field == "category_id"

    def test_copied_row_with_same_player_id_is_rejected(self, draft):
        varones = draft.categories[0]
        draft.add_player("Juan", "12345678-9", "drive", varones.id)
        df = create_roster_dataframe(draft.players, draft.categories)

        # Copy-pasting a row in the editor carries the hidden player_id along
        copied = df.iloc[[0]].assign(**{"Player Name": "Pedro", "RUT": "11111111-1"})
        edited_df = pd.concat([df, copied], ignore_index=True)

        with pytest.raises(ValidationError) as exc_info:
            draft.replace_roster(dataframe_to_players(edited_df, draft.categories))

        assert exc_info.value.field == "player_id"
        assert [p.name for p in draft.players] == ["Juan"]


class TestRosterCsv:
    def test_read_roster_csv(self, draft):
        csv = io.StringIO(
            "Player Name,RUT,Position,Category\n"
            "Juan,12345678-9,drive,varones - 3° Categoría\n"
            "Ana,11111111-1,reves,damas - Categoría A\n"
        )

        players = read_roster_csv(csv, draft.categories)

        assert [(p.name, p.rut, p.position) for p in players] == [
            ("Juan", "12345678-9", "drive"),
            ("Ana", "11111111-1", "reves"),
        ]
        assert players[1].category_id == draft.categories[1].id

    def test_read_roster_csv_requires_columns(self, draft):
        csv = io.StringIO("Player Name,RUT\nJuan,12345678-9\n")

        with pytest.raises(ValidationError, match="CSV must contain"):
            read_roster_csv(csv, draft.categories)


class TestResultTables:
    def test_duplas_and_leftovers_tables(self, category):
        players = make_players(drive=2, reves=1, category_id=category.id)
        result = generate_category_result(category, players, shuffler=NoShuffle())

        duplas_df = create_duplas_dataframe(result)
        leftovers_df = create_leftovers_dataframe(result)

        assert list(duplas_df["Dupla"]) == ["R1 / D1"]
        assert list(duplas_df["Positions"]) == ["reves / drive"]
        assert list(leftovers_df["Player Name"]) == ["D2"]
        assert list(leftovers_df["Position"]) == ["drive"]

    def test_empty_result_tables_keep_columns(self, category):
        result = generate_category_result(category, [])

        assert create_duplas_dataframe(result).empty
        assert list(create_leftovers_dataframe(result).columns) == [
            "Player Name",
            "RUT",
            "Position",
        ]
