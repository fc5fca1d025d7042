# tournament_store.py
"""
Persistence for active tournaments.

Tournaments are keyed by name: saving a tournament whose name already exists
overwrites the previous record. The dupla engine never touches storage;
callers receive a TournamentRepository and pass it in.
"""

import logging
import os
import pickle
from collections.abc import MutableMapping
from typing import Protocol
from urllib.parse import quote, unquote

from app_types import ActiveTournament
from constants import TOURNAMENTS_DIR
from exceptions import StorageError

logger = logging.getLogger("app.tournament_store")


class TournamentRepository(Protocol):
    """Key-value store of active tournaments, keyed by tournament name."""

    def save(self, tournament: ActiveTournament) -> None: ...

    def load(self, name: str) -> ActiveTournament | None: ...

    def clear(self, name: str) -> None: ...

    def list_tournaments(self) -> list[str]: ...


class FileTournamentStore:
    """Handles saving, loading, and clearing tournaments as pickle files."""

    def __init__(self, directory: str = TOURNAMENTS_DIR):
        self.directory = directory

    def _get_path(self, name: str) -> str:
        """Returns the file path for a given tournament name."""
        os.makedirs(self.directory, exist_ok=True)
        # Percent-encoded, so a "/" in the name cannot leave the directory
        return os.path.join(self.directory, f"{quote(name, safe='')}.pkl")

    def save(self, tournament: ActiveTournament) -> None:
        """Saves the tournament, overwriting any record with the same name.

        Raises:
            StorageError: If the file could not be written.
        """
        try:
            path = self._get_path(tournament.name)
            with open(path, "wb") as f:
                pickle.dump(tournament, f)
        except (OSError, pickle.PicklingError) as e:
            logger.exception(f"Failed to save tournament '{tournament.name}'")
            raise StorageError(f"Failed to save tournament '{tournament.name}'") from e
        logger.info(f"Tournament '{tournament.name}' saved")

    def load(self, name: str) -> ActiveTournament | None:
        """
        Loads a tournament by name if it exists.
        Returns the tournament or None.
        """
        path = self._get_path(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "rb") as f:
                tournament = pickle.load(f)
        except (pickle.UnpicklingError, EOFError, AttributeError):
            logger.warning(f"Failed to load tournament '{name}'. It might be corrupted.")
            os.remove(path)
            return None
        logger.info(f"Tournament '{name}' loaded")
        return tournament

    def clear(self, name: str) -> None:
        """Clears a tournament by deleting its file."""
        path = self._get_path(name)
        if os.path.exists(path):
            os.remove(path)
            logger.info(f"Tournament '{name}' cleared")

    def list_tournaments(self) -> list[str]:
        """Returns the names of all stored tournaments."""
        if not os.path.exists(self.directory):
            return []
        files = [f for f in os.listdir(self.directory) if f.endswith(".pkl")]
        return sorted(unquote(f[:-4]) for f in files)  # Remove .pkl extension


class MappingTournamentStore:
    """Keeps tournaments in any mutable mapping (a dict, Streamlit session state)."""

    def __init__(self, mapping: MutableMapping | None = None, key: str = "tournaments"):
        self._mapping = mapping if mapping is not None else {}
        self._key = key

    @property
    def _records(self) -> dict[str, ActiveTournament]:
        if self._key not in self._mapping:
            self._mapping[self._key] = {}
        return self._mapping[self._key]

    def save(self, tournament: ActiveTournament) -> None:
        self._records[tournament.name] = tournament

    def load(self, name: str) -> ActiveTournament | None:
        return self._records.get(name)

    def clear(self, name: str) -> None:
        self._records.pop(name, None)

    def list_tournaments(self) -> list[str]:
        return sorted(self._records)
