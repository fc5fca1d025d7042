# registration_logic.py
import datetime
import logging
import uuid
from dataclasses import dataclass, field

from app_types import Category, CategoryType, EntityId, Player, Position
from constants import MIN_PLAYERS_PER_CATEGORY
from exceptions import DuplicateCategoryError, DuplicateCredentialError, ValidationError
from validation import (
    validate_category_level,
    validate_category_type,
    validate_date,
    validate_place,
    validate_player_name,
    validate_position,
    validate_rut,
    validate_time,
    validate_tournament_name,
)

logger = logging.getLogger("app.registration_logic")

# Two player ids that must end up in the same dupla
PlayerIdPair = tuple[EntityId, EntityId]


def new_id() -> EntityId:
    return str(uuid.uuid4())


@dataclass
class TournamentDraft:
    """
    Holds the in-progress tournament registration form.
    This class only contains registration rules and no persistence code.

    Attributes:
        fixed_pairs: Pre-formed duplas, as pairs of player ids. These players
            are paired as given; everyone else goes through the dupla engine.
    """

    name: str = ""
    date: datetime.date | None = None
    time: str = ""
    place: str = ""
    categories: list[Category] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    fixed_pairs: list[PlayerIdPair] = field(default_factory=list)

    # --- Categories ---

    def get_category(self, category_id: EntityId) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def add_category(self, category_type: CategoryType | str, level: str) -> Category:
        """
        Adds a category to the draft.

        Raises:
            ValidationError: If the type or level is invalid.
            DuplicateCategoryError: If the (type, level) pair already exists.
        """
        category_type = validate_category_type(category_type)
        level = validate_category_level(level)

        if any(c.type == category_type and c.level == level for c in self.categories):
            raise DuplicateCategoryError(
                f"Category {category_type.value} - {level} already exists.", field="level"
            )

        category = Category(id=new_id(), type=category_type, level=level)
        self.categories.append(category)
        logger.info(f"Added category {category.display_name}")
        return category

    def remove_category(self, category_id: EntityId) -> bool:
        """Removes a category and every player registered in it."""
        category = self.get_category(category_id)
        if category is None:
            return False

        self.categories.remove(category)
        removed = [p for p in self.players if p.category_id == category_id]
        self.players = [p for p in self.players if p.category_id != category_id]
        self._drop_stale_pairs()
        logger.info(
            f"Removed category {category.display_name} and {len(removed)} player(s)"
        )
        return True

    # --- Players ---

    def get_player(self, player_id: EntityId) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def players_in_category(self, category_id: EntityId) -> list[Player]:
        return [p for p in self.players if p.category_id == category_id]

    def _check_player(
        self, name, rut, position, category_id, player_id, existing: list[Player]
    ) -> tuple[str, str, Position]:
        name = validate_player_name(name)
        rut = validate_rut(rut)
        position = validate_position(position)

        if self.get_category(category_id) is None:
            raise ValidationError("Player must be assigned to a category.", field="category_id")

        if any(p.rut == rut and p.category_id == category_id for p in existing):
            raise DuplicateCredentialError(
                f"RUT {rut} is already registered in this category.", field="rut"
            )

        if player_id and any(p.id == player_id for p in existing):
            raise ValidationError(
                f"Player id {player_id} is used by more than one player.", field="player_id"
            )
        return name, rut, position

    def add_player(
        self,
        name: str,
        rut: str,
        position: Position | str,
        category_id: EntityId,
        player_id: EntityId | None = None,
    ) -> Player:
        """
        Adds a player to a category.

        Raises:
            ValidationError: If a field is malformed, the category is unknown
                or the player id is already taken.
            DuplicateCredentialError: If the RUT is already in that category.
        """
        name, rut, position = self._check_player(
            name, rut, position, category_id, player_id, self.players
        )
        player = Player(
            id=player_id or new_id(),
            name=name,
            rut=rut,
            position=position,
            category_id=category_id,
        )
        self.players.append(player)
        return player

    def remove_player(self, player_id: EntityId) -> bool:
        player = self.get_player(player_id)
        if player is None:
            return False
        self.players.remove(player)
        self._drop_stale_pairs()
        return True

    def replace_roster(self, players: list[Player]) -> None:
        """
        Replaces the whole roster (e.g. from the data editor or a CSV upload).

        Every player is re-validated against the ones before it; the roster is
        left untouched if any of them fails. Pre-formed duplas whose players
        are gone, or changed category, are dropped.
        """
        accepted: list[Player] = []
        for player in players:
            name, rut, position = self._check_player(
                player.name,
                player.rut,
                player.position,
                player.category_id,
                player.id,
                accepted,
            )
            accepted.append(
                Player(
                    id=player.id or new_id(),
                    name=name,
                    rut=rut,
                    position=position,
                    category_id=player.category_id,
                )
            )
        self.players = accepted
        self._drop_stale_pairs()
        logger.info(f"Roster replaced with {len(accepted)} player(s)")

    # --- Pre-formed Duplas ---

    def paired_player_ids(self) -> set[EntityId]:
        return {player_id for pair in self.fixed_pairs for player_id in pair}

    def pair_players(self, player_id_1: EntityId, player_id_2: EntityId) -> PlayerIdPair:
        """
        Registers two players of the same category as a pre-formed dupla.

        Raises:
            ValidationError: If a player is unknown, both ids are the same player,
                they are in different categories, or one is already paired.
        """
        player_1 = self.get_player(player_id_1)
        player_2 = self.get_player(player_id_2)
        if player_1 is None or player_2 is None:
            raise ValidationError("Both players must be registered.", field="player_id")
        if player_1.id == player_2.id:
            raise ValidationError("A player cannot be paired with themselves.", field="player_id")
        if player_1.category_id != player_2.category_id:
            raise ValidationError(
                "Both players of a dupla must be in the same category.", field="category_id"
            )

        already_paired = self.paired_player_ids()
        for player in (player_1, player_2):
            if player.id in already_paired:
                raise ValidationError(
                    f"{player.name} is already in a pre-formed dupla.", field="player_id"
                )

        pair = (player_1.id, player_2.id)
        self.fixed_pairs.append(pair)
        logger.info(f"Pre-formed dupla {player_1.name} / {player_2.name}")
        return pair

    def unpair_player(self, player_id: EntityId) -> bool:
        """Dissolves the pre-formed dupla containing the player, if any."""
        for pair in self.fixed_pairs:
            if player_id in pair:
                self.fixed_pairs.remove(pair)
                return True
        return False

    def fixed_pairs_in_category(self, category_id: EntityId) -> list[PlayerIdPair]:
        category_ids = {p.id for p in self.players_in_category(category_id)}
        return [pair for pair in self.fixed_pairs if pair[0] in category_ids]

    def _drop_stale_pairs(self) -> None:
        players = {p.id: p for p in self.players}
        self.fixed_pairs = [
            (a, b)
            for a, b in self.fixed_pairs
            if a in players and b in players and players[a].category_id == players[b].category_id
        ]

    # --- Submission ---

    def validate_for_submission(self) -> None:
        """
        Checks the draft is ready to be turned into an active tournament.

        Raises:
            ValidationError: Listing every problem found, one per line.
        """
        errors = []
        for validator, value in (
            (validate_tournament_name, self.name),
            (validate_date, self.date),
            (validate_time, self.time),
            (validate_place, self.place),
        ):
            try:
                validator(value)
            except ValidationError as e:
                errors.append(str(e))

        if not self.categories:
            errors.append("The tournament needs at least one category.")

        for category in self.categories:
            count = len(self.players_in_category(category.id))
            if count < MIN_PLAYERS_PER_CATEGORY:
                errors.append(
                    f"Category {category.display_name} has {count} player(s); "
                    f"at least {MIN_PLAYERS_PER_CATEGORY} are needed to form a dupla."
                )

        if errors:
            raise ValidationError("\n".join(errors))
