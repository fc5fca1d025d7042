import os

from app_types import CategoryType

# Category level menus, per category type
CATEGORY_OPTIONS = {
    CategoryType.VARONES: ["1° Categoría", "2° Categoría", "3° Categoría", "4° Categoría", "5° Categoría", "6° Categoría"],
    CategoryType.DAMAS: ["Categoría A", "Categoría B", "Categoría C", "Categoría D", "Damas Iniciación"],
    CategoryType.MIXTO: ["Mixto A", "Mixto B", "Mixto C", "Mixto D", "Mixto Iniciación"],
}

# Dupla Constants
# RUTs only contain digits, "-" and "K", so "_" never appears inside one
DUPLA_ID_SEPARATOR = "_"
DUPLA_NAME_SEPARATOR = " / "

# Validation Constants
MIN_PLAYER_NAME_LENGTH = 2
MIN_TOURNAMENT_NAME_LENGTH = 3
MIN_PLACE_LENGTH = 3
MIN_PLAYERS_PER_CATEGORY = 2
RUT_PATTERN = r"^\d{7,8}-[\dkK]$"
TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"

# Fixture Defaults (consumed by the fixture generator, not computed here)
DEFAULT_MATCH_DURATION = 60
DEFAULT_PLAY_THIRD_PLACE = True
COURTS_DUPLA_THRESHOLD = 5
COURTS_ABOVE_THRESHOLD = 4
COURTS_AT_OR_BELOW_THRESHOLD = 2

# Storage Constants
TOURNAMENTS_DIR = os.environ.get("PADEL_TOURNAMENTS_DIR", "tournaments")

# Logging
DEFAULT_LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
