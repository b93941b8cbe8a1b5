"""File locations and table layouts for the flat-file stores."""

from pathlib import Path

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

ACCOUNT_DB_PATH: Path = Path("database.csv")
COUNTRY_CATALOG_PATH: Path = _DATA_DIR / "countries.csv"
MAPS_DIR: Path = _DATA_DIR / "maps"
FLAGS_DIR: Path = _DATA_DIR / "flags"

ACCOUNT_COLUMNS: tuple[str, ...] = (
    "user_name",
    "password",
    "num_games_played",
    "saved_game?",
    "accuracy_rate",
    "listOfCountry",
    "highScore",
)

CATALOG_COLUMNS: tuple[str, ...] = (
    "Country Name",
    "ID",
    "Continent Mode",
    "Continent Name",
    "Global Mode",
    "Micro Nation Mode",
    "Hints",
)

NO_SAVED_SESSION: str = "None"
