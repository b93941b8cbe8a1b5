"""Read-only lookups against the country catalog CSV."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from geocraft.constants.data_constants import COUNTRY_CATALOG_PATH
from geocraft.core.models import Country, GameMode

logger = logging.getLogger(__name__)

_NAME_COLUMN = "Country Name"
_CONTINENT_COLUMN = "Continent Name"
_YES = "yes"

_FLAG_COLUMNS: dict[GameMode, str] = {
    GameMode.GLOBAL: "Global Mode",
    GameMode.CONTINENTAL: "Continent Mode",
    GameMode.MICRO_NATION: "Micro Nation Mode",
}


class CountryCatalog:
    """Parses the catalog on every query; the table is small and static."""

    def __init__(self, path: Path = COUNTRY_CATALOG_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def list_all(self) -> list[Country]:
        return [_row_to_country(row) for row in self._read_rows()]

    def filter_by_mode(self, mode: GameMode | str) -> list[Country]:
        """Return rows whose flag column for ``mode`` reads "yes"."""
        column = _FLAG_COLUMNS[GameMode(mode)]
        return [
            _row_to_country(row)
            for row in self._read_rows()
            if _is_yes(row.get(column))
        ]

    def filter_by_continent_mode(self, continent: str) -> list[Country]:
        """Return continental-mode countries located on ``continent``."""
        wanted = continent.strip().casefold()
        return [
            _row_to_country(row)
            for row in self._read_rows()
            if _is_yes(row.get(_FLAG_COLUMNS[GameMode.CONTINENTAL]))
            and (row.get(_CONTINENT_COLUMN) or "").strip().casefold() == wanted
        ]

    def candidates_for(self, mode: GameMode, continent: str | None = None) -> list[Country]:
        if mode is GameMode.CONTINENTAL:
            if not continent:
                logger.warning("Continental mode requested without a continent")
                return []
            return self.filter_by_continent_mode(continent)
        return self.filter_by_mode(mode)

    def field_of(self, name: str, field_name: str) -> str | None:
        for row in self._read_rows():
            if row.get(_NAME_COLUMN) == name:
                return row.get(field_name)
        return None

    def find(self, name: str) -> Country | None:
        for row in self._read_rows():
            if row.get(_NAME_COLUMN) == name:
                return _row_to_country(row)
        return None

    def hints_for(self, name: str) -> str | None:
        return self.field_of(name, "Hints")

    def _read_rows(self) -> list[dict[str, str]]:
        try:
            with self._path.open(newline="", encoding="utf-8") as handle:
                reader = csv.DictReader(handle)
                if reader.fieldnames is None or _NAME_COLUMN not in reader.fieldnames:
                    logger.error("Country catalog %s has no '%s' column", self._path, _NAME_COLUMN)
                    return []
                return [row for row in reader if row.get(_NAME_COLUMN)]
        except FileNotFoundError:
            logger.error("Country catalog not found at %s", self._path)
        except (OSError, csv.Error) as exc:
            logger.error("Could not read country catalog %s: %s", self._path, exc)
        return []


def _is_yes(value: str | None) -> bool:
    return value is not None and value.strip().casefold() == _YES


def _row_to_country(row: dict[str, str]) -> Country:
    return Country(
        name=row[_NAME_COLUMN].strip(),
        country_id=(row.get("ID") or "").strip(),
        continent=(row.get(_CONTINENT_COLUMN) or "").strip(),
        continental=_is_yes(row.get(_FLAG_COLUMNS[GameMode.CONTINENTAL])),
        global_mode=_is_yes(row.get(_FLAG_COLUMNS[GameMode.GLOBAL])),
        micro_nation=_is_yes(row.get(_FLAG_COLUMNS[GameMode.MICRO_NATION])),
        hints=row.get("Hints") or "",
    )
