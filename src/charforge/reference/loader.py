"""
Reference data loader for charforge.

Loads race and class definitions from YAML files into validated models.
The calculator only ever sees the validated models, never the raw files.
"""

from pathlib import Path
from typing import Any, TypeVar

import structlog
import yaml
from pydantic import ValidationError

from charforge.character.models import CharacterClass, Race
from charforge.config import get_settings
from charforge.errors import ReferenceDataError

logger = structlog.get_logger(__name__)

RACES_FILE = "races.yaml"
CLASSES_FILE = "classes.yaml"

ReferenceModel = TypeVar("ReferenceModel", Race, CharacterClass)


def load_yaml_entries(file_path: Path, key: str) -> list[dict[str, Any]]:
    """
    Load the list stored under ``key`` in a YAML file.

    Args:
        file_path: Path to the YAML file
        key: Top-level key holding the entries (``races`` or ``classes``)

    Returns:
        List of entry dictionaries

    Raises:
        ReferenceDataError: If the file cannot be read or has the wrong shape
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ReferenceDataError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise ReferenceDataError(f"YAML parsing error in {file_path}: {e}")

    if not data:
        raise ReferenceDataError(f"Empty YAML file: {file_path}")

    if key not in data:
        raise ReferenceDataError(f"Missing '{key}' key in {file_path}")

    entries = data[key]
    if not isinstance(entries, list):
        raise ReferenceDataError(f"'{key}' must be a list in {file_path}")

    return entries


def _build_entries(
    entries: list[dict[str, Any]], model: type[ReferenceModel], file_path: Path
) -> dict[str, ReferenceModel]:
    built: dict[str, ReferenceModel] = {}
    for entry in entries:
        try:
            item = model.model_validate(entry)
        except ValidationError as e:
            name = entry.get("name", "unknown") if isinstance(entry, dict) else "unknown"
            raise ReferenceDataError(f"Invalid entry '{name}' in {file_path}: {e}")

        key = (item.index or item.name).lower()
        if key in built:
            logger.warning("duplicate_reference_entry", index=key, file=str(file_path))
            continue
        built[key] = item
    return built


class ReferenceLibrary:
    """
    In-memory race and class reference data.

    Lookups are case-insensitive on the reference index, falling back to the
    display name when an entry has no index.
    """

    def __init__(self, races: dict[str, Race], classes: dict[str, CharacterClass]) -> None:
        self.races = races
        self.classes = classes

    @classmethod
    def from_directory(cls, directory: Path) -> "ReferenceLibrary":
        """
        Load races.yaml and classes.yaml from a directory.

        Raises:
            ReferenceDataError: If either file is missing or invalid
        """
        if not directory.is_dir():
            raise ReferenceDataError(f"Not a directory: {directory}")

        races_path = directory / RACES_FILE
        classes_path = directory / CLASSES_FILE
        races = _build_entries(load_yaml_entries(races_path, "races"), Race, races_path)
        classes = _build_entries(
            load_yaml_entries(classes_path, "classes"), CharacterClass, classes_path
        )

        logger.info(
            "reference_data_loaded",
            directory=str(directory),
            total_races=len(races),
            total_classes=len(classes),
        )
        return cls(races, classes)

    def get_race(self, index: str) -> Race | None:
        return self.races.get(index.lower())

    def get_class(self, index: str) -> CharacterClass | None:
        return self.classes.get(index.lower())

    def list_races(self) -> list[Race]:
        return sorted(self.races.values(), key=lambda race: race.name)

    def list_classes(self) -> list[CharacterClass]:
        return sorted(self.classes.values(), key=lambda character_class: character_class.name)


def load_reference_library(directory: Path | None = None) -> ReferenceLibrary:
    """Load reference data from ``directory`` or the configured reference directory."""
    return ReferenceLibrary.from_directory(directory or get_settings().reference_dir)
