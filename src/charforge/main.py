"""Command-line entry point for charforge."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from charforge.character.calculator import recompute
from charforge.character.models import Character
from charforge.database.engine import close_db, init_db
from charforge.errors import CharforgeError
from charforge.log import configure_logging
from charforge.reference import load_reference_library

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="charforge",
        description="Character records with derived-stat calculation",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    recompute_parser = subparsers.add_parser(
        "recompute", help="Recompute derived stats for a character JSON file"
    )
    recompute_parser.add_argument("file", type=Path, help="Character document (JSON)")

    for name, help_text in (("races", "List reference races"), ("classes", "List classes")):
        list_parser = subparsers.add_parser(name, help=help_text)
        list_parser.add_argument(
            "--reference-dir", type=Path, default=None, help="Directory with reference YAML"
        )

    subparsers.add_parser("init-db", help="Create database tables")
    return parser


def recompute_file(path: Path) -> dict[str, Any]:
    """
    Load a character document, recompute it and return the new document.

    Raises:
        OSError: If the file cannot be read
        ValidationError: If the document is not a valid character
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    character = Character.model_validate(data)
    return recompute(character).to_document()


async def _init_db() -> None:
    try:
        await init_db()
        logger.info("database_initialized")
    finally:
        await close_db()


def run(argv: list[str] | None = None) -> int:
    """
    Synchronous entry point used by the ``charforge`` console script.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        if args.command == "recompute":
            print(json.dumps(recompute_file(args.file), indent=2))
        elif args.command == "races":
            for race in load_reference_library(args.reference_dir).list_races():
                print(f"{race.index:<12} {race.name:<12} speed {race.speed}")
        elif args.command == "classes":
            for character_class in load_reference_library(args.reference_dir).list_classes():
                print(
                    f"{character_class.index:<12} {character_class.name:<12} "
                    f"d{character_class.hit_die}"
                )
        elif args.command == "init-db":
            asyncio.run(_init_db())
    except (CharforgeError, ValidationError, OSError, json.JSONDecodeError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(run())
