"""Application services built on the calculator and the character store."""

from .characters import CharacterService, find_missing_fields, needs_recompute

__all__ = ["CharacterService", "find_missing_fields", "needs_recompute"]
