"""Exception hierarchy raised at the charforge service and loader boundaries."""


class CharforgeError(Exception):
    """Base class for all charforge errors."""

    pass


class CharacterValidationError(CharforgeError):
    """Raised when a character payload is missing required fields or is malformed."""

    def __init__(self, message: str, missing_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing_fields = missing_fields or []


class CharacterNotFoundError(CharforgeError):
    """Raised when no character exists for the requested identifier."""

    def __init__(self, character_id: str) -> None:
        super().__init__(f'Character with ID "{character_id}" not found')
        self.character_id = character_id


class DuplicateCharacterError(CharforgeError):
    """Raised when creating a character whose id already exists in the store."""

    def __init__(self, character_id: str) -> None:
        super().__init__(f'Character with ID "{character_id}" already exists')
        self.character_id = character_id


class NotASpellcasterError(CharforgeError):
    """Raised when a spellcasting operation targets a character without spellcasting."""

    def __init__(self, character_id: str) -> None:
        super().__init__(f'Character with ID "{character_id}" is not a spellcaster')
        self.character_id = character_id


class ReferenceDataError(CharforgeError):
    """Raised when race or class reference data cannot be loaded."""

    pass
