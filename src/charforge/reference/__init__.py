"""Race and class reference data."""

from .loader import ReferenceLibrary, load_reference_library, load_yaml_entries

__all__ = ["ReferenceLibrary", "load_reference_library", "load_yaml_entries"]
