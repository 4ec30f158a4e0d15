"""
Errors raised by the preset store.

The API layer maps each kind to a status code:

- ``InvalidPresetInput`` -> 400
- ``PresetConflict`` -> 400 (distinct detail)
- ``PresetNotFound`` -> 404
- ``PresetStoreError`` (anything else) -> 500
"""


class PresetStoreError(Exception):
    """Unexpected filesystem or parse failure while handling a preset."""


class InvalidPresetInput(PresetStoreError):
    """Missing or empty name, missing content, or unknown backend."""


class PresetNotFound(PresetStoreError):
    """The preset file to rename or delete does not exist."""


class PresetConflict(PresetStoreError):
    """The rename destination is already taken."""
