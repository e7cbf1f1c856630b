"""Settings Provider — maps browser setting keys onto the pydantic Settings object.

Invariants:
    - Unknown keys return None, never raise
    - Reads go through the Settings instance given at construction (get_settings() by default)
"""

from site_collection.config import Settings, get_settings
from site_collection.core.domain_types import AUTOCOMPLETE_HISTORY_SIZE_KEY


_KEY_TO_FIELD: dict[str, str] = {
    AUTOCOMPLETE_HISTORY_SIZE_KEY: "autocomplete_history_size",
}


class AppSettingsProvider:
    """Satisfies core.boundary_protocols.SettingsProvider."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def get_setting(self, key: str) -> object:
        field = _KEY_TO_FIELD.get(key)
        if field is None:
            return None
        return getattr(self._settings, field)
