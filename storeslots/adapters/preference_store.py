"""
Persists the viewer's selection state to a JSON file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Any, Dict

from ..domain.models import SelectionState

logger = logging.getLogger(__name__)

DEFAULT_PREFERENCES_FILE = Path.home() / ".storeslots_preferences.json"


class PreferenceStore:
    """
    File-backed store for ``SelectionState``.

    Only the alternate-timezone flag is expected to matter across sessions;
    the selected date and slot are kept so a refresh can re-match them.
    A missing or unreadable file yields the default state.
    """

    def __init__(self, preferences_file: Path | None = None):
        self.preferences_file = preferences_file or DEFAULT_PREFERENCES_FILE

    def load(self) -> SelectionState:
        """Load the persisted state, or the default state if none is usable."""
        if not self.preferences_file.exists():
            return SelectionState()

        try:
            with open(self.preferences_file, "r", encoding="utf-8") as file_handle:
                data = json.load(file_handle)
        except (OSError, ValueError) as exc:
            logger.warning("Could not load preferences from %s: %s", self.preferences_file, exc)
            return SelectionState()

        if not isinstance(data, dict):
            logger.warning("Ignoring preferences file %s: root is not a mapping", self.preferences_file)
            return SelectionState()

        return self._from_dict(data)

    def save(self, state: SelectionState) -> bool:
        """Write ``state`` to disk. Returns False if the file could not be written."""
        try:
            self.preferences_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.preferences_file, "w", encoding="utf-8") as file_handle:
                json.dump(self._to_dict(state), file_handle, indent=2)
        except OSError as exc:
            logger.warning("Could not save preferences to %s: %s", self.preferences_file, exc)
            return False
        return True

    def toggle_timezone(self) -> SelectionState:
        """
        Flip the alternate-timezone flag and persist it.

        Returns:
            The state now on disk; unchanged if the write failed
        """
        state = self.load()
        toggled = replace(state, use_alternative_timezone=not state.use_alternative_timezone)
        return toggled if self.save(toggled) else state

    def clear(self) -> None:
        """Remove all persisted preferences."""
        if self.preferences_file.exists():
            self.preferences_file.unlink()

    @staticmethod
    def _to_dict(state: SelectionState) -> Dict[str, Any]:
        return {
            "use_alternative_timezone": state.use_alternative_timezone,
            "selected_date": state.selected_date.isoformat() if state.selected_date else None,
            "selected_slot_id": state.selected_slot_id,
        }

    @staticmethod
    def _from_dict(data: Dict[str, Any]) -> SelectionState:
        selected_date = None
        raw_date = data.get("selected_date")
        if raw_date:
            try:
                selected_date = date.fromisoformat(raw_date)
            except (TypeError, ValueError):
                logger.warning("Ignoring invalid persisted date: %r", raw_date)

        return SelectionState(
            use_alternative_timezone=bool(data.get("use_alternative_timezone", False)),
            selected_date=selected_date,
            selected_slot_id=data.get("selected_slot_id"),
        )
