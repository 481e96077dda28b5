"""Progress Service Module

Progress checks (height, weight, notes, photo link) stored in the units the
member typed, plus a weight trend normalized to kilograms for charting.
"""
import json
import logging
import uuid
from typing import Dict, Optional, List, Any
from pathlib import Path

from config.settings import PROGRESS_STORAGE_PATH
from core.errors import InvalidInputError
from models.measurements import HeightUnit, WeightUnit
from models.profile import ProgressEntry
from services.profile_service import check_user_id
from tools.metrics_engine import normalize_height, normalize_weight

logger = logging.getLogger(__name__)


class ProgressService:
    """In-memory progress log with optional JSON persistence."""

    def __init__(self, persist: bool = False, storage_dir: Path = PROGRESS_STORAGE_PATH):
        self._entries: Dict[str, ProgressEntry] = {}
        self._persist = persist
        self._dir = Path(storage_dir)

        if persist:
            self._dir.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def add_entry(
        self,
        user_id: str,
        height: Optional[float] = None,
        height_unit: str = "cm",
        weight: Optional[float] = None,
        weight_unit: str = "kg",
        notes: Optional[str] = None,
        photo_url: Optional[str] = None,
    ) -> ProgressEntry:
        """Record a progress check. Units are validated, values kept as typed."""
        try:
            height_unit = HeightUnit(height_unit).value
            weight_unit = WeightUnit(weight_unit).value
        except ValueError as e:
            raise InvalidInputError(str(e), field="unit")

        check_user_id(user_id)
        # Same checks as the calculators; the typed values are still what is stored
        if height is not None:
            normalize_height(height, height_unit)
            height = float(height)
        if weight is not None:
            normalize_weight(weight, weight_unit)
            weight = float(weight)

        entry = ProgressEntry(
            entry_id=uuid.uuid4().hex,
            user_id=user_id,
            height=height,
            height_unit=height_unit,
            weight=weight,
            weight_unit=weight_unit,
            notes=notes or None,
            photo_url=photo_url or None,
        )
        self._entries[entry.entry_id] = entry
        logger.info(f"Progress entry {entry.entry_id} saved for {user_id}")

        if self._persist:
            self._save_entry(entry)
        return entry

    def _oldest_first(self, user_id: str) -> List[ProgressEntry]:
        entries = [e for e in self._entries.values() if e.user_id == user_id]
        return sorted(entries, key=lambda e: e.created_at)

    def list_entries(self, user_id: str) -> List[ProgressEntry]:
        """Entries for a member, newest first."""
        return self._oldest_first(user_id)[::-1]

    def delete_entry(self, entry_id: str) -> bool:
        if self._entries.pop(entry_id, None) is None:
            return False
        if self._persist:
            (self._dir / f"{entry_id}.json").unlink(missing_ok=True)
        return True

    def weight_series_kg(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Oldest-first weight points in kg, skipping entries without weight.

        Pounds are converted and rounded to one decimal; kilograms are kept as typed.
        """
        series = []
        for entry in self._oldest_first(user_id):
            if entry.weight is None:
                continue
            weight = entry.weight
            if entry.weight_unit == WeightUnit.LB.value:
                weight = round(normalize_weight(weight, WeightUnit.LB), 1)
            series.append({
                "date": entry.created_at,
                "weight": weight,
                "original_weight": entry.weight,
                "unit": entry.weight_unit,
            })
        return series

    # === Persistence ===

    def _save_entry(self, entry: ProgressEntry):
        with open(self._dir / f"{entry.entry_id}.json", "w") as f:
            json.dump(entry.to_dict(), f, indent=2)

    def _load_from_disk(self):
        for path in self._dir.glob("*.json"):
            try:
                with open(path) as f:
                    entry = ProgressEntry.from_dict(json.load(f))
                    self._entries[entry.entry_id] = entry
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to load progress entry {path}: {e}")


# Global progress service instance
_progress_service = None

def get_progress_service() -> ProgressService:
    """Get or create the global progress service."""
    global _progress_service
    if _progress_service is None:
        _progress_service = ProgressService(persist=True)
    return _progress_service
