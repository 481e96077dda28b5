"""Profile Service Module

Storage for member profiles. The metrics engine never touches this; the
orchestrator receives a ProfileService instance and calls it explicitly.

This module provides:
1. In-memory profile storage
2. Optional persistence to one JSON file per profile
3. save_measurements_if_absent for the first calculation
"""
import json
import logging
import re
from typing import Dict, Optional, List
from datetime import datetime
from pathlib import Path

from config.settings import PROFILE_STORAGE_PATH
from core.errors import InvalidInputError
from models.profile import UserProfile

logger = logging.getLogger(__name__)

# Ids double as file names, so only a safe subset is allowed
_USER_ID = re.compile(r"[A-Za-z0-9_.@-]+")


def check_user_id(user_id: str) -> str:
    """Reject ids that are empty or could leave the storage directory."""
    if not isinstance(user_id, str) or not _USER_ID.fullmatch(user_id) or set(user_id) == {"."}:
        raise InvalidInputError(f"Invalid user id {user_id!r}", field="user_id")
    return user_id


class InMemoryProfileService:
    """
    In-memory profile service.

    Features:
    - Create/Get/Update/Delete profiles
    - Optional persistence to disk
    """

    def __init__(self, persist: bool = False, storage_dir: Path = PROFILE_STORAGE_PATH):
        self._profiles: Dict[str, UserProfile] = {}
        self._persist = persist
        self._dir = Path(storage_dir)

        if persist:
            self._dir.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    # === Core Profile Operations ===

    def create_profile(self, user_id: str, full_name: str = "",
                       gender: Optional[str] = None) -> UserProfile:
        """Create a profile; returns the existing one if the user already has it."""
        check_user_id(user_id)
        existing = self._profiles.get(user_id)
        if existing:
            return existing

        profile = UserProfile(user_id=user_id, full_name=full_name, gender=gender)
        self._profiles[user_id] = profile
        logger.info(f"Created profile: {user_id}")

        if self._persist:
            self._save_profile(profile)
        return profile

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self._profiles.get(user_id)

    def update_profile(self, profile: UserProfile) -> UserProfile:
        check_user_id(profile.user_id)
        profile.updated_at = datetime.now().isoformat()
        self._profiles[profile.user_id] = profile

        if self._persist:
            self._save_profile(profile)
        return profile

    def delete_profile(self, user_id: str) -> bool:
        if user_id not in self._profiles:
            return False
        self._profiles.pop(user_id)
        if self._persist:
            (self._dir / f"{user_id}.json").unlink(missing_ok=True)
        logger.info(f"Deleted profile: {user_id}")
        return True

    def list_profiles(self) -> List[UserProfile]:
        return list(self._profiles.values())

    def save_measurements_if_absent(self, user_id: str, height_cm: float,
                                    weight_kg: float) -> bool:
        """
        Store normalized height/weight on the profile unless it already has them.

        Creates the profile when missing. Returns True when something was written.
        """
        profile = self.get_profile(user_id) or self.create_profile(user_id)
        if profile.has_measurements:
            return False

        if profile.height_cm is None:
            profile.height_cm = height_cm
        if profile.weight_kg is None:
            profile.weight_kg = weight_kg
        self.update_profile(profile)
        logger.info(f"Saved measurements for {user_id}: {height_cm}cm, {weight_kg}kg")
        return True

    # === Persistence ===

    def _save_profile(self, profile: UserProfile):
        path = self._dir / f"{profile.user_id}.json"
        with open(path, "w") as f:
            json.dump(profile.to_dict(), f, indent=2)

    def _load_from_disk(self):
        for path in self._dir.glob("*.json"):
            try:
                with open(path) as f:
                    profile = UserProfile.from_dict(json.load(f))
                    self._profiles[profile.user_id] = profile
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to load profile {path}: {e}")

        logger.info(f"Loaded {len(self._profiles)} profiles")


# Global profile service instance
_profile_service = None

def get_profile_service() -> InMemoryProfileService:
    """Get or create the global profile service."""
    global _profile_service
    if _profile_service is None:
        _profile_service = InMemoryProfileService(persist=True)
    return _profile_service
