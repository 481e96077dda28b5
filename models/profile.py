from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict
from datetime import datetime


@dataclass
class UserProfile:
    """Long-lived profile record for a member."""
    user_id: str
    full_name: str = ""

    # Free text from signup ("male", "female", "other", ...). Never fed into
    # the BMR formula directly; see AnthropometricSample.biological_sex.
    gender: Optional[str] = None

    # Normalized body measurements, filled on the first calculation
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None

    updated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def has_measurements(self) -> bool:
        return self.height_cm is not None and self.weight_kg is not None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(**data)


@dataclass
class ProgressEntry:
    """One progress check: measurements in the units the member typed."""
    entry_id: str
    user_id: str
    height: Optional[float] = None
    height_unit: str = "cm"
    weight: Optional[float] = None
    weight_unit: str = "kg"
    notes: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProgressEntry":
        return cls(**data)
