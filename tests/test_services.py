"""Tests for profile and progress storage."""
import pytest

from core.errors import InvalidInputError
from services.profile_service import InMemoryProfileService, check_user_id
from services.progress_service import ProgressService


class TestProfileService:
    """Profiles and first-calculation measurements."""

    def test_create_is_idempotent(self):
        service = InMemoryProfileService(persist=False)
        first = service.create_profile("u1", full_name="Alex", gender="other")
        second = service.create_profile("u1", full_name="Someone else")

        assert first is second
        assert second.full_name == "Alex"
        assert len(service.list_profiles()) == 1

    def test_measurements_only_saved_once(self):
        service = InMemoryProfileService(persist=False)

        assert service.save_measurements_if_absent("u1", 170.0, 70.0) is True
        assert service.save_measurements_if_absent("u1", 180.0, 90.0) is False

        profile = service.get_profile("u1")
        assert (profile.height_cm, profile.weight_kg) == (170.0, 70.0)

    def test_partial_profile_is_completed(self):
        service = InMemoryProfileService(persist=False)
        profile = service.create_profile("u1")
        profile.height_cm = 160.0
        service.update_profile(profile)

        assert service.save_measurements_if_absent("u1", 175.0, 65.0) is True
        assert service.get_profile("u1").height_cm == 160.0
        assert service.get_profile("u1").weight_kg == 65.0

    def test_persistence_round_trip(self, tmp_path):
        service = InMemoryProfileService(persist=True, storage_dir=tmp_path)
        service.create_profile("u1", full_name="Alex", gender="female")
        service.save_measurements_if_absent("u1", 165.0, 58.5)

        reloaded = InMemoryProfileService(persist=True, storage_dir=tmp_path)
        profile = reloaded.get_profile("u1")
        assert profile.gender == "female"
        assert profile.weight_kg == 58.5

    def test_delete(self, tmp_path):
        service = InMemoryProfileService(persist=True, storage_dir=tmp_path)
        service.create_profile("u1")

        assert service.delete_profile("u1") is True
        assert service.delete_profile("u1") is False
        assert not (tmp_path / "u1.json").exists()

    def test_corrupt_file_is_skipped(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json")
        service = InMemoryProfileService(persist=True, storage_dir=tmp_path)
        assert service.list_profiles() == []

    def test_user_id_cannot_leave_storage_dir(self, tmp_path):
        service = InMemoryProfileService(persist=True, storage_dir=tmp_path / "profiles")
        for bad in ("../x", "a/b", "a\\b", "..", "", None):
            with pytest.raises(InvalidInputError) as exc:
                service.save_measurements_if_absent(bad, 170.0, 70.0)
            assert exc.value.field == "user_id"

        assert list(tmp_path.rglob("*.json")) == []
        assert check_user_id("member-42@gym.io") == "member-42@gym.io"


class TestProgressService:
    """Progress log and kg-normalized weight trend."""

    def test_weight_series_in_kg(self):
        service = ProgressService(persist=False)
        service.add_entry("u1", weight=154, weight_unit="lb")
        service.add_entry("u1", height=170, notes="photo only")
        service.add_entry("u1", weight=68.4, weight_unit="kg")
        service.add_entry("u2", weight=90)

        series = service.weight_series_kg("u1")
        assert [point["weight"] for point in series] == [69.9, 68.4]
        assert series[0]["original_weight"] == 154
        assert series[0]["unit"] == "lb"

    def test_list_newest_first(self):
        service = ProgressService(persist=False)
        first = service.add_entry("u1", weight=70)
        second = service.add_entry("u1", weight=69)

        assert [e.entry_id for e in service.list_entries("u1")] == [second.entry_id, first.entry_id]

    def test_invalid_unit_rejected(self):
        service = ProgressService(persist=False)
        with pytest.raises(InvalidInputError):
            service.add_entry("u1", weight=70, weight_unit="stone")

    def test_non_positive_weight_rejected(self):
        service = ProgressService(persist=False)
        with pytest.raises(InvalidInputError):
            service.add_entry("u1", weight=0)

    def test_kilograms_kept_as_typed(self):
        service = ProgressService(persist=False)
        service.add_entry("u1", weight=68.45, weight_unit="kg")
        service.add_entry("u1", weight=150.5, weight_unit="lb")

        assert [point["weight"] for point in service.weight_series_kg("u1")] == [68.45, 68.3]

    def test_non_numeric_values_rejected(self):
        service = ProgressService(persist=False)
        for bad in (float("nan"), float("inf"), "abc"):
            with pytest.raises(InvalidInputError) as exc:
                service.add_entry("u1", weight=bad)
            assert exc.value.field == "weight"
        with pytest.raises(InvalidInputError):
            service.add_entry("u1", height=float("nan"))

        service.add_entry("u1", weight="70.5")
        assert service.weight_series_kg("u1")[0]["weight"] == 70.5

    def test_user_id_cannot_leave_storage_dir(self, tmp_path):
        service = ProgressService(persist=True, storage_dir=tmp_path / "progress")
        with pytest.raises(InvalidInputError):
            service.add_entry("../x", weight=70)
        assert service.list_entries("../x") == []

    def test_delete_and_reload(self, tmp_path):
        service = ProgressService(persist=True, storage_dir=tmp_path)
        keep = service.add_entry("u1", weight=70, notes="week 1")
        drop = service.add_entry("u1", weight=69)

        assert service.delete_entry(drop.entry_id) is True
        assert service.delete_entry(drop.entry_id) is False

        reloaded = ProgressService(persist=True, storage_dir=tmp_path)
        entries = reloaded.list_entries("u1")
        assert [e.entry_id for e in entries] == [keep.entry_id]
        assert entries[0].notes == "week 1"
