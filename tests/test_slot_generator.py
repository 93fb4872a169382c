"""
Tests for slot generator.
"""

from datetime import date, time

import pytest

from storeslots.domain.models import DateOverride, ScheduleConfig, WeeklyHours
from storeslots.domain.slot_generator import SlotGenerator, find_slot, generate_slots, select_slot

NEW_YORK = "America/New_York"
MONDAY = date(2025, 1, 6)


def _monday_config(open_time: time = time(9, 0), close_time: time = time(17, 0), *overrides) -> ScheduleConfig:
    return ScheduleConfig(
        timezone=NEW_YORK,
        weekly_hours=(WeeklyHours(day_of_week=1, open_time=open_time, close_time=close_time),),
        overrides=overrides,
    )


class TestSlotGenerator:
    """Tests for SlotGenerator."""

    def test_full_monday(self):
        """Monday 09:00-17:00 yields 32 slots from 09:00 to 16:45."""
        slots = generate_slots(_monday_config(), MONDAY, NEW_YORK)

        assert len(slots) == 32
        assert slots[0].id == "2025-01-06-09:00"
        assert slots[-1].id.endswith("16:45")

    def test_close_boundary_excluded(self):
        """A one-hour window ending on a slot boundary excludes that boundary."""
        slots = generate_slots(_monday_config(time(9, 0), time(10, 0)), MONDAY)

        assert [slot.time_string for slot in slots] == ["09:00", "09:15", "09:30", "09:45"]

    def test_partial_interval_is_dropped(self):
        """A 70 minute window yields floor(70 / 15) = 4 slots."""
        slots = generate_slots(_monday_config(time(9, 0), time(10, 10)), MONDAY)

        assert len(slots) == 4
        assert all(slot.start_time < time(10, 10) for slot in slots)

    def test_unaligned_open_time(self):
        """Slots step from the open time, not from the hour."""
        slots = generate_slots(_monday_config(time(9, 5), time(9, 50)), MONDAY)

        assert [slot.time_string for slot in slots] == ["09:05", "09:20", "09:35"]

    def test_closed_day_yields_no_slots(self):
        """A closed date is an empty sequence, not an error."""
        assert generate_slots(_monday_config(), date(2025, 1, 7), NEW_YORK) == []

    def test_closed_override_yields_no_slots(self):
        config = _monday_config(time(9, 0), time(17, 0), DateOverride(date=MONDAY, is_open=False))

        assert generate_slots(config, MONDAY) == []

    def test_override_window_is_used(self):
        config = _monday_config(
            time(9, 0),
            time(17, 0),
            DateOverride(date=MONDAY, is_open=True, open_time=time(12, 0), close_time=time(13, 0)),
        )

        slots = generate_slots(config, MONDAY)

        assert [slot.time_string for slot in slots] == ["12:00", "12:15", "12:30", "12:45"]

    def test_repeated_calls_are_identical(self):
        """Same inputs give the same ids in the same order."""
        generator = SlotGenerator(_monday_config())

        first = generator.generate_slots(MONDAY, NEW_YORK)
        second = generator.generate_slots(MONDAY, NEW_YORK)

        assert [slot.id for slot in first] == [slot.id for slot in second]
        assert first == second

    def test_labels_in_store_timezone(self):
        slots = generate_slots(_monday_config(time(9, 0), time(14, 0)), MONDAY, NEW_YORK)

        assert slots[0].display_label == "9:00 AM"
        assert slots[-4].display_label == "1:00 PM"

    def test_labels_follow_display_timezone(self):
        """Labels move to the viewer's timezone, ids stay store-local."""
        config = _monday_config()

        local_slots = generate_slots(config, MONDAY, NEW_YORK)
        la_slots = generate_slots(config, MONDAY, "America/Los_Angeles")

        assert la_slots[0].display_label == "6:00 AM"
        assert [slot.id for slot in la_slots] == [slot.id for slot in local_slots]
        assert la_slots[0].start_time == time(9, 0)

    def test_all_slots_available_and_unselected(self):
        slots = generate_slots(_monday_config(), MONDAY)

        assert all(slot.is_available for slot in slots)
        assert not any(slot.is_selected for slot in slots)

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="interval_minutes"):
            SlotGenerator(_monday_config(), interval_minutes=0)


class TestSlotSelection:
    """Tests for selecting slots."""

    def test_select_slot_is_exclusive(self):
        slots = generate_slots(_monday_config(), MONDAY)
        selected = select_slot(select_slot(slots, "2025-01-06-09:15"), "2025-01-06-10:00")

        chosen = [slot.id for slot in selected if slot.is_selected]
        assert chosen == ["2025-01-06-10:00"]

    def test_select_unknown_id(self):
        slots = generate_slots(_monday_config(), MONDAY)

        assert not any(slot.is_selected for slot in select_slot(slots, "2025-01-07-10:00"))

    def test_select_does_not_modify_input(self):
        slots = generate_slots(_monday_config(), MONDAY)

        select_slot(slots, slots[0].id)

        assert not slots[0].is_selected

    def test_find_slot_after_regeneration(self):
        """A persisted id matches the regenerated slot."""
        config = _monday_config()
        selected_id = generate_slots(config, MONDAY)[5].id

        found = find_slot(generate_slots(config, MONDAY, "America/Los_Angeles"), selected_id)

        assert found is not None
        assert found.time_string == "10:15"
        assert find_slot([], selected_id) is None
