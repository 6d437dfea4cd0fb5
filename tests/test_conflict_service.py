"""Unit tests for scheduling conflict detection."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import date, datetime
from app.models.vehicle_assignment import VehicleAssignment
from app.models.vehicle_blocked_period import VehicleBlockedPeriod
from app.services.conflict_service import (
    KIND_ASSIGNMENT, KIND_BLOCK, ScheduleCandidate, check_conflicts, find_conflicts, has_conflicts_at,
)
from app.services.interval import InvalidIntervalError
from app.services.schedule_repository import InMemoryScheduleSource


def make_assignment(id="a-1", vehicle_id="V", start=datetime(2025, 1, 10), end=datetime(2025, 1, 20),
                    status="approved"):
    return VehicleAssignment(id=id, vehicle_id=vehicle_id, driver_id="d-1", start_time=start,
                             end_time=end, status=status, is_temporary=True)


def make_block(id="b-1", vehicle_id="V", start=date(2025, 2, 1), end=date(2025, 2, 5), reason="Service"):
    return VehicleBlockedPeriod(id=id, vehicle_id=vehicle_id, start_date=start, end_date=end, reason=reason)


class TestAssignmentConflicts:
    def test_overlapping_candidate_reports_one_assignment_conflict(self):
        conflicts = find_conflicts(ScheduleCandidate("V", "2025-01-15", "2025-01-25"), [], [make_assignment()])
        assert len(conflicts) == 1
        assert conflicts[0].kind == KIND_ASSIGNMENT
        assert conflicts[0].source_id == "a-1"
        assert conflicts[0].reason == "Vehicle is already assigned from Jan 10, 2025 to Jan 20, 2025"

    def test_candidate_after_assignment_has_no_conflict(self):
        assert find_conflicts(ScheduleCandidate("V", "2025-01-21", "2025-01-25"), [], [make_assignment()]) == []

    def test_other_vehicle_ignored(self):
        candidate = ScheduleCandidate("OTHER", "2025-01-15", "2025-01-25")
        assert find_conflicts(candidate, [make_block()], [make_assignment()]) == []

    def test_non_approved_assignments_ignored(self):
        rows = [make_assignment(id=f"a-{s}", status=s) for s in ("pending", "rejected", "cancelled")]
        assert find_conflicts(ScheduleCandidate("V", "2025-01-15", "2025-01-25"), [], rows) == []

    def test_open_ended_assignment_conflicts_forever(self):
        ongoing = make_assignment(end=None)
        for year in (2025, 2100, 9000):
            candidate = ScheduleCandidate("V", datetime(year, 6, 1), datetime(year, 6, 2))
            conflicts = find_conflicts(candidate, [], [ongoing])
            assert len(conflicts) == 1
        assert conflicts[0].reason.endswith("to indefinitely")

    def test_open_ended_candidate_hits_later_assignment(self):
        candidate = ScheduleCandidate("V", "2025-01-01")
        assert len(find_conflicts(candidate, [], [make_assignment()])) == 1

    def test_exclusion_removes_only_that_assignment(self):
        rows = [make_assignment(id="a-1"), make_assignment(id="a-2"), make_assignment(id="a-3")]
        candidate = ScheduleCandidate("V", "2025-01-15", "2025-01-16")
        conflicts = find_conflicts(candidate, [], rows, exclude_assignment_id="a-2")
        assert [c.source_id for c in conflicts] == ["a-1", "a-3"]

    def test_reversed_candidate_rejected(self):
        with pytest.raises(InvalidIntervalError):
            find_conflicts(ScheduleCandidate("V", "2025-01-25", "2025-01-15"), [], [make_assignment()])


class TestMalformedStoredRows:
    def test_reversed_stored_row_raises_by_default(self):
        reversed_row = make_assignment(start=datetime(2025, 1, 20), end=datetime(2025, 1, 10))
        with pytest.raises(InvalidIntervalError):
            find_conflicts(ScheduleCandidate("V", "2025-01-15", "2025-01-25"), [], [reversed_row])

    def test_skip_malformed_leaves_out_bad_rows_only(self):
        blocks = [make_block(id="b-bad", start=date(2025, 1, 18), end=date(2025, 1, 16)), make_block(
            id="b-1", start=date(2025, 1, 12), end=date(2025, 1, 13))]
        assignments = [make_assignment(id="a-bad", start=datetime(2025, 1, 20), end=datetime(2025, 1, 10)),
                       make_assignment(id="a-1")]
        candidate = ScheduleCandidate("V", "2025-01-01", "2025-01-31")
        conflicts = find_conflicts(candidate, blocks, assignments, skip_malformed=True)
        assert [c.source_id for c in conflicts] == ["b-1", "a-1"]

    def test_candidate_still_validated_when_skipping(self):
        with pytest.raises(InvalidIntervalError):
            find_conflicts(ScheduleCandidate("V", "2025-01-25", "2025-01-15"), [], [], skip_malformed=True)


class TestBlockConflicts:
    def test_candidate_inside_block(self):
        conflicts = find_conflicts(ScheduleCandidate("V", "2025-02-03", "2025-02-04"), [make_block()], [])
        assert len(conflicts) == 1
        assert conflicts[0].kind == KIND_BLOCK
        assert conflicts[0].reason == "Vehicle is blocked from Feb 1, 2025 to Feb 5, 2025"

    def test_candidate_starting_on_last_block_day(self):
        candidate = ScheduleCandidate("V", datetime(2025, 2, 5, 14, 0), datetime(2025, 2, 6))
        assert len(find_conflicts(candidate, [make_block()], [])) == 1

    def test_candidate_ending_before_block(self):
        candidate = ScheduleCandidate("V", "2025-01-25", datetime(2025, 1, 31, 23, 0))
        assert find_conflicts(candidate, [make_block()], []) == []

    def test_candidate_starting_day_after_block(self):
        assert find_conflicts(ScheduleCandidate("V", "2025-02-06"), [make_block()], []) == []

    def test_iff_property_over_grid(self):
        block = make_block()
        block_start, block_end = datetime(2025, 2, 1), datetime(2025, 2, 5, 23, 59, 59, 999999)
        for start_day in range(25, 40):
            for length in (0, 1, 3):
                start = datetime.fromordinal(date(2025, 1, 1).toordinal() + start_day)
                end = datetime.fromordinal(start.toordinal() + length)
                expected = start <= block_end and end >= block_start
                found = bool(find_conflicts(ScheduleCandidate("V", start, end), [block], []))
                assert found == expected, (start, end)


class TestCombined:
    def test_all_conflicts_reported_blocks_first(self):
        blocks = [make_block(id="b-1", start=date(2025, 1, 12), end=date(2025, 1, 13))]
        assignments = [make_assignment(id="a-1")]
        conflicts = find_conflicts(ScheduleCandidate("V", "2025-01-01", "2025-01-31"), blocks, assignments)
        assert [c.kind for c in conflicts] == [KIND_BLOCK, KIND_ASSIGNMENT]

    def test_repeated_calls_identical(self):
        blocks = [make_block(id="b-1", start=date(2025, 1, 12), end=date(2025, 1, 13)),
                  make_block(id="b-2", start=date(2025, 1, 14), end=date(2025, 1, 15))]
        assignments = [make_assignment(id="a-1"), make_assignment(id="a-2", start=datetime(2025, 1, 18))]
        candidate = ScheduleCandidate("V", "2025-01-01", "2025-01-31")
        assert find_conflicts(candidate, blocks, assignments) == find_conflicts(candidate, blocks, assignments)

    def test_empty_collections(self):
        assert find_conflicts(ScheduleCandidate("V", "2025-01-01"), [], []) == []


class TestCheckConflictsWithSource:
    def test_source_rows_for_vehicle_are_used(self):
        source = InMemoryScheduleSource(
            blocked_periods=[make_block(), make_block(id="b-x", vehicle_id="W")],
            assignments=[make_assignment(), make_assignment(id="a-p", status="pending")],
        )
        conflicts = check_conflicts(source, ScheduleCandidate("V", "2025-01-15", "2025-02-02"))
        assert sorted(c.source_id for c in conflicts) == ["a-1", "b-1"]

    def test_exclusion_passed_through(self):
        source = InMemoryScheduleSource(assignments=[make_assignment()])
        candidate = ScheduleCandidate("V", "2025-01-15", "2025-01-16")
        assert check_conflicts(source, candidate, exclude_assignment_id="a-1") == []

    def test_has_conflicts_at(self):
        source = InMemoryScheduleSource(blocked_periods=[make_block()])
        assert has_conflicts_at(source, "V", datetime(2025, 2, 2, 12, 0))
        assert not has_conflicts_at(source, "V", datetime(2025, 2, 6, 12, 0))
