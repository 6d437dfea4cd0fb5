"""Unit tests for blocked period management."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock
from datetime import date
from app.models.vehicle_blocked_period import VehicleBlockedPeriod
from app.services.blocked_period_service import (
    BlockValidationError, block_phase, block_vehicle, unblock, update_block,
)
from app.services.interval import InvalidIntervalError


def make_block(start=date(2025, 2, 1), end=date(2025, 2, 5)):
    return VehicleBlockedPeriod(id="b-1", vehicle_id="V", start_date=start, end_date=end, reason="Service")


class TestBlockVehicle:
    def test_block_persisted(self):
        db = MagicMock()
        block = block_vehicle(db, "V", "2025-02-01", "2025-02-05", "Service")
        db.add.assert_called_once_with(block)
        db.commit.assert_called_once()
        assert block.start_date == date(2025, 2, 1)
        assert block.end_date == date(2025, 2, 5)

    def test_reversed_dates_rejected(self):
        db = MagicMock()
        with pytest.raises(InvalidIntervalError):
            block_vehicle(db, "V", date(2025, 2, 5), date(2025, 2, 1), "Service")
        db.add.assert_not_called()

    def test_reason_required(self):
        db = MagicMock()
        with pytest.raises(BlockValidationError):
            block_vehicle(db, "V", date(2025, 2, 1), date(2025, 2, 5), "   ")
        db.add.assert_not_called()

    def test_update_block(self):
        db = MagicMock()
        block = make_block()
        update_block(db, block, date(2025, 3, 1), date(2025, 3, 2), "Tyres")
        assert (block.start_date, block.end_date, block.reason) == (date(2025, 3, 1), date(2025, 3, 2), "Tyres")
        db.commit.assert_called_once()

    def test_unblock(self):
        db = MagicMock()
        block = make_block()
        unblock(db, block)
        db.delete.assert_called_once_with(block)
        db.commit.assert_called_once()


class TestBlockPhase:
    def test_phases(self):
        block = make_block()
        assert block_phase(block, today=date(2025, 1, 31)) == "upcoming"
        assert block_phase(block, today=date(2025, 2, 1)) == "active"
        assert block_phase(block, today=date(2025, 2, 5)) == "active"
        assert block_phase(block, today=date(2025, 2, 6)) == "past"
