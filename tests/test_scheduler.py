"""
Tests for the scheduling facade: locking, persistence and round trips.
"""

from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from valkey.exceptions import ConnectionError

from fleetplan.models import FlightStatus, RejectionReason
from fleetplan.services.lock_manager import ScheduleLockError, aircraft_lock_key
from fleetplan.services.scheduler import FlightScheduler

DEPARTURE = datetime(2030, 6, 1, 10, 0)


@pytest.fixture
def scheduler(context, flight_repo, route_repo, schedule_lock):
    return FlightScheduler(context, flight_repo, route_repo, schedule_lock)


@pytest.fixture
def candidate(scheduler, aircraft, fra, muc):
    return scheduler.plan(aircraft, fra, muc, DEPARTURE)


class TestPlan:
    """Test candidate construction."""

    def test_allocates_number_and_route(self, candidate, route_repo):
        assert candidate.flight_number == "SNX100"
        assert candidate.route is not None
        assert ("EDDF", "EDDM", "SNX") in route_repo.routes
        assert candidate.arrival is None

    def test_next_number_after_existing(self, scheduler, flight_repo, make_flight, aircraft, fra, muc):
        flight_repo.save(make_flight("SNX100", departure=DEPARTURE + timedelta(days=2), flight_minutes=60))
        assert scheduler.plan(aircraft, fra, muc, DEPARTURE).flight_number == "SNX110"

    def test_explicit_number(self, scheduler, aircraft, fra, muc):
        assert scheduler.plan(aircraft, fra, muc, DEPARTURE, flight_number="SNX500").flight_number == "SNX500"


class TestSchedule:
    """Test scheduling single flights."""

    def test_saves_flight(self, scheduler, candidate, flight_repo):
        result = scheduler.schedule(candidate)

        assert result.ok
        assert result.flight.flight_id is not None
        stored = flight_repo.list_all()
        assert [f.flight_number for f in stored] == ["SNX100"]
        assert stored[0].arrival == DEPARTURE + timedelta(minutes=candidate.route.flight_minutes)

    def test_creates_return_route(self, scheduler, candidate, route_repo):
        scheduler.schedule(candidate)
        assert ("EDDM", "EDDF", "SNX") in route_repo.routes

    def test_double_booking_refused(self, scheduler, candidate, flight_repo, aircraft, fra, muc):
        scheduler.schedule(candidate)
        second = scheduler.plan(aircraft, fra, muc, DEPARTURE + timedelta(minutes=20))

        result = scheduler.schedule(second)

        assert result.reason == RejectionReason.TIME_OVERLAP
        assert len(flight_repo.list_all()) == 1

    def test_rejection_not_saved(self, scheduler, candidate, flight_repo):
        result = scheduler.schedule(candidate, now=DEPARTURE)

        assert result.reason == RejectionReason.LEAD_TIME
        assert flight_repo.list_all() == []

    def test_busy_aircraft_lock(self, scheduler, candidate, valkey_client):
        """Another writer holding the aircraft blocks scheduling."""
        valkey_client.set(aircraft_lock_key(candidate.aircraft.aircraft_id), "other-writer")
        with pytest.raises(ScheduleLockError):
            scheduler.schedule(candidate)

    def test_lock_released_after_schedule(self, scheduler, candidate, valkey_client):
        scheduler.schedule(candidate)
        assert valkey_client.data == {}

    def test_saved_flight_survives_failed_release(self, scheduler, candidate, flight_repo, valkey_client):
        """Losing Valkey after the save still reports the committed flight."""
        with patch.object(valkey_client, "eval", side_effect=ConnectionError("lost")):
            result = scheduler.schedule(candidate)

        assert result.ok
        assert [f.flight_number for f in flight_repo.list_all()] == ["SNX100"]

    def test_refused_save_is_number_clash(self, scheduler, candidate, flight_repo):
        """A save refused by the store's unique index is reported as a clash."""
        with patch.object(flight_repo, "save", return_value=False):
            result = scheduler.schedule(candidate)
        assert result.reason == RejectionReason.NUMBER_CLASH


class TestRoundTrip:
    """Test outbound plus return in one call."""

    def test_both_legs_saved(self, scheduler, candidate, flight_repo):
        outbound, inbound = scheduler.schedule_round_trip(candidate, turnaround_minutes=90)

        assert outbound.ok and inbound.ok
        assert sorted(f.flight_number for f in flight_repo.list_all()) == ["SNX100", "SNX101"]
        assert inbound.flight.departure == outbound.flight.arrival + timedelta(minutes=90)

    def test_refused_outbound(self, scheduler, candidate, flight_repo):
        outbound, inbound = scheduler.schedule_round_trip(candidate, now=DEPARTURE)

        assert outbound.reason == RejectionReason.LEAD_TIME
        assert inbound is None
        assert flight_repo.list_all() == []

    def test_refused_return_keeps_outbound(self, scheduler, candidate, flight_repo, make_flight, other_aircraft, muc, fra):
        flight_repo.save(make_flight(
            "SNX101", flight_aircraft=other_aircraft, departure_airport=muc, arrival_airport=fra,
            departure=DEPARTURE + timedelta(days=3), flight_minutes=60,
        ))

        outbound, inbound = scheduler.schedule_round_trip(candidate)

        assert outbound.ok
        assert inbound.reason == RejectionReason.RETURN_NUMBER_TAKEN
        assert sorted(f.flight_number for f in flight_repo.list_all()) == ["SNX100", "SNX101"]


class TestModify:
    """Test rescheduling and cancelling stored flights."""

    def test_reschedule_persists(self, scheduler, candidate, flight_repo):
        stored = scheduler.schedule(candidate).flight

        result = scheduler.reschedule(stored, DEPARTURE + timedelta(hours=3))

        assert result.ok
        saved = flight_repo.flights[stored.flight_id]
        assert saved.departure == DEPARTURE + timedelta(hours=3)
        assert len(flight_repo.list_all()) == 1

    def test_cancel_persists(self, scheduler, candidate, flight_repo):
        stored = scheduler.schedule(candidate).flight

        assert scheduler.cancel(stored).ok
        assert flight_repo.flights[stored.flight_id].status == FlightStatus.CANCELLED

    def test_cancel_twice(self, scheduler, candidate):
        stored = scheduler.schedule(candidate).flight
        cancelled = scheduler.cancel(stored).flight

        assert scheduler.cancel(cancelled).reason == RejectionReason.NOT_MODIFIABLE
