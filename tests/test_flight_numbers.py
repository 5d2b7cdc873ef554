"""
Tests for flight number allocation and validation.
"""

import pytest

from fleetplan.services.flight_numbers import FlightNumberAllocator, FlightNumberExhaustedError
from fleetplan.utils.config import SchedulingPolicy


@pytest.fixture
def allocator():
    return FlightNumberAllocator()


class TestNextNumber:
    """Test outbound number allocation."""

    def test_first_number(self, allocator):
        """An operator without flights starts at 100."""
        assert allocator.next_number("SNX", set()) == 100

    def test_skips_used_pairs(self, allocator):
        """100 and 110 are taken, so 120 is next."""
        assert allocator.next_number("SNX", {100, 101, 110}) == 120

    def test_reserved_successor_blocks_candidate(self, allocator):
        """A used n + 1 blocks n even when n itself is free."""
        assert allocator.next_number("SNX", {101}) == 110

    def test_unrelated_numbers_do_not_block(self, allocator):
        """Numbers off the allocation grid leave it untouched."""
        assert allocator.next_number("SNX", {105, 999}) == 100

    def test_exhausted(self, allocator):
        """Running past 9999 raises a dedicated error."""
        with pytest.raises(FlightNumberExhaustedError):
            allocator.next_number("SNX", set(range(100, 10000)))

    def test_last_slot(self, allocator):
        """The highest grid slot is still handed out."""
        used = set(range(100, 9990))
        assert allocator.next_number("SNX", used) == 9990

    def test_custom_grid(self):
        """Base and step come from the policy."""
        allocator = FlightNumberAllocator(SchedulingPolicy(flight_number_base=500, flight_number_step=20))
        assert allocator.next_number("SNX", {500}) == 520


class TestParsing:
    """Test used-number extraction and format checks."""

    def test_used_numbers_ignores_other_prefixes_and_garbage(self, allocator):
        """Only well-formed numbers of this operator are collected."""
        numbers = ["SNX100", "SNX1234", "DLH200", "SNXabc", "SNX12", "", None]
        assert allocator.used_numbers("SNX", numbers) == {100, 1234}

    @pytest.mark.parametrize("number,valid", [
        ("SNX120", True),
        ("SNX1234", True),
        ("SNX12", False),
        ("SNX12345", False),
        ("DLH120", False),
        ("snx120", False),
        ("SNX12A", False),
        ("SNX120\n", False),
        ("SNX\u0661\u0662\u0660", False),
        ("", False),
    ])
    def test_is_valid_format(self, allocator, number, valid):
        assert allocator.is_valid_format(number, "SNX") is valid

    def test_used_numbers_ascii_digits_only(self, allocator):
        """Trailing newlines and non-ASCII digits do not count as numbers."""
        assert allocator.used_numbers("SNX", ["SNX120\n", "SNX\u0661\u0662\u0660", "SNX130"]) == {130}

    def test_missing_operator_code(self, allocator):
        assert not allocator.is_valid_format("SNX120", "")

    def test_next_flight_number_from_flights(self, allocator, make_flight):
        """Allocation reads the operator's existing flights."""
        flights = [make_flight("SNX100"), make_flight("SNX101"), make_flight("DLH110")]
        assert allocator.next_flight_number("SNX", flights) == "SNX110"


class TestReturnAndUniqueness:
    """Test return numbers and uniqueness."""

    def test_return_number(self, allocator):
        assert allocator.return_flight_number("SNX120", "SNX") == "SNX121"

    def test_return_number_overflow(self, allocator):
        """9999 has no four-digit successor."""
        assert allocator.return_flight_number("SNX9999", "SNX") is None

    def test_return_number_for_malformed_outbound(self, allocator):
        assert allocator.return_flight_number("XYZ1", "SNX") is None

    def test_is_unique(self, allocator, make_flight):
        flights = [make_flight("SNX100", flight_id=1), make_flight("SNX110", flight_id=2)]

        assert allocator.is_unique("SNX120", flights)
        assert not allocator.is_unique("SNX110", flights)
        assert allocator.is_unique("SNX110", flights, excluding_flight_id=2)
