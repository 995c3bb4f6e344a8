import pytest

from bed_planner.domain.beds.models import BedStatus
from bed_planner.domain.placement.candidates import (
    BED_CODE_ORDER, IsolationPolicy, apply_isolation_policy, eligible_beds
)


@pytest.mark.unit
@pytest.mark.placement
class TestEligibleBeds:
    """Status and occupancy filtering of the bed registry."""

    def test_only_available_and_unoccupied_beds(self, make_bed) -> None:
        beds = [
            make_bed("B1", "A01-1"),
            make_bed("B2", "A01-2", status=BedStatus.CLEANING),
            make_bed("B3", "A01-3", status=BedStatus.OUT_OF_ORDER),
            make_bed("B4", "A01-4", status=BedStatus.OCCUPIED),
            make_bed("B5", "A01-5"),
        ]

        result = eligible_beds(beds, {"B5"})

        assert [bed.id for bed in result] == ["B1"]

    def test_sorted_by_code(self, make_bed) -> None:
        beds = [make_bed("B1", "C01-1"), make_bed("B2", "A02-1"), make_bed("B3", "A01-1")]

        result = eligible_beds(beds, set())

        assert [bed.code for bed in result] == ["A01-1", "A02-1", "C01-1"]

    def test_code_order_is_lexicographic(self, make_bed) -> None:
        beds = [make_bed("B1", "A10-1"), make_bed("B2", "A9-1")]

        assert [bed.code for bed in eligible_beds(beds, set())] == ["A10-1", "A9-1"]

    def test_order_key_is_swappable(self, make_bed) -> None:
        beds = [make_bed("B1", "A01-1", room_id="R2"), make_bed("B2", "A02-1", room_id="R1")]

        result = eligible_beds(beds, set(), order=lambda bed: (bed.room_id, bed.code))

        assert [bed.id for bed in result] == ["B2", "B1"]

    def test_duplicate_codes_fall_back_to_id(self, make_bed) -> None:
        beds = [make_bed("B2", "A01-1"), make_bed("B1", "A01-1")]

        assert [bed.id for bed in eligible_beds(beds, set(), BED_CODE_ORDER)] == ["B1", "B2"]


@pytest.mark.unit
@pytest.mark.placement
class TestIsolationPolicy:
    """Isolation restriction applied on ordered candidates."""

    @pytest.fixture
    def candidates(self, make_bed):
        return [
            make_bed("B1", "A01-1"),
            make_bed("B2", "A02-1", isolation_capable=True),
            make_bed("B3", "A03-1"),
            make_bed("B4", "A04-1", isolation_capable=True),
        ]

    def test_patient_without_isolation_uses_every_candidate(self, candidates, make_patient) -> None:
        patient = make_patient()

        for policy in IsolationPolicy:
            result = apply_isolation_policy(candidates, patient, policy)
            assert [bed.id for bed in result] == ["B1", "B2", "B3", "B4"]

    def test_strict_keeps_isolation_capable_only(self, candidates, make_patient) -> None:
        patient = make_patient(isolation_required=True)

        result = apply_isolation_policy(candidates, patient, IsolationPolicy.STRICT)

        assert [bed.id for bed in result] == ["B2", "B4"]

    def test_strict_without_capable_bed_is_empty(self, make_bed, make_patient) -> None:
        patient = make_patient(isolation_required=True)

        assert apply_isolation_policy([make_bed("B1", "A01-1")], patient) == []

    def test_preferred_puts_capable_beds_first(self, candidates, make_patient) -> None:
        patient = make_patient(isolation_required=True)

        result = apply_isolation_policy(candidates, patient, IsolationPolicy.PREFERRED)

        assert [bed.id for bed in result] == ["B2", "B4", "B1", "B3"]

    def test_ignore_keeps_order(self, candidates, make_patient) -> None:
        patient = make_patient(isolation_required=True)

        result = apply_isolation_policy(candidates, patient, IsolationPolicy.IGNORE)

        assert [bed.id for bed in result] == ["B1", "B2", "B3", "B4"]
