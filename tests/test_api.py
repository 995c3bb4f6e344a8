import pytest
from fastapi.testclient import TestClient


API = "/api/v1"


def create_bed(client: TestClient, bed_id: str, code: str, **extra) -> dict:
    response = client.post(f"{API}/beds", json={"id": bed_id, "room_id": "R1", "code": code, **extra})
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
@pytest.mark.patients
class TestPatientEndpoints:
    """Patient registry over HTTP."""

    def test_create_patient_success(self, client: TestClient, sample_patient_data: dict) -> None:
        response = client.post(f"{API}/patients", json=sample_patient_data)

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "P-100"
        assert data["full_name"] == "Jane Smith"
        assert data["sex"] == "FEMALE"
        assert data["birth_date"] == "1975-06-15"

    def test_create_patient_day_first_birth_date(self, client: TestClient, sample_patient_data: dict) -> None:
        sample_patient_data["birth_date"] = "15/06/1975"

        response = client.post(f"{API}/patients", json=sample_patient_data)

        assert response.status_code == 201
        assert response.json()["birth_date"] == "1975-06-15"

    def test_create_patient_validation_error(self, client: TestClient, sample_patient_data: dict) -> None:
        sample_patient_data["birth_date"] = "invalid-date"

        response = client.post(f"{API}/patients", json=sample_patient_data)

        assert response.status_code == 422

    def test_blank_name_is_rejected_by_service(self, client: TestClient, sample_patient_data: dict) -> None:
        sample_patient_data["first_name"] = "  "

        response = client.post(f"{API}/patients", json=sample_patient_data)

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_INPUT"

    def test_duplicate_patient(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)

        response = client.post(f"{API}/patients", json=sample_patient_data)

        assert response.status_code == 409
        assert response.json()["details"] == {"patient_id": "P-100"}

    def test_get_and_update_patient(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)

        response = client.put(f"{API}/patients/P-100", json={"isolation_required": True})

        assert response.status_code == 200
        assert response.json()["isolation_required"] is True
        fetched = client.get(f"{API}/patients/P-100").json()
        assert fetched["isolation_required"] is True
        assert fetched["notes"] == sample_patient_data["notes"]

    def test_update_rejects_malformed_phone(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)

        response = client.put(f"{API}/patients/P-100", json={"phone_number": "abc"})

        assert response.status_code == 422
        assert client.get(f"{API}/patients/P-100").json()["phone_number"] == sample_patient_data["phone_number"]

    def test_get_patient_not_found(self, client: TestClient) -> None:
        response = client.get(f"{API}/patients/P-404")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "NOT_FOUND_ERROR"
        assert "does not exist" in body["message"]

    def test_list_patients(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)

        response = client.get(f"{API}/patients")

        assert response.status_code == 200
        assert [patient["id"] for patient in response.json()] == ["P-100"]


@pytest.mark.integration
@pytest.mark.beds
class TestBedEndpoints:
    """Bed registry over HTTP."""

    def test_create_and_filter_by_status(self, client: TestClient) -> None:
        bed = create_bed(client, "BED-1", "A01-1")
        create_bed(client, "BED-2", "A02-1", status="cleaning")

        assert bed["status"] == "available"
        response = client.get(f"{API}/beds", params={"status": "cleaning"})
        assert [b["id"] for b in response.json()] == ["BED-2"]

    def test_update_status(self, client: TestClient) -> None:
        create_bed(client, "BED-1", "A01-1")

        response = client.patch(f"{API}/beds/BED-1/status", json={"status": "out_of_order"})

        assert response.status_code == 200
        assert response.json()["status"] == "out_of_order"
        assert client.get(f"{API}/beds/BED-1").json()["status"] == "out_of_order"

    def test_unknown_status_value(self, client: TestClient) -> None:
        create_bed(client, "BED-1", "A01-1")

        response = client.patch(f"{API}/beds/BED-1/status", json={"status": "broken"})

        assert response.status_code == 422

    def test_delete_bed(self, client: TestClient) -> None:
        create_bed(client, "BED-1", "A01-1")

        assert client.delete(f"{API}/beds/BED-1").status_code == 204
        assert client.get(f"{API}/beds/BED-1").status_code == 404
        assert client.delete(f"{API}/beds/BED-1").status_code == 404


@pytest.mark.integration
@pytest.mark.placement
class TestPlacementEndpoints:
    """Suggestion, placement and discharge over HTTP."""

    @pytest.fixture
    def ward(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)
        create_bed(client, "BED-2", "A02-1")
        create_bed(client, "BED-1", "A01-1")

    def test_suggestion(self, client: TestClient, ward) -> None:
        response = client.get(
            f"{API}/placement/suggestion", params={"patient_id": "P-100", "on": "2025-01-15"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bed"]["code"] == "A01-1"
        assert data["on"] == "2025-01-15"

    def test_suggestion_unknown_patient(self, client: TestClient, ward) -> None:
        response = client.get(
            f"{API}/placement/suggestion", params={"patient_id": "P-404", "on": "2025-01-15"}
        )

        assert response.status_code == 404

    def test_suggestion_bad_date(self, client: TestClient, ward) -> None:
        response = client.get(
            f"{API}/placement/suggestion", params={"patient_id": "P-100", "on": "someday"}
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_INPUT"

    def test_place_until_ward_is_full(self, client: TestClient, ward) -> None:
        body = {"patient_id": "P-100", "admission_date": "15/01/2025", "stay_type": "WEEK"}

        first = client.post(f"{API}/placement", json={**body, "id": "S1"})
        second = client.post(f"{API}/placement", json=body)
        third = client.post(f"{API}/placement", json={**body, "id": "S3"})

        assert first.status_code == 201
        assert first.json()["stay"]["bed_id"] == "BED-1"
        assert first.json()["stay"]["state"] == "OPEN"
        assert second.status_code == 201
        assert second.json()["stay"]["bed_id"] == "BED-2"
        assert second.json()["stay"]["id"].startswith("STAY-")
        assert third.status_code == 200
        assert third.json()["stay"] is None

        suggestion = client.get(
            f"{API}/placement/suggestion", params={"patient_id": "P-100", "on": "2025-01-15"}
        )
        assert suggestion.json()["bed"] is None

    def test_discharge_frees_bed(self, client: TestClient, ward) -> None:
        client.post(f"{API}/placement", json={
            "id": "S1", "patient_id": "P-100", "admission_date": "2025-01-10", "stay_type": "DAY"
        })

        response = client.post(f"{API}/stays/S1/discharge", json={"discharge_date": "2025-01-12"})

        assert response.status_code == 200
        assert response.json()["state"] == "DISCHARGED"
        assert response.json()["discharge_date_effective"] == "2025-01-12"
        suggestion = client.get(
            f"{API}/placement/suggestion", params={"patient_id": "P-100", "on": "2025-01-13"}
        )
        assert suggestion.json()["bed"]["id"] == "BED-1"

        again = client.post(f"{API}/stays/S1/discharge", json={"discharge_date": "2025-01-13"})
        assert again.status_code == 409
        assert again.json()["error_code"] == "INVALID_STATE_TRANSITION"

        early = client.post(f"{API}/stays/S1/discharge", json={"discharge_date": "2025-01-01"})
        assert early.status_code == 422


@pytest.mark.integration
@pytest.mark.stays
class TestStayEndpoints:
    """Explicit stays and stay queries over HTTP."""

    @pytest.fixture
    def ward(self, client: TestClient, sample_patient_data: dict) -> None:
        client.post(f"{API}/patients", json=sample_patient_data)
        create_bed(client, "BED-1", "A01-1")

    def test_create_and_query(self, client: TestClient, ward) -> None:
        response = client.post(f"{API}/stays", json={
            "id": "S1", "patient_id": "P-100", "bed_id": "BED-1",
            "admission_date": "2025-01-10", "discharge_date_planned": "20-01-2025",
            "stay_type": "WEEK"
        })

        assert response.status_code == 201
        assert response.json()["discharge_date_planned"] == "2025-01-20"
        assert client.get(f"{API}/stays/S1").json()["bed_id"] == "BED-1"
        assert [s["id"] for s in client.get(f"{API}/stays").json()] == ["S1"]
        assert [s["id"] for s in client.get(f"{API}/patients/P-100/stays").json()] == ["S1"]
        active = client.get(f"{API}/stays/active", params={"on": "15/01/2025"}).json()
        assert [s["id"] for s in active] == ["S1"]
        assert client.get(f"{API}/stays/active", params={"on": "2025-01-09"}).json() == []

    def test_create_with_unknown_bed(self, client: TestClient, ward) -> None:
        response = client.post(f"{API}/stays", json={
            "patient_id": "P-100", "bed_id": "BED-404",
            "admission_date": "2025-01-10", "stay_type": "WEEK"
        })

        assert response.status_code == 404

    def test_planned_discharge_before_admission(self, client: TestClient, ward) -> None:
        response = client.post(f"{API}/stays", json={
            "patient_id": "P-100", "bed_id": "BED-1",
            "admission_date": "2025-01-10", "discharge_date_planned": "2025-01-01",
            "stay_type": "WEEK"
        })

        assert response.status_code == 422

    def test_unknown_stay(self, client: TestClient) -> None:
        assert client.get(f"{API}/stays/S404").status_code == 404


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
