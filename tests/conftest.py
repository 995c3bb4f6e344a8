import pytest
from datetime import date
from typing import Generator
from sqlalchemy.orm import Session, sessionmaker
from fastapi.testclient import TestClient

from bed_planner.main import app
from bed_planner.api.deps import get_lock_manager
from bed_planner.infrastructure.database import Base, build_engine, get_db, init_db
from bed_planner.infrastructure.locks import InMemoryBedLockManager
from bed_planner.infrastructure.memory import (
    InMemoryBedRepository, InMemoryHospitalStayRepository, InMemoryPatientRepository
)
from bed_planner.domain.beds.models import Bed, BedStatus
from bed_planner.domain.beds.service import BedService
from bed_planner.domain.patients.models import Patient, Sex
from bed_planner.domain.patients.service import PatientService
from bed_planner.domain.placement.service import PlacementService
from bed_planner.domain.stays.models import HospitalStay, StayType
from bed_planner.domain.stays.service import StayService


# Test database URL
TEST_DATABASE_URL = "sqlite:///:memory:"


# ==================== Value factories ====================

@pytest.fixture
def make_patient():
    def _make(patient_id: str = "P1", **overrides) -> Patient:
        fields = {
            "id": patient_id,
            "first_name": "John",
            "last_name": "Doe",
            "birth_date": date(1980, 1, 1),
            "sex": Sex.MALE,
        }
        fields.update(overrides)
        return Patient(**fields)
    return _make


@pytest.fixture
def make_bed():
    def _make(bed_id: str, code: str, **overrides) -> Bed:
        fields = {
            "id": bed_id,
            "room_id": "R1",
            "code": code,
            "status": BedStatus.AVAILABLE,
            "isolation_capable": False,
        }
        fields.update(overrides)
        return Bed(**fields)
    return _make


@pytest.fixture
def make_stay():
    def _make(stay_id: str, patient_id: str, bed_id: str, admission: date, **overrides) -> HospitalStay:
        fields = {
            "id": stay_id,
            "patient_id": patient_id,
            "bed_id": bed_id,
            "stay_type": StayType.WEEK,
            "admission_date": admission,
        }
        fields.update(overrides)
        return HospitalStay(**fields)
    return _make


# ==================== In-memory repositories and services ====================

@pytest.fixture
def patient_repo() -> InMemoryPatientRepository:
    return InMemoryPatientRepository()


@pytest.fixture
def bed_repo() -> InMemoryBedRepository:
    return InMemoryBedRepository()


@pytest.fixture
def stay_repo() -> InMemoryHospitalStayRepository:
    return InMemoryHospitalStayRepository()


@pytest.fixture
def lock_manager() -> InMemoryBedLockManager:
    return InMemoryBedLockManager(wait_seconds=2.0)


@pytest.fixture
def patient_service(patient_repo) -> PatientService:
    return PatientService(patient_repo)


@pytest.fixture
def bed_service(bed_repo) -> BedService:
    return BedService(bed_repo)


@pytest.fixture
def stay_service(stay_repo, patient_repo, bed_repo) -> StayService:
    return StayService(stay_repo, patient_repo, bed_repo)


@pytest.fixture
def placement_service(patient_repo, bed_repo, stay_repo, lock_manager) -> PlacementService:
    return PlacementService(patient_repo, bed_repo, stay_repo, lock_manager=lock_manager)


# ==================== Database and HTTP client ====================

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh in-memory database session for each test."""
    engine = build_engine(TEST_DATABASE_URL, echo=False)
    init_db(bind=engine)
    TestSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""

    def override_get_db():
        yield db_session

    lock_manager = InMemoryBedLockManager(wait_seconds=2.0)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_manager] = lambda: lock_manager

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def sample_patient_data() -> dict:
    """Sample patient data for testing."""
    return {
        "id": "P-100",
        "first_name": "Jane",
        "last_name": "Smith",
        "birth_date": "1975-06-15",
        "sex": "FEMALE",
        "reduced_mobility": False,
        "isolation_required": False,
        "phone_number": "+33 6 12 34 56 78",
        "notes": "Allergic to penicillin"
    }


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "placement: mark test as bed placement related"
    )
    config.addinivalue_line(
        "markers", "stays: mark test as hospital stay lifecycle related"
    )
    config.addinivalue_line(
        "markers", "beds: mark test as bed registry related"
    )
    config.addinivalue_line(
        "markers", "patients: mark test as patient management related"
    )
