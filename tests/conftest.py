import datetime as dt

import pytest

from frontdesk.domain.models import PatientRecord
from frontdesk.records.adapters.fake import FakePatientStore
from frontdesk.records.service import PatientService

FIXED_NOW = dt.datetime(2026, 3, 15, 9, 30, tzinfo=dt.timezone.utc)


@pytest.fixture
def fake_store() -> FakePatientStore:
    return FakePatientStore()


@pytest.fixture
def service(fake_store: FakePatientStore) -> PatientService:
    return PatientService(store=fake_store, clock=lambda: FIXED_NOW)


@pytest.fixture
def smiths() -> list[PatientRecord]:
    return [
        PatientRecord(
            patient_id="1", first_name="John", last_name="Smith", date_of_birth=dt.date(1985, 3, 15)
        ),
        PatientRecord(
            patient_id="2", first_name="Mary", last_name="Johnson", date_of_birth=dt.date(1972, 8, 22)
        ),
        PatientRecord(
            patient_id="3", first_name="Anna", last_name="SMITHERS", date_of_birth=dt.date(1990, 1, 1)
        ),
        PatientRecord(
            patient_id="4", first_name="Paul", last_name="Blacksmith", date_of_birth=dt.date(1985, 3, 15)
        ),
    ]


@pytest.fixture
def now() -> dt.datetime:
    return FIXED_NOW
