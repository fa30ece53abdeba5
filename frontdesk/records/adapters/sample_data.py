import datetime as dt

from loguru import logger

from frontdesk.domain.models import CheckInKind, ContactDetails, PatientRecord
from frontdesk.records.ports import PatientStoreProtocol


def sample_patients(now: dt.datetime) -> list[PatientRecord]:
    """Four demo patients, two of them already checked in."""
    return [
        PatientRecord(
            first_name="John",
            last_name="Smith",
            date_of_birth=dt.date(1985, 3, 15),
            contact=ContactDetails(
                gender="Male",
                phone_number="555-0123",
                email="john.smith@email.com",
                insurance_provider="Blue Cross",
            ),
            last_updated=now,
        ),
        PatientRecord(
            first_name="Mary",
            last_name="Johnson",
            date_of_birth=dt.date(1972, 8, 22),
            contact=ContactDetails(
                gender="Female",
                phone_number="555-0456",
                email="mary.johnson@email.com",
                insurance_provider="Aetna",
            ),
            checked_in=True,
            visit_reason="Follow-up",
            check_in_kind=CheckInKind.WALK_IN,
            last_updated=now,
        ),
        PatientRecord(
            first_name="Robert",
            last_name="Davis",
            date_of_birth=dt.date(1990, 12, 5),
            contact=ContactDetails(
                gender="Male",
                phone_number="555-0789",
                email="robert.davis@email.com",
                insurance_provider="United Healthcare",
            ),
            last_updated=now,
        ),
        PatientRecord(
            first_name="Sarah",
            last_name="Wilson",
            date_of_birth=dt.date(1988, 6, 10),
            contact=ContactDetails(
                gender="Female",
                phone_number="555-0321",
                email="sarah.wilson@email.com",
                insurance_provider="Cigna",
            ),
            checked_in=True,
            visit_reason="Regular checkup",
            check_in_kind=CheckInKind.WALK_IN,
            last_updated=now - dt.timedelta(days=1),
        ),
    ]


async def seed_sample_patients(store: PatientStoreProtocol, now: dt.datetime) -> int:
    patients = sample_patients(now)
    for patient in patients:
        await store.add(patient)
    logger.info("Seeded {} sample patients", len(patients))
    return len(patients)
