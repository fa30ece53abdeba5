import datetime as dt
from typing import Callable

from loguru import logger

from frontdesk.domain.exceptions import (
    AlreadyCheckedInError,
    CheckInError,
    EmptySearchQueryError,
    FrontDeskError,
    MissingPatientNameError,
    MissingVisitReasonError,
    PatientNotFoundError,
    StoreUnavailableError,
)
from frontdesk.domain.models import (
    CheckInKind,
    HistoryKind,
    NewPatient,
    PatientRecord,
    PatientUpdate,
)
from frontdesk.records.adapters.datetime_helpers import resolve_timezone
from frontdesk.records.ports import (
    AbstractPatientService,
    PatientStoreProtocol,
    RecordMutation,
)

Clock = Callable[[], dt.datetime]


class PatientService(AbstractPatientService):
    """Patient service that delegates to a PatientStoreProtocol and adds business rules."""

    def __init__(
        self,
        store: PatientStoreProtocol,
        *,
        clinic_timezone: str = "America/New_York",
        clock: Clock | None = None,
    ) -> None:
        self._store = store
        self._tz = resolve_timezone(clinic_timezone)
        self._clock = clock or (lambda: dt.datetime.now(self._tz))

    @property
    def store(self) -> PatientStoreProtocol:
        return self._store

    def now(self) -> dt.datetime:
        return self._clock()

    async def register_patient(self, form: NewPatient) -> PatientRecord:
        """Validate the intake form and store a new record."""
        for field in ("first_name", "last_name"):
            if not getattr(form, field).strip():
                raise MissingPatientNameError(field)

        record = PatientRecord.from_intake(form, self.now())
        try:
            await self._store.add(record)
        except FrontDeskError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Patient registration failed: {exc}") from exc

        logger.info("Registered patient: id={}", record.patient_id)
        return record

    async def get_patient(self, patient_id: str) -> PatientRecord:
        try:
            record = await self._store.get(patient_id.strip())
        except FrontDeskError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Patient lookup failed: {exc}") from exc
        if record is None:
            raise PatientNotFoundError(patient_id)
        return record

    async def list_patients(self) -> list[PatientRecord]:
        try:
            return await self._store.list_all()
        except FrontDeskError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Patient listing failed: {exc}") from exc

    async def list_checked_in(self) -> list[PatientRecord]:
        """Patients checked in today, in clinic time."""
        today = self.now().astimezone(self._tz).date()
        return [
            p
            for p in await self.list_patients()
            if p.checked_in
            and p.last_updated is not None
            and p.last_updated.astimezone(self._tz).date() == today
        ]

    async def search_patients(
        self, name: str | None = None, date_of_birth: dt.date | None = None
    ) -> list[PatientRecord]:
        """Search by name fragment, then filter by DOB."""
        name = (name or "").strip()
        if not name and date_of_birth is None:
            raise EmptySearchQueryError()

        logger.info("Searching for patient with provided identity details")

        try:
            if name:
                patients = await self._store.find_by_name(name)
            else:
                patients = await self._store.find_by_date_of_birth(date_of_birth)  # type: ignore[arg-type]
        except StoreUnavailableError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Patient search failed: {exc}") from exc

        if name and date_of_birth is not None:
            patients = [p for p in patients if p.date_of_birth == date_of_birth]

        if patients:
            logger.info("Found {} patient(s) matching criteria", len(patients))
        else:
            logger.info("No patients found for name={}, dob={}", name, date_of_birth)

        return patients

    async def check_in(self, patient_id: str, visit_reason: str) -> PatientRecord:
        return await self._check_in(patient_id, visit_reason, CheckInKind.WALK_IN)

    async def quick_check_in(self, patient_id: str, visit_reason: str) -> PatientRecord:
        return await self._check_in(patient_id, visit_reason, CheckInKind.QUICK)

    async def _check_in(
        self, patient_id: str, visit_reason: str, kind: CheckInKind
    ) -> PatientRecord:
        reason = visit_reason.strip()
        if not reason:
            raise MissingVisitReasonError()
        patient_id = patient_id.strip()
        if not patient_id:
            logger.warning("Check-in requested with an empty patient ID")
            raise PatientNotFoundError(patient_id)

        logger.info("Checking in patient: id={}, kind={}", patient_id, kind.value)
        now = self.now()

        def mark_checked_in(record: PatientRecord) -> PatientRecord:
            if record.checked_in:
                raise AlreadyCheckedInError(record.patient_id)
            return record.with_check_in(reason, kind, now)

        try:
            record = await self._store.update(patient_id, mark_checked_in)
        except (PatientNotFoundError, AlreadyCheckedInError):
            raise
        except Exception as exc:
            raise CheckInError(reason=str(exc), patient_id=patient_id) from exc

        logger.info("Check-in saved: id={}", record.patient_id)
        return record

    async def update_details(self, patient_id: str, update: PatientUpdate) -> PatientRecord:
        for field in ("first_name", "last_name"):
            value = getattr(update, field)
            if value is not None and not value.strip():
                raise MissingPatientNameError(field)

        now = self.now()
        record = await self._update(patient_id, lambda r: r.with_details(update, now))
        logger.info("Updated details for patient: id={}", record.patient_id)
        return record

    async def add_history_entry(
        self, patient_id: str, kind: HistoryKind, entry: str
    ) -> PatientRecord:
        if not entry or not entry.strip():
            return await self.get_patient(patient_id)

        now = self.now()
        return await self._update(patient_id, lambda r: r.with_history_entry(kind, entry, now))

    async def _update(self, patient_id: str, mutate: RecordMutation) -> PatientRecord:
        try:
            return await self._store.update(patient_id.strip(), mutate)
        except FrontDeskError:
            raise
        except Exception as exc:
            raise StoreUnavailableError(f"Patient update failed: {exc}") from exc

    async def health_check(self) -> bool:
        return await self._store.health_check()

    async def close(self) -> None:
        await self._store.close()
