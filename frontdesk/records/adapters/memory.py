import asyncio
import datetime as dt

from loguru import logger

from frontdesk.domain.exceptions import (
    DuplicatePatientError,
    PatientNotFoundError,
    StoreUnavailableError,
)
from frontdesk.domain.models import PatientRecord
from frontdesk.records.ports import RecordMutation


class InMemoryPatientStore:
    """Process-lifetime patient store backed by an insertion-ordered dict.

    Every write goes through one ``asyncio.Lock`` so a find-mutate-save
    sequence in :meth:`update` cannot interleave with another writer.
    After :meth:`close` the store rejects writes.
    """

    def __init__(self, records: list[PatientRecord] | None = None) -> None:
        self._records: dict[str, PatientRecord] = {}
        self._lock = asyncio.Lock()
        self._closed = False
        for record in records or []:
            if record.patient_id in self._records:
                raise DuplicatePatientError(record.patient_id)
            self._records[record.patient_id] = record

    def __len__(self) -> int:
        return len(self._records)

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Patient store is closed")

    async def add(self, record: PatientRecord) -> None:
        async with self._lock:
            self._ensure_open()
            if record.patient_id in self._records:
                raise DuplicatePatientError(record.patient_id)
            self._records[record.patient_id] = record
        logger.debug("Stored patient {} ({} total)", record.patient_id, len(self._records))

    async def get(self, patient_id: str) -> PatientRecord | None:
        return self._records.get(patient_id)

    async def list_all(self) -> list[PatientRecord]:
        return list(self._records.values())

    async def find_by_name(self, fragment: str) -> list[PatientRecord]:
        needle = fragment.strip().lower()
        return [r for r in self._records.values() if needle in r.full_name.lower()]

    async def find_by_date_of_birth(self, date_of_birth: dt.date) -> list[PatientRecord]:
        return [r for r in self._records.values() if r.date_of_birth == date_of_birth]

    async def save(self, record: PatientRecord) -> None:
        async with self._lock:
            self._ensure_open()
            if record.patient_id not in self._records:
                raise PatientNotFoundError(record.patient_id)
            self._records[record.patient_id] = record

    async def update(self, patient_id: str, mutate: RecordMutation) -> PatientRecord:
        async with self._lock:
            self._ensure_open()
            current = self._records.get(patient_id)
            if current is None:
                raise PatientNotFoundError(patient_id)
            updated = mutate(current)
            if updated is not current:
                self._records[patient_id] = updated
            return updated

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        self._closed = True
        logger.debug("Patient store closed with {} record(s)", len(self._records))
