import datetime as dt

from frontdesk.domain.exceptions import PatientNotFoundError
from frontdesk.domain.models import PatientRecord
from frontdesk.records.ports import RecordMutation


class FakePatientStore:
    """In-memory test double for the PatientStoreProtocol protocol.

    Pre-load ``patients`` to control what the store returns.  Set
    ``get_error``, ``search_error``, ``add_error`` or ``save_error`` to make the
    corresponding method raise.  ``save_error`` is raised after the mutation
    has been computed, so callers see a failed write with nothing stored.

    After calls, inspect ``added``, ``saved`` and ``queries`` to verify what
    reached the store.
    """

    def __init__(self) -> None:
        self.patients: list[PatientRecord] = []
        self.added: list[PatientRecord] = []
        self.saved: list[PatientRecord] = []
        self.queries: int = 0
        self.closed: bool = False

        self.get_error: Exception | None = None
        self.search_error: Exception | None = None
        self.add_error: Exception | None = None
        self.save_error: Exception | None = None

    def _replace(self, record: PatientRecord) -> None:
        for i, existing in enumerate(self.patients):
            if existing.patient_id == record.patient_id:
                self.patients[i] = record
                return
        raise PatientNotFoundError(record.patient_id)

    async def add(self, record: PatientRecord) -> None:
        if self.add_error:
            raise self.add_error
        self.added.append(record)
        self.patients.append(record)

    async def get(self, patient_id: str) -> PatientRecord | None:
        if self.get_error:
            raise self.get_error
        return next((p for p in self.patients if p.patient_id == patient_id), None)

    async def list_all(self) -> list[PatientRecord]:
        if self.search_error:
            raise self.search_error
        return list(self.patients)

    async def find_by_name(self, fragment: str) -> list[PatientRecord]:
        self.queries += 1
        if self.search_error:
            raise self.search_error
        return [p for p in self.patients if fragment.lower() in p.full_name.lower()]

    async def find_by_date_of_birth(self, date_of_birth: dt.date) -> list[PatientRecord]:
        self.queries += 1
        if self.search_error:
            raise self.search_error
        return [p for p in self.patients if p.date_of_birth == date_of_birth]

    async def save(self, record: PatientRecord) -> None:
        if self.save_error:
            raise self.save_error
        self._replace(record)
        self.saved.append(record)

    async def update(self, patient_id: str, mutate: RecordMutation) -> PatientRecord:
        current = await self.get(patient_id)
        if current is None:
            raise PatientNotFoundError(patient_id)
        updated = mutate(current)
        if updated is not current:
            await self.save(updated)
        return updated

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True
