import datetime as dt
from abc import ABC, abstractmethod
from typing import Callable, Protocol

from frontdesk.domain.models import HistoryKind, NewPatient, PatientRecord, PatientUpdate

RecordMutation = Callable[[PatientRecord], PatientRecord]


class AbstractPatientService(ABC):
    """Abstract base class for front-desk patient operations."""

    @abstractmethod
    async def register_patient(self, form: NewPatient) -> PatientRecord:
        """Create a record from an intake form.

        Args:
            form: The submitted intake form.

        Returns:
            The stored record with its generated ID.

        Raises:
            MissingPatientNameError: If the first or last name is blank.
            StoreUnavailableError: If the store cannot be written.
        """

    @abstractmethod
    async def get_patient(self, patient_id: str) -> PatientRecord:
        """Fetch one record by ID.

        Raises:
            PatientNotFoundError: If no record has this ID.
        """

    @abstractmethod
    async def list_patients(self) -> list[PatientRecord]:
        """Return every record in insertion order."""

    @abstractmethod
    async def list_checked_in(self) -> list[PatientRecord]:
        """Return the records checked in today, in insertion order."""

    @abstractmethod
    async def search_patients(
        self, name: str | None = None, date_of_birth: dt.date | None = None
    ) -> list[PatientRecord]:
        """Search for patients by name fragment and/or exact date of birth.

        Args:
            name: Case-insensitive fragment of the full name, or None.
            date_of_birth: Exact DOB to match, or None to skip DOB filtering.

        Returns:
            Matching records in insertion order. Empty list if none found.

        Raises:
            EmptySearchQueryError: If neither a name nor a DOB is given.
            StoreUnavailableError: If the store cannot be read.
        """

    @abstractmethod
    async def check_in(self, patient_id: str, visit_reason: str) -> PatientRecord:
        """Mark a selected patient as checked in for a walk-in visit.

        Args:
            patient_id: The selected patient's ID.
            visit_reason: Free-text reason for today's visit.

        Returns:
            The updated record.

        Raises:
            MissingVisitReasonError: If the reason is blank.
            PatientNotFoundError: If no record has this ID.
            AlreadyCheckedInError: If the patient is already checked in.
            CheckInError: If the updated record cannot be saved.
        """

    @abstractmethod
    async def quick_check_in(self, patient_id: str, visit_reason: str) -> PatientRecord:
        """Check a patient in directly by ID, skipping search and selection.

        Same errors as :meth:`check_in`.
        """

    @abstractmethod
    async def update_details(self, patient_id: str, update: PatientUpdate) -> PatientRecord:
        """Apply a partial edit to a patient's demographic and contact fields."""

    @abstractmethod
    async def add_history_entry(
        self, patient_id: str, kind: HistoryKind, entry: str
    ) -> PatientRecord:
        """Append a medication, diagnosis or allergy. Blank entries are ignored."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""

    @abstractmethod
    async def close(self) -> None:
        """Release resources held by this service."""


class PatientStoreProtocol(Protocol):
    """Low-level interface for patient record storage."""

    async def add(self, record: PatientRecord) -> None:
        """Insert a new record."""
        ...

    async def get(self, patient_id: str) -> PatientRecord | None:
        """Look up a record by ID."""
        ...

    async def list_all(self) -> list[PatientRecord]:
        """Return all records in insertion order."""
        ...

    async def find_by_name(self, fragment: str) -> list[PatientRecord]:
        """Case-insensitive substring match on full name."""
        ...

    async def find_by_date_of_birth(self, date_of_birth: dt.date) -> list[PatientRecord]:
        """Exact date of birth match."""
        ...

    async def save(self, record: PatientRecord) -> None:
        """Replace an existing record."""
        ...

    async def update(self, patient_id: str, mutate: RecordMutation) -> PatientRecord:
        """Atomically find, mutate and save one record."""
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def close(self) -> None:
        """Release resources."""
        ...
