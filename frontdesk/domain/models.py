import datetime as dt
import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def new_patient_id() -> str:
    """Generate a process-unique patient ID."""
    return uuid.uuid4().hex


def _clean_entries(entries: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    return tuple(e.strip() for e in entries if e and e.strip())


class CheckInKind(str, Enum):
    """How a patient arrived at the desk."""

    WALK_IN = "walk_in"
    QUICK = "quick"


class HistoryKind(str, Enum):
    """Medical history lists kept on a patient record."""

    MEDICATION = "medications"
    DIAGNOSIS = "diagnoses"
    ALLERGY = "allergies"


class ContactDetails(BaseModel):
    """Demographic and contact fields captured on the intake form."""

    model_config = ConfigDict(frozen=True)

    gender: str = ""
    phone_number: str = ""
    email: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    emergency_contact: str = ""
    emergency_phone: str = ""
    insurance_provider: str = ""
    insurance_policy_number: str = ""


class NewPatient(BaseModel):
    """An intake form submission for a patient not yet in the store."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    date_of_birth: dt.date | None = None
    contact: ContactDetails = Field(default_factory=ContactDetails)
    medications: tuple[str, ...] = ()
    diagnoses: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()


class PatientUpdate(BaseModel):
    """A partial edit of a patient's details. ``None`` leaves a field as is."""

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: dt.date | None = None
    gender: str | None = None
    phone_number: str | None = None
    email: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    emergency_contact: str | None = None
    emergency_phone: str | None = None
    insurance_provider: str | None = None
    insurance_policy_number: str | None = None

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


_NAME_FIELDS = frozenset({"first_name", "last_name", "date_of_birth"})


class PatientRecord(BaseModel):
    """The demographic and visit-status record for one patient.

    Records are immutable. The ``with_*`` methods return an updated copy;
    the store decides whether that copy replaces the stored one.
    """

    model_config = ConfigDict(frozen=True)

    patient_id: str = Field(default_factory=new_patient_id)
    first_name: str
    last_name: str
    date_of_birth: dt.date | None = None
    contact: ContactDetails = Field(default_factory=ContactDetails)
    medications: tuple[str, ...] = ()
    diagnoses: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()
    checked_in: bool = False
    visit_reason: str = ""
    check_in_kind: CheckInKind | None = None
    last_updated: dt.datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> int | None:
        if self.date_of_birth is None:
            return None
        today = dt.date.today()
        dob = self.date_of_birth
        return today.year - dob.year - ((today.month, today.day) < (dob.month, dob.day))

    @classmethod
    def from_intake(cls, form: NewPatient, now: dt.datetime) -> "PatientRecord":
        return cls(
            first_name=form.first_name.strip(),
            last_name=form.last_name.strip(),
            date_of_birth=form.date_of_birth,
            contact=form.contact,
            medications=_clean_entries(form.medications),
            diagnoses=_clean_entries(form.diagnoses),
            allergies=_clean_entries(form.allergies),
            last_updated=now,
        )

    def with_check_in(self, reason: str, kind: CheckInKind, now: dt.datetime) -> "PatientRecord":
        return self.model_copy(
            update={
                "checked_in": True,
                "visit_reason": reason,
                "check_in_kind": kind,
                "last_updated": now,
            }
        )

    def with_details(self, update: PatientUpdate, now: dt.datetime) -> "PatientRecord":
        changes = update.changes()
        top_level = {k: v for k, v in changes.items() if k in _NAME_FIELDS}
        contact = {k: v for k, v in changes.items() if k not in _NAME_FIELDS}
        for key in ("first_name", "last_name"):
            if key in top_level:
                top_level[key] = str(top_level[key]).strip()
        return self.model_copy(
            update={
                **top_level,
                "contact": self.contact.model_copy(update=contact),
                "last_updated": now,
            }
        )

    def with_history_entry(
        self, kind: HistoryKind, entry: str, now: dt.datetime
    ) -> "PatientRecord":
        current: tuple[str, ...] = getattr(self, kind.value)
        return self.model_copy(
            update={kind.value: (*current, entry.strip()), "last_updated": now}
        )
