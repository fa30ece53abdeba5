from enum import Enum

from pydantic import BaseModel, ConfigDict

from frontdesk.domain.models import PatientRecord


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Alert(BaseModel):
    """A message the operator must acknowledge, as shown in a modal dialog."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    title: str
    message: str

    @classmethod
    def info(cls, title: str, message: str) -> "Alert":
        return cls(severity=Severity.INFO, title=title, message=message)

    @classmethod
    def warning(cls, title: str, message: str) -> "Alert":
        return cls(severity=Severity.WARNING, title=title, message=message)

    @classmethod
    def error(cls, title: str, message: str) -> "Alert":
        return cls(severity=Severity.ERROR, title=title, message=message)


class DeskResponse(BaseModel):
    """Outcome of one operator action."""

    model_config = ConfigDict(frozen=True)

    success: bool
    alert: Alert | None = None
    patients: tuple[PatientRecord, ...] = ()

    @property
    def patient(self) -> PatientRecord | None:
        return self.patients[0] if self.patients else None

    @classmethod
    def ok(cls, *patients: PatientRecord, alert: Alert | None = None) -> "DeskResponse":
        return cls(success=True, alert=alert, patients=patients)

    @classmethod
    def failed(cls, alert: Alert) -> "DeskResponse":
        return cls(success=False, alert=alert)
