class FrontDeskError(Exception):
    """Base exception for all front-desk errors."""


class StoreUnavailableError(FrontDeskError):
    """Raised when the patient store cannot be read or written."""


class PatientNotFoundError(FrontDeskError):
    """Raised when no record exists for a patient ID."""

    def __init__(self, patient_id: str) -> None:
        self.patient_id = patient_id
        super().__init__(f"No patient found with ID '{patient_id}'")


class DuplicatePatientError(FrontDeskError):
    """Raised when a record with the same ID is already stored."""

    def __init__(self, patient_id: str) -> None:
        self.patient_id = patient_id
        super().__init__(f"Patient ID '{patient_id}' already exists")


class PatientValidationError(FrontDeskError):
    """Base for operator input errors. The action is blocked, nothing is written."""


class EmptySearchQueryError(PatientValidationError):
    """Raised when a search has neither a name nor a date of birth."""

    def __init__(self) -> None:
        super().__init__("Please enter a name or select a date of birth to search.")


class MissingVisitReasonError(PatientValidationError):
    """Raised when a check-in is attempted without a reason for the visit."""

    def __init__(self) -> None:
        super().__init__("Please provide a reason for the visit.")


class MissingPatientNameError(PatientValidationError):
    """Raised when an intake form has a blank first or last name."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Patient {field.replace('_', ' ')} is required.")


class AlreadyCheckedInError(FrontDeskError):
    """Raised when checking in a patient who is already checked in."""

    def __init__(self, patient_id: str) -> None:
        self.patient_id = patient_id
        super().__init__(f"Patient '{patient_id}' is already checked in")


class CheckInError(FrontDeskError):
    """Raised when a check-in cannot be saved."""

    def __init__(self, reason: str, patient_id: str | None = None) -> None:
        self.reason = reason
        self.patient_id = patient_id
        super().__init__(f"Failed to save check-in: {reason}")


class PreferencesError(FrontDeskError):
    """Raised when operator preferences cannot be written."""
