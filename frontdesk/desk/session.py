from loguru import logger

from frontdesk.desk.alerts import Alert, DeskResponse
from frontdesk.domain.exceptions import (
    AlreadyCheckedInError,
    CheckInError,
    FrontDeskError,
    PatientNotFoundError,
    PatientValidationError,
)
from frontdesk.domain.models import PatientRecord
from frontdesk.preferences import Preferences
from frontdesk.records.adapters.parsing_helpers import parse_date_of_birth
from frontdesk.records.ports import AbstractPatientService

NO_RESULTS_MESSAGE = (
    "No patients found matching your search criteria.\n\n"
    "Please verify the name and date of birth, or register the patient first "
    "using the Patient Information Form."
)


def check_in_success_alert(record: PatientRecord, prefs: Preferences) -> Alert:
    stamp = prefs.format_timestamp(record.last_updated) if record.last_updated else ""
    return Alert.info(
        "Check-In Complete",
        "Check-in completed successfully!\n\n"
        f"Patient: {record.full_name}\n"
        f"Reason for Visit: {record.visit_reason}\n"
        f"Check-in Time: {stamp}",
    )


def check_in_failure_alert(exc: FrontDeskError) -> Alert:
    """Map an expected check-in failure to the dialog the operator sees."""
    if isinstance(exc, PatientValidationError):
        return Alert.warning("Input Error", str(exc))
    if isinstance(exc, AlreadyCheckedInError):
        return Alert.warning("Already Checked In", "This patient is already checked in.")
    if isinstance(exc, PatientNotFoundError):
        return Alert.warning("Selection Error", "No patient found with that ID.")
    if isinstance(exc, CheckInError):
        return Alert.error("Save Error", "Failed to save check-in data. Please try again.")
    return Alert.error("Error", str(exc))


class CheckInSession:
    """Coordinates one operator's search, select and check-in flow.

    Each step returns a :class:`DeskResponse`; expected failures come back
    as alerts rather than exceptions.  A successful check-in or a
    :meth:`cancel` resets the session.
    """

    def __init__(self, service: AbstractPatientService, prefs: Preferences | None = None) -> None:
        self._service = service
        self.prefs = prefs or Preferences()
        self._results: list[PatientRecord] = []
        self._selected: PatientRecord | None = None

    @property
    def results(self) -> list[PatientRecord]:
        return list(self._results)

    @property
    def selected(self) -> PatientRecord | None:
        return self._selected

    def describe(self, record: PatientRecord) -> str:
        """One line for the results list, e.g. ``John Smith (DOB: 03/15/1985)``."""
        dob = self.prefs.format_date(record.date_of_birth) if record.date_of_birth else "unknown"
        status = " [checked in]" if record.checked_in else ""
        return f"{record.full_name} (DOB: {dob}){status}"

    async def search(self, name: str = "", dob_text: str = "") -> DeskResponse:
        self._results = []
        self._selected = None

        date_of_birth = None
        if dob_text.strip():
            date_of_birth = parse_date_of_birth(dob_text, self.prefs.date_format)
            if date_of_birth is None:
                return DeskResponse.failed(
                    Alert.warning(
                        "Search Error",
                        f"'{dob_text.strip()}' is not a valid date of birth. "
                        f"Use {self.prefs.date_format}.",
                    )
                )

        try:
            patients = await self._service.search_patients(name, date_of_birth)
        except PatientValidationError as exc:
            return DeskResponse.failed(Alert.warning("Search Error", str(exc)))
        except FrontDeskError as exc:
            return DeskResponse.failed(Alert.error("Search Error", str(exc)))
        except Exception:
            logger.exception("Unexpected error in patient search")
            return DeskResponse.failed(
                Alert.error("Error", "An unexpected error occurred while searching for the patient.")
            )

        self._results = patients
        if not patients:
            return DeskResponse.ok(alert=Alert.warning("No Results", NO_RESULTS_MESSAGE))
        return DeskResponse.ok(*patients)

    def select(self, patient_id: str) -> DeskResponse:
        match = next((p for p in self._results if p.patient_id == patient_id), None)
        if match is None:
            return DeskResponse.failed(
                Alert.warning("Selection Error", "Please select a patient from the search results.")
            )
        self._selected = match
        logger.info("Selected patient for check-in: id={}", match.patient_id)
        return DeskResponse.ok(match)

    def select_index(self, index: int) -> DeskResponse:
        if not 0 <= index < len(self._results):
            return DeskResponse.failed(
                Alert.warning("Selection Error", "Please select a patient from the search results.")
            )
        return self.select(self._results[index].patient_id)

    async def check_in(self, visit_reason: str) -> DeskResponse:
        if self._selected is None:
            return DeskResponse.failed(Alert.warning("Selection Error", "Please select a patient first."))

        try:
            record = await self._service.check_in(self._selected.patient_id, visit_reason)
        except FrontDeskError as exc:
            return DeskResponse.failed(check_in_failure_alert(exc))
        except Exception:
            logger.exception("Unexpected error completing check-in")
            return DeskResponse.failed(
                Alert.error("Error", "An error occurred during check-in. Please try again.")
            )

        self.cancel()
        return DeskResponse.ok(record, alert=check_in_success_alert(record, self.prefs))

    def cancel(self) -> None:
        self._results = []
        self._selected = None
