from loguru import logger

from frontdesk.desk.alerts import Alert, DeskResponse
from frontdesk.desk.session import CheckInSession, check_in_failure_alert, check_in_success_alert
from frontdesk.domain.exceptions import FrontDeskError, PatientValidationError
from frontdesk.domain.models import HistoryKind, NewPatient
from frontdesk.preferences import Preferences
from frontdesk.records.adapters.parsing_helpers import parse_date_of_birth
from frontdesk.records.ports import AbstractPatientService


class FrontDesk:
    """Operator actions that sit outside the search-and-select session."""

    def __init__(self, service: AbstractPatientService, prefs: Preferences | None = None) -> None:
        self._service = service
        self.prefs = prefs or Preferences()

    def new_session(self) -> CheckInSession:
        return CheckInSession(self._service, self.prefs)

    async def register(self, form: NewPatient, dob_text: str = "") -> DeskResponse:
        """Register a patient; ``dob_text`` is the operator-typed DOB, if any."""
        if dob_text.strip():
            date_of_birth = parse_date_of_birth(dob_text, self.prefs.date_format)
            if date_of_birth is None:
                return DeskResponse.failed(
                    Alert.warning(
                        "Input Error",
                        f"'{dob_text.strip()}' is not a valid date of birth. "
                        f"Use {self.prefs.date_format}.",
                    )
                )
            form = form.model_copy(update={"date_of_birth": date_of_birth})

        try:
            record = await self._service.register_patient(form)
        except PatientValidationError as exc:
            return DeskResponse.failed(Alert.warning("Input Error", str(exc)))
        except FrontDeskError as exc:
            return DeskResponse.failed(Alert.error("Save Error", str(exc)))
        except Exception:
            logger.exception("Unexpected error registering patient")
            return DeskResponse.failed(
                Alert.error("Error", "An unexpected error occurred while saving the patient.")
            )

        return DeskResponse.ok(
            record,
            alert=Alert.info(
                "Patient Registered",
                f"{record.full_name} has been registered.\n\nPatient ID: {record.patient_id}",
            ),
        )

    async def quick_check_in(self, patient_id: str, visit_reason: str) -> DeskResponse:
        try:
            record = await self._service.quick_check_in(patient_id, visit_reason)
        except FrontDeskError as exc:
            return DeskResponse.failed(check_in_failure_alert(exc))
        except Exception:
            logger.exception("Unexpected error in quick check-in")
            return DeskResponse.failed(
                Alert.error("Error", "An error occurred during check-in. Please try again.")
            )

        return DeskResponse.ok(record, alert=check_in_success_alert(record, self.prefs))

    async def add_history_entry(
        self, patient_id: str, kind: HistoryKind, entry: str
    ) -> DeskResponse:
        try:
            record = await self._service.add_history_entry(patient_id, kind, entry)
        except FrontDeskError as exc:
            return DeskResponse.failed(Alert.error("Save Error", str(exc)))
        return DeskResponse.ok(record)

    async def arrivals(self) -> DeskResponse:
        """Checked-in patients, in store order."""
        try:
            patients = await self._service.list_checked_in()
        except FrontDeskError as exc:
            return DeskResponse.failed(Alert.error("Error", str(exc)))
        return DeskResponse.ok(*patients)
