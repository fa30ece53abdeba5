"""Unit tests for the search, select and check-in session."""

from unittest.mock import AsyncMock

import pytest

from frontdesk.desk.alerts import Severity
from frontdesk.desk.session import CheckInSession, check_in_success_alert
from frontdesk.domain.exceptions import StoreUnavailableError
from frontdesk.domain.models import PatientRecord
from frontdesk.preferences import Preferences
from frontdesk.records.adapters.fake import FakePatientStore
from frontdesk.records.service import PatientService

# Fixtures (fake_store, service, smiths) provided by tests/conftest.py


@pytest.fixture
def session(
    service: PatientService, fake_store: FakePatientStore, smiths: list[PatientRecord]
) -> CheckInSession:
    fake_store.patients = smiths
    return CheckInSession(service)


class TestSearch:
    @pytest.mark.asyncio
    async def test_empty_query_warns(self, session: CheckInSession, fake_store: FakePatientStore) -> None:
        response = await session.search("", "")

        assert response.success is False
        assert response.alert is not None
        assert response.alert.severity is Severity.WARNING
        assert response.alert.title == "Search Error"
        assert fake_store.queries == 0

    @pytest.mark.asyncio
    async def test_invalid_dob_warns(self, session: CheckInSession) -> None:
        response = await session.search("Smith", "not a date")

        assert response.success is False
        assert response.alert is not None
        assert "MM/dd/yyyy" in response.alert.message

    @pytest.mark.asyncio
    async def test_dob_uses_operator_date_format(
        self, service: PatientService, fake_store: FakePatientStore, smiths: list[PatientRecord]
    ) -> None:
        fake_store.patients = smiths
        session = CheckInSession(service, Preferences(date_format="dd/MM/yyyy"))

        response = await session.search("", "15/03/1985")

        assert [p.patient_id for p in response.patients] == ["1", "4"]

    @pytest.mark.asyncio
    async def test_no_results_warns(self, session: CheckInSession) -> None:
        response = await session.search("Nobody")

        assert response.success is True
        assert response.patients == ()
        assert response.alert is not None
        assert response.alert.title == "No Results"

    @pytest.mark.asyncio
    async def test_store_failure_is_an_error_alert(
        self, session: CheckInSession, fake_store: FakePatientStore
    ) -> None:
        fake_store.search_error = RuntimeError("gone")

        response = await session.search("Smith")

        assert response.alert is not None
        assert response.alert.severity is Severity.ERROR

    @pytest.mark.asyncio
    async def test_unexpected_error_gets_generic_message(self) -> None:
        service = AsyncMock()
        service.search_patients.side_effect = KeyError("boom")
        session = CheckInSession(service)

        response = await session.search("Smith")

        assert response.alert is not None
        assert response.alert.title == "Error"
        assert "boom" not in response.alert.message

    @pytest.mark.asyncio
    async def test_new_search_clears_selection(self, session: CheckInSession) -> None:
        await session.search("Smith")
        session.select("1")

        await session.search("Johnson")

        assert session.selected is None
        assert [p.patient_id for p in session.results] == ["2"]


class TestSelect:
    @pytest.mark.asyncio
    async def test_selects_exactly_one(self, session: CheckInSession) -> None:
        await session.search("Smith")

        session.select("1")
        response = session.select("4")

        assert response.success is True
        assert session.selected is not None
        assert session.selected.patient_id == "4"

    @pytest.mark.asyncio
    async def test_rejects_record_outside_results(self, session: CheckInSession) -> None:
        await session.search("Smith")

        response = session.select("2")

        assert response.success is False
        assert session.selected is None

    @pytest.mark.asyncio
    async def test_select_index_out_of_range(self, session: CheckInSession) -> None:
        await session.search("Smith")

        assert session.select_index(3).success is False
        assert session.select_index(0).patient is not None

    @pytest.mark.asyncio
    async def test_describe(self, session: CheckInSession) -> None:
        await session.search("John Smith")

        assert session.describe(session.results[0]) == "John Smith (DOB: 03/15/1985)"


class TestCheckIn:
    @pytest.mark.asyncio
    async def test_requires_selection(self, session: CheckInSession) -> None:
        response = await session.check_in("Checkup")

        assert response.alert is not None
        assert response.alert.title == "Selection Error"

    @pytest.mark.asyncio
    async def test_requires_reason(self, session: CheckInSession, fake_store: FakePatientStore) -> None:
        await session.search("Smith")
        session.select("1")

        response = await session.check_in("  ")

        assert response.alert is not None
        assert response.alert.title == "Input Error"
        assert session.selected is not None
        assert (await fake_store.get("1")).checked_in is False  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_success_resets_session(
        self, session: CheckInSession, fake_store: FakePatientStore
    ) -> None:
        await session.search("Smith")
        session.select("1")

        response = await session.check_in("Sore throat")

        assert response.success is True
        assert response.alert is not None
        assert response.alert.severity is Severity.INFO
        assert "Reason for Visit: Sore throat" in response.alert.message
        assert "Check-in Time: 03/15/2026 9:30 AM" in response.alert.message
        assert session.selected is None
        assert session.results == []
        assert (await fake_store.get("1")).checked_in is True  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_already_checked_in_warns(self, session: CheckInSession) -> None:
        await session.search("Smith")
        session.select("1")
        await session.check_in("First")
        await session.search("Smith")
        session.select("1")

        response = await session.check_in("Second")

        assert response.success is False
        assert response.alert is not None
        assert response.alert.title == "Already Checked In"

    @pytest.mark.asyncio
    async def test_save_failure(self, session: CheckInSession, fake_store: FakePatientStore) -> None:
        await session.search("Smith")
        session.select("1")
        fake_store.save_error = StoreUnavailableError("locked")

        response = await session.check_in("Checkup")

        assert response.alert is not None
        assert response.alert.title == "Save Error"
        assert response.alert.severity is Severity.ERROR

    @pytest.mark.asyncio
    async def test_cancel(self, session: CheckInSession) -> None:
        await session.search("Smith")
        session.select("1")

        session.cancel()

        assert session.selected is None
        assert session.results == []


def test_success_alert_without_timestamp() -> None:
    record = PatientRecord(first_name="A", last_name="B", visit_reason="x")

    alert = check_in_success_alert(record, Preferences())

    assert alert.message.endswith("Check-in Time: ")
