from pathlib import Path
from typing import Callable

import pytest

import main
from frontdesk.config import AppConfig, StoreConfig
from frontdesk.desk.actions import FrontDesk
from frontdesk.preferences import PreferencesFile
from frontdesk.records.adapters.fake import FakePatientStore
from frontdesk.records.service import PatientService
from frontdesk.theme import Theme, ThemeController

# Fixtures (fake_store, service) provided by tests/conftest.py


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("FRONTDESK_CLINIC_TIMEZONE", "FRONTDESK_STORE_SEED_SAMPLE_DATA", "FRONTDESK_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Feed scripted operator input to the console prompts."""

    def feed(*replies: str) -> None:
        queue = list(replies)

        async def fake_ask(prompt: str) -> str:
            if not queue:
                raise EOFError
            return queue.pop(0)

        monkeypatch.setattr(main, "ask", fake_ask)

    return feed


class TestToggleTheme:
    def test_save_failure_is_shown_and_theme_still_changes(
        self, service: PatientService, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        desk = FrontDesk(service)
        themes = ThemeController(Theme.LIGHT)

        main.toggle_theme(desk, themes, PreferencesFile(tmp_path))

        assert desk.prefs.theme is Theme.DARK
        out = capsys.readouterr().out
        assert "Save Error" in out
        assert str(tmp_path) in out

    def test_saves_new_theme(self, service: PatientService, tmp_path: Path) -> None:
        desk = FrontDesk(service)
        prefs_file = PreferencesFile(tmp_path / "settings.properties")

        main.toggle_theme(desk, ThemeController(Theme.LIGHT), prefs_file)

        assert prefs_file.load().theme is Theme.DARK


class TestRunDesk:
    @pytest.mark.asyncio
    async def test_unwritable_settings_keep_loop_running(
        self,
        answers: Callable[..., None],
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        answers("5", "4", "q")
        config = AppConfig(settings_file=tmp_path, store=StoreConfig(seed_sample_data=False))

        await main.run_desk(config)

        out = capsys.readouterr().out
        assert "Save Error" in out
        assert out.index("Save Error") < out.index("No patients checked in yet.")

    @pytest.mark.asyncio
    async def test_end_of_input_closes_cleanly(
        self, answers: Callable[..., None], capsys: pytest.CaptureFixture[str]
    ) -> None:
        answers("4")

        await main.run_desk(AppConfig())

        assert "Mary Johnson" in capsys.readouterr().out


class TestRegister:
    @pytest.mark.asyncio
    async def test_invalid_dob_is_not_stored(
        self,
        answers: Callable[..., None],
        service: PatientService,
        fake_store: FakePatientStore,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        answers("Ann", "Lee", "31/31/1999", "")

        await main.register(FrontDesk(service))

        assert "Input Error" in capsys.readouterr().out
        assert fake_store.added == []

    @pytest.mark.asyncio
    async def test_valid_dob_is_stored(
        self,
        answers: Callable[..., None],
        service: PatientService,
        fake_store: FakePatientStore,
    ) -> None:
        answers("Ann", "Lee", "12/05/1990", "555-0100")

        await main.register(FrontDesk(service))

        assert [p.full_name for p in fake_store.added] == ["Ann Lee"]
        assert fake_store.added[0].date_of_birth is not None
        assert fake_store.added[0].date_of_birth.isoformat() == "1990-12-05"
