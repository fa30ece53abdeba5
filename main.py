import asyncio
import sys

from loguru import logger

from frontdesk.config import AppConfig
from frontdesk.desk.actions import FrontDesk
from frontdesk.desk.alerts import Alert, DeskResponse
from frontdesk.domain.exceptions import PreferencesError
from frontdesk.domain.models import ContactDetails, NewPatient
from frontdesk.preferences import PreferencesFile
from frontdesk.records.factory import build_patient_service
from frontdesk.theme import Palette, Theme, ThemeController

MENU = """
[1] Register new patient
[2] Check in existing patient
[3] Quick check-in by patient ID
[4] Arrivals board
[5] Toggle dark mode
[q] Quit
"""


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


async def ask(prompt: str) -> str:
    return (await asyncio.to_thread(input, prompt)).strip()


def show(response: DeskResponse) -> None:
    if response.alert:
        print(f"\n[{response.alert.severity.value.upper()}] {response.alert.title}")
        print(response.alert.message)


async def register(desk: FrontDesk) -> None:
    first = await ask("First name: ")
    last = await ask("Last name: ")
    dob_text = await ask(f"Date of birth ({desk.prefs.date_format}, optional): ")
    phone = await ask("Phone number (optional): ")
    form = NewPatient(
        first_name=first,
        last_name=last,
        contact=ContactDetails(phone_number=phone),
    )
    show(await desk.register(form, dob_text))


async def check_in_existing(desk: FrontDesk) -> None:
    session = desk.new_session()
    name = await ask("Patient name (blank to skip): ")
    dob_text = await ask(f"Date of birth ({desk.prefs.date_format}, blank to skip): ")
    response = await session.search(name, dob_text)
    show(response)
    if not session.results:
        return

    for i, record in enumerate(session.results, start=1):
        print(f"  {i}. {session.describe(record)}")
    choice = await ask("Select patient number (blank to cancel): ")
    if not choice:
        session.cancel()
        return
    if not choice.isdigit():
        print("Please enter a number from the list.")
        return
    selection = session.select_index(int(choice) - 1)
    if not selection.success:
        show(selection)
        return

    reason = await ask("Reason for visit: ")
    show(await session.check_in(reason))


async def quick_check_in(desk: FrontDesk) -> None:
    patient_id = await ask("Patient ID: ")
    reason = await ask("Reason for visit: ")
    show(await desk.quick_check_in(patient_id, reason))


async def arrivals(desk: FrontDesk) -> None:
    response = await desk.arrivals()
    show(response)
    if response.success and not response.patients:
        print("No patients checked in yet.")
    for record in response.patients:
        stamp = desk.prefs.format_timestamp(record.last_updated) if record.last_updated else ""
        print(f"  {record.full_name:<24} {stamp:<20} {record.visit_reason}")


def toggle_theme(desk: FrontDesk, themes: ThemeController, prefs_file: PreferencesFile) -> None:
    desk.prefs = desk.prefs.model_copy(update={"theme": themes.toggle()})
    try:
        prefs_file.save(desk.prefs)
    except PreferencesError as exc:
        show(DeskResponse.failed(Alert.error("Save Error", str(exc))))


async def run_desk(config: AppConfig) -> None:
    logger.info("Starting {} front desk", config.clinic_name)

    prefs_file = PreferencesFile(config.settings_file)
    prefs = prefs_file.load()
    service = await build_patient_service(config)
    desk = FrontDesk(service, prefs)

    themes = ThemeController(prefs.theme)

    def on_theme(theme: Theme, palette: Palette) -> None:
        print(f"Theme: {theme.value} (background {palette.background}, text {palette.text})")

    themes.subscribe(on_theme)

    actions = {
        "1": register,
        "2": check_in_existing,
        "3": quick_check_in,
        "4": arrivals,
    }

    try:
        while True:
            print(MENU)
            choice = (await ask("> ")).lower()
            if choice == "q":
                break
            if choice == "5":
                toggle_theme(desk, themes, prefs_file)
                continue
            action = actions.get(choice)
            if action is None:
                print("Unknown option.")
                continue
            await action(desk)
    except (EOFError, KeyboardInterrupt):
        logger.info("Front desk interrupted")
    finally:
        await service.close()


def main() -> None:
    config = AppConfig()
    configure_logging(config.log_level)
    asyncio.run(run_desk(config))


if __name__ == "__main__":
    main()
