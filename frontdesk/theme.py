from enum import Enum
from typing import Callable

from loguru import logger
from pydantic import BaseModel, ConfigDict


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


class Palette(BaseModel):
    """Resolved colours for one theme, as ``#rrggbb`` strings."""

    model_config = ConfigDict(frozen=True)

    background: str
    surface: str
    input_background: str
    text: str
    muted_text: str
    border: str
    accent: str
    primary: str
    primary_hover: str
    success: str
    success_hover: str
    cancel: str
    cancel_hover: str


# Buttons keep the same colours in both themes.
_BUTTONS = {
    "primary": "#2196f3",
    "primary_hover": "#1976d2",
    "success": "#4caf50",
    "success_hover": "#388e3c",
    "cancel": "#f44336",
    "cancel_hover": "#d32f2f",
}

_PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        background="#f1f8e9",
        surface="#fafafa",
        input_background="#ffffff",
        text="#333333",
        muted_text="#666666",
        border="#c8e6c9",
        accent="#2e7d32",
        **_BUTTONS,
    ),
    Theme.DARK: Palette(
        background="#0d0d0d",
        surface="#1a1a1a",
        input_background="#141414",
        text="#e6e6e6",
        muted_text="#a0a0a0",
        border="#2e3b2e",
        accent="#66bb6a",
        **_BUTTONS,
    ),
}


def resolve_style(theme: Theme) -> Palette:
    return _PALETTES[theme]


ThemeListener = Callable[[Theme, Palette], None]


class ThemeController:
    """Holds the current theme and tells subscribed views when it changes.

    Create one per application and hand it to every view that renders
    colours; there is no module-level theme state.
    """

    def __init__(self, theme: Theme = Theme.LIGHT) -> None:
        self._theme = theme
        self._listeners: list[ThemeListener] = []

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def palette(self) -> Palette:
        return resolve_style(self._theme)

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        """Register ``listener`` and call it once with the current theme.

        Returns a function that unsubscribes it.
        """
        self._listeners.append(listener)
        self._notify(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_theme(self, theme: Theme) -> None:
        if theme is self._theme:
            return
        self._theme = theme
        logger.info("Applying {} theme to {} view(s)", theme.value, len(self._listeners))
        for listener in list(self._listeners):
            self._notify(listener)

    def toggle(self) -> Theme:
        self.set_theme(self._theme.toggled())
        return self._theme

    def _notify(self, listener: ThemeListener) -> None:
        try:
            listener(self._theme, self.palette)
        except Exception:
            logger.exception("Failed to apply {} theme to {}", self._theme.value, listener)
