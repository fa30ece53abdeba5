import datetime as dt
import re

from frontdesk.records.adapters.datetime_helpers import DATE_PATTERNS


def parse_date_of_birth(text: str, pattern: str = "MM/dd/yyyy") -> dt.date | None:
    """Parse an operator-typed DOB such as ``"3/15/1985"`` or ``"1985-03-15"``.

    The operator's preferred ``pattern`` is tried first, then ISO 8601.
    Returns None for blank or unparseable text.
    """
    text = text.strip()
    if not text:
        return None

    formats = [DATE_PATTERNS.get(pattern, DATE_PATTERNS["MM/dd/yyyy"]), "%Y-%m-%d"]
    for fmt in formats:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


_PROPERTY_LINE = re.compile(r"^\s*((?:\\.|[^=:\s])+)\s*[=:]?\s*(.*?)\s*$")


def parse_properties(text: str) -> dict[str, str]:
    """Parse flat ``key=value`` lines in the Java properties style.

    Blank lines and lines starting with ``#`` or ``!`` are skipped.  ``=``,
    ``:`` or whitespace separate key from value.  Later keys win.
    """
    result: dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped[0] in "#!":
            continue
        match = _PROPERTY_LINE.match(stripped)
        if not match:
            continue
        key = match.group(1).replace("\\", "")
        result[key] = match.group(2)
    return result


def format_properties(values: dict[str, str], header: str | None = None) -> str:
    """Inverse of :func:`parse_properties` for plain keys and values."""
    lines = [f"#{header}"] if header else []
    lines.extend(f"{key}={value}" for key, value in values.items())
    return "\n".join(lines) + "\n"
