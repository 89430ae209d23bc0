"""PSV Strip - Header/license sidecar file."""
from __future__ import annotations

from pathlib import Path

from psv_core.record import LicenseRecord
from .const import PsvError


def render_sidecar(record: LicenseRecord, source: str | None = None) -> str:
    """Sidecar text: optional source comment, then one NAME=value line per field."""
    lines = []
    if source is not None:
        lines.append(f"# Original file: {source}")
    for name, value in record.to_fields().items():
        lines.append(f"{name}={value}")
    return "\n".join(lines) + "\n"


def parse_sidecar(text: str) -> dict[str, str]:
    """Collect NAME=value pairs. Blank and '#' comment lines are skipped; the last duplicate wins."""
    fields: dict[str, str] = {}
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        name, sep, value = stripped.partition("=")
        if not sep:
            raise PsvError("E_RECORD_MALFORMED", f"line {lineno} is not NAME=value")
        fields[name.strip()] = value.strip()
    return fields


def load_record(path: Path) -> LicenseRecord:
    if not path.is_file():
        raise PsvError("E_LIC_MISSING", str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PsvError("E_RECORD_MALFORMED", f"{path}: not a text file ({e.reason})") from e
    except OSError as e:
        raise PsvError("E_LIC_MISSING", f"{path}: {e.strerror}") from e

    try:
        return LicenseRecord.from_fields(parse_sidecar(text))
    except ValueError as e:
        raise PsvError("E_RECORD_MALFORMED", f"{path}: {e}") from e
