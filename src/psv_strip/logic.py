"""PSV Strip - Marker search and region strip/restore over in-memory images."""
from __future__ import annotations

from typing import Callable
from warnings import warn

from psv_core.protocol import (
    HEADER_LEN,
    LIC1_LEN,
    LIC1_OFFSET,
    LIC2_LEN,
    LIC2_OFFSET,
    LICENSE_PATTERN,
    MIN_DUMP_LEN,
    UNKNOWN_LEN,
    UNKNOWN_OFFSET,
)
from psv_core.record import LicenseRecord
from .const import PsvError

Progress = Callable[[str], None]


def no_progress(msg: str) -> None:
    pass


def find_license_offset(buf: bytes | bytearray, pattern: bytes = LICENSE_PATTERN) -> int | None:
    """Offset of the first occurrence of the license marker, or None."""
    pos = buf.find(pattern)
    if pos == -1:
        return None
    # Only the first match is used; a second one is worth flagging.
    if buf.find(pattern, pos + 1) != -1:
        warn(f"License marker occurs more than once; using first match at offset {pos}")
    return pos


def _take(buf: bytearray, offset: int, length: int, what: str) -> bytes:
    end = offset + length
    if end > len(buf):
        raise PsvError("E_TRUNCATED", f"{what} [{offset}, {end}) exceeds {len(buf)} bytes")
    return bytes(buf[offset:end])


def _zero(buf: bytearray, offset: int, length: int) -> None:
    buf[offset:offset + length] = bytes(length)


def _put(buf: bytearray, offset: int, payload: bytes, what: str) -> None:
    end = offset + len(payload)
    if end > len(buf):
        raise PsvError(
            "E_RECORD_MALFORMED", f"{what} [{offset}, {end}) exceeds {len(buf)} bytes"
        )
    buf[offset:end] = payload


def clear_regions(buf: bytearray, progress: Progress = no_progress) -> tuple[bytes, int, bytes, bytes]:
    """Zero the unknown block and both license blocks of a header-stripped image in place.

    Returns the original (unknown, lic_offset, lic1, lic2). The marker is searched
    after the unknown block has been cleared.
    """
    progress("Clearing unknown data")
    unknown = _take(buf, UNKNOWN_OFFSET, UNKNOWN_LEN, "unknown block")
    _zero(buf, UNKNOWN_OFFSET, UNKNOWN_LEN)

    progress("Finding license offset")
    lic_offset = find_license_offset(buf)
    if lic_offset is None:
        raise PsvError("E_PATTERN_NOT_FOUND", LICENSE_PATTERN.hex())

    progress("Clearing license section 1")
    lic1 = _take(buf, lic_offset + LIC1_OFFSET, LIC1_LEN, "license section 1")
    _zero(buf, lic_offset + LIC1_OFFSET, LIC1_LEN)

    progress("Clearing license section 2")
    lic2 = _take(buf, lic_offset + LIC2_OFFSET, LIC2_LEN, "license section 2")
    _zero(buf, lic_offset + LIC2_OFFSET, LIC2_LEN)

    return unknown, lic_offset, lic1, lic2


def strip_dump(data: bytes, progress: Progress = no_progress) -> tuple[bytes, LicenseRecord]:
    """Strip header and license content from a dump.

    Returns the stripped image (len(data) - HEADER_LEN bytes) and the record of
    everything removed. The caller decides whether to persist the record.
    """
    if len(data) < MIN_DUMP_LEN:
        raise PsvError("E_TRUNCATED", f"{len(data)} bytes, need at least {MIN_DUMP_LEN}")

    progress("Stripping header")
    header = bytes(data[:HEADER_LEN])
    buf = bytearray(data[HEADER_LEN:])

    unknown, lic_offset, lic1, lic2 = clear_regions(buf, progress)

    record = LicenseRecord(
        psv_header=header,
        unknown=unknown,
        lic_offset=lic_offset,
        lic1=lic1,
        lic2=lic2,
    )
    return bytes(buf), record


def restore_dump(stripped: bytes, record: LicenseRecord, progress: Progress = no_progress) -> bytes:
    """Reinsert recorded content into a stripped image.

    Output is len(stripped) + HEADER_LEN bytes. The stripped image is otherwise
    taken as is.
    """
    progress("Prepending header")
    buf = bytearray(record.psv_header)
    buf += stripped

    progress("Restoring unknown data")
    _put(buf, HEADER_LEN + UNKNOWN_OFFSET, record.unknown, "unknown block")

    progress("Restoring license section 1")
    _put(buf, HEADER_LEN + record.lic_offset + LIC1_OFFSET, record.lic1, "license section 1")

    progress("Restoring license section 2")
    _put(buf, HEADER_LEN + record.lic_offset + LIC2_OFFSET, record.lic2, "license section 2")

    return bytes(buf)
