"""PSV Strip - Removed-content record."""
from __future__ import annotations

from dataclasses import dataclass

from .codec import decode_payload, encode_payload
from .protocol import (
    FIELD_HEADER,
    FIELD_LENGTHS,
    FIELD_LIC1,
    FIELD_LIC2,
    FIELD_LICOFFSET,
    FIELD_UNKNOWN,
    RECORD_FIELDS,
)


@dataclass(frozen=True)
class LicenseRecord:
    """Bytes removed from one dump by a strip, enough to restore it exactly.

    ``lic_offset`` is the marker position in the header-stripped image.
    """

    psv_header: bytes
    unknown: bytes
    lic_offset: int
    lic1: bytes
    lic2: bytes

    def __post_init__(self) -> None:
        if isinstance(self.lic_offset, bool) or not isinstance(self.lic_offset, int):
            raise ValueError(f"{FIELD_LICOFFSET} must be an integer, got {self.lic_offset!r}")
        if self.lic_offset < 0:
            raise ValueError(f"{FIELD_LICOFFSET} must not be negative, got {self.lic_offset}")
        for name, value in self._payloads().items():
            want = FIELD_LENGTHS[name]
            if len(value) != want:
                raise ValueError(f"{name} must be {want} bytes, got {len(value)}")

    def _payloads(self) -> dict[str, bytes]:
        return {
            FIELD_HEADER: self.psv_header,
            FIELD_UNKNOWN: self.unknown,
            FIELD_LIC1: self.lic1,
            FIELD_LIC2: self.lic2,
        }

    def to_fields(self) -> dict[str, str]:
        """Encoded NAME -> value mapping, in sidecar write order."""
        payloads = self._payloads()
        out: dict[str, str] = {}
        for name in RECORD_FIELDS:
            if name == FIELD_LICOFFSET:
                out[name] = str(self.lic_offset)
            else:
                out[name] = encode_payload(payloads[name])
        return out

    @classmethod
    def from_fields(cls, fields: dict[str, str]) -> "LicenseRecord":
        """Build a record from encoded values. Raises ValueError on any defect."""
        missing = [name for name in RECORD_FIELDS if name not in fields]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")

        raw = fields[FIELD_LICOFFSET].strip()
        if not (raw.isascii() and raw.isdigit()):
            raise ValueError(f"{FIELD_LICOFFSET} is not a decimal offset: {raw!r}")

        decoded: dict[str, bytes] = {}
        for name in FIELD_LENGTHS:
            try:
                decoded[name] = decode_payload(fields[name])
            except ValueError as e:
                raise ValueError(f"{name}: {e}") from e

        return cls(
            psv_header=decoded[FIELD_HEADER],
            unknown=decoded[FIELD_UNKNOWN],
            lic_offset=int(raw),
            lic1=decoded[FIELD_LIC1],
            lic2=decoded[FIELD_LIC2],
        )
