"""PSV Core - Dump layout, payload codec and removed-content record."""
from .codec import decode_payload, encode_payload
from .record import LicenseRecord

__all__ = ["decode_payload", "encode_payload", "LicenseRecord"]
