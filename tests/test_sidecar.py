"""
Tests for psv_strip.sidecar and psv_core.record
===============================================
Run with:  pytest tests/test_sidecar.py -v
"""

from __future__ import annotations

import pytest

from psv_core.codec import encode_payload
from psv_core.protocol import RECORD_FIELDS
from psv_core.record import LicenseRecord
from psv_strip.const import PsvError
from psv_strip.logic import strip_dump
from psv_strip.sidecar import load_record, parse_sidecar, render_sidecar


@pytest.fixture
def record(dump) -> LicenseRecord:
    return strip_dump(dump)[1]


class TestRender:
    def test_field_order_and_comment(self, record):
        text = render_sidecar(record, source="Game.psv")
        lines = text.splitlines()
        assert lines[0] == "# Original file: Game.psv"
        assert [line.split("=", 1)[0] for line in lines[1:]] == list(RECORD_FIELDS)
        assert "LICOFFSET=9000" in lines
        assert text.endswith("\n")

    def test_without_source(self, record):
        assert render_sidecar(record).startswith("PSVHEADER=")


class TestParse:
    def test_order_independent(self, record):
        lines = render_sidecar(record).splitlines()
        shuffled = "\n".join(reversed(lines))
        assert LicenseRecord.from_fields(parse_sidecar(shuffled)) == record

    def test_skips_comments_and_blank_lines(self):
        text = "# header\n\n   # indented comment\nLICOFFSET=12\n   \n"
        assert parse_sidecar(text) == {"LICOFFSET": "12"}

    def test_last_duplicate_wins(self):
        assert parse_sidecar("A=1\nA=2\n") == {"A": "2"}

    def test_line_without_equals(self):
        with pytest.raises(PsvError) as exc:
            parse_sidecar("PSVHEADER\n")
        assert exc.value.code == "E_RECORD_MALFORMED"


class TestLicenseRecord:
    def test_round_trip_fields(self, record):
        assert LicenseRecord.from_fields(record.to_fields()) == record

    @pytest.mark.parametrize("name", RECORD_FIELDS)
    def test_missing_field(self, record, name):
        fields = record.to_fields()
        del fields[name]
        with pytest.raises(ValueError, match=name):
            LicenseRecord.from_fields(fields)

    def test_wrong_length(self, record):
        fields = record.to_fields()
        fields["LIC1"] = encode_payload(bytes(15))
        with pytest.raises(ValueError, match="LIC1 must be 16 bytes"):
            LicenseRecord.from_fields(fields)

    @pytest.mark.parametrize("value", ["", "-1", "12a", "0x10", "1.5"])
    def test_bad_offset(self, record, value):
        fields = record.to_fields()
        fields["LICOFFSET"] = value
        with pytest.raises(ValueError, match="LICOFFSET"):
            LicenseRecord.from_fields(fields)

    def test_bad_hex(self, record):
        fields = record.to_fields()
        fields["UNKNOWN"] = "nothex"
        with pytest.raises(ValueError, match="UNKNOWN"):
            LicenseRecord.from_fields(fields)

    def test_is_immutable(self, record):
        with pytest.raises(AttributeError):
            record.lic_offset = 0


class TestLoadRecord:
    def test_missing_file(self, tmp_path):
        with pytest.raises(PsvError) as exc:
            load_record(tmp_path / "nope.psv-lic")
        assert exc.value.code == "E_LIC_MISSING"

    def test_malformed_file(self, tmp_path, record):
        p = tmp_path / "Game.psv-lic"
        text = "\n".join(
            line for line in render_sidecar(record).splitlines() if not line.startswith("LIC2=")
        )
        p.write_text(text, encoding="utf-8")
        with pytest.raises(PsvError) as exc:
            load_record(p)
        assert exc.value.code == "E_RECORD_MALFORMED"
        assert "LIC2" in str(exc.value)

    def test_binary_garbage(self, tmp_path):
        p = tmp_path / "Game.psv-lic"
        p.write_bytes(b"\xff\xfe\x00\x81")
        with pytest.raises(PsvError) as exc:
            load_record(p)
        assert exc.value.code == "E_RECORD_MALFORMED"

    def test_loads_rendered_file(self, tmp_path, record):
        p = tmp_path / "Game.psv-lic"
        p.write_text(render_sidecar(record, source="Game.psv"), encoding="utf-8")
        assert load_record(p) == record
