import random

import pytest

from psv_core.protocol import HEADER_LEN, LICENSE_PATTERN


def build_dump(size: int = 16896, marker_offset: int | None = 9000, seed: int = 1234) -> bytes:
    """Random dump with the license marker at marker_offset (header-stripped coordinates)."""
    rng = random.Random(seed)
    data = bytearray(rng.getrandbits(8) for _ in range(size))
    # Keep 0x00 out of the leading byte pairs so filler never forms the marker.
    for i in range(0, size, 2):
        data[i] |= 0x01
    if marker_offset is not None:
        at = HEADER_LEN + marker_offset
        data[at:at + len(LICENSE_PATTERN)] = LICENSE_PATTERN
    return bytes(data)


@pytest.fixture
def dump() -> bytes:
    return build_dump()


@pytest.fixture
def dump_path(tmp_path, dump):
    p = tmp_path / "Game.psv"
    p.write_bytes(dump)
    return p


@pytest.fixture
def make_dump():
    return build_dump
