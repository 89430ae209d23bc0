"""Generate a synthetic PSV dump with known content.

The image is random bytes with the license marker planted at a chosen offset
(measured in the header-stripped image), so strip/restore can be exercised
without a real cartridge dump.
"""
import random
import sys
from pathlib import Path

LICENSE_PATTERN = bytes.fromhex("ffff0001000104020000000000000000")
HEADER_LEN = 512

DEFAULT_SIZE = 16896
DEFAULT_MARKER_OFFSET = 9000


def generate_dump(out_path: str, size: int = DEFAULT_SIZE, marker_offset: int = DEFAULT_MARKER_OFFSET,
                  seed: int = 0, with_marker: bool = True) -> Path:
    rng = random.Random(seed)
    data = bytearray(rng.getrandbits(8) for _ in range(size))

    # Random filler must not contain the marker by accident.
    while data.find(LICENSE_PATTERN) != -1:
        pos = data.find(LICENSE_PATTERN)
        data[pos] ^= 0x01

    if with_marker:
        at = HEADER_LEN + marker_offset
        if at + 512 > size:
            raise SystemExit(f"marker offset {marker_offset} leaves no room for license data")
        data[at:at + len(LICENSE_PATTERN)] = LICENSE_PATTERN

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(bytes(data))
    print(f"GENERATED: {out} ({size} bytes, marker {'at ' + str(marker_offset) if with_marker else 'absent'})")
    return out


if __name__ == "__main__":
    # Usage:
    #   python tools/make_synthetic_psv.py OUT [--size N] [--marker-offset N] [--seed N] [--no-marker]

    args = [a for a in sys.argv[1:] if a]

    def pop_flag(arg_list: list[str], flag: str) -> tuple[bool, list[str]]:
        """Remove a boolean flag from an argv-style list."""
        if flag in arg_list:
            return True, [a for a in arg_list if a != flag]
        return False, arg_list

    def pop_int(arg_list: list[str], flag: str, default: int) -> tuple[int, list[str]]:
        """Remove `flag VALUE` from an argv-style list."""
        if flag not in arg_list:
            return default, arg_list
        i = arg_list.index(flag)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{flag} requires a value")
        return int(arg_list[i + 1]), arg_list[:i] + arg_list[i + 2:]

    no_marker, args = pop_flag(args, "--no-marker")
    size, args = pop_int(args, "--size", DEFAULT_SIZE)
    marker_offset, args = pop_int(args, "--marker-offset", DEFAULT_MARKER_OFFSET)
    seed, args = pop_int(args, "--seed", 0)

    if len(args) != 1:
        print("Usage: make_synthetic_psv.py OUT [--size N] [--marker-offset N] [--seed N] [--no-marker]")
        raise SystemExit(2)

    generate_dump(args[0], size=size, marker_offset=marker_offset, seed=seed, with_marker=not no_marker)
