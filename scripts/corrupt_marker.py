import sys
from pathlib import Path

LICENSE_PATTERN = bytes.fromhex("ffff0001000104020000000000000000")

def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_marker.py <file>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    idx = b.find(LICENSE_PATTERN)
    if idx == -1:
        print("License marker not present.")
        raise SystemExit(2)

    # Flip the low bit of the marker's leading 0xFF so the search misses it.
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted license marker at offset {idx} in {p}")

if __name__ == "__main__":
    main()
