"""PSV dump layout constants.

Single source of truth for the stripped region offsets and the license marker.
Keep this file stable. Strip and restore must remain synchronized.
"""

# Dump tool header, removed entirely on strip
HEADER_LEN = 512

# Opaque padding block, offset measured in the header-stripped image
UNKNOWN_OFFSET = 7168
UNKNOWN_LEN = 608

# Marker preceding the license data. The zero bytes are literal, not wildcards.
LICENSE_PATTERN = bytes.fromhex("ffff0001000104020000000000000000")

# License sub-blocks, relative to the marker match
LIC1_OFFSET = 80
LIC1_LEN = 16
LIC2_OFFSET = 160
LIC2_LEN = 352

# Smallest input that still holds the header and the unknown block
MIN_DUMP_LEN = HEADER_LEN + UNKNOWN_OFFSET + UNKNOWN_LEN

# Sidecar field names, in write order
FIELD_HEADER = "PSVHEADER"
FIELD_UNKNOWN = "UNKNOWN"
FIELD_LICOFFSET = "LICOFFSET"
FIELD_LIC1 = "LIC1"
FIELD_LIC2 = "LIC2"
RECORD_FIELDS = (FIELD_HEADER, FIELD_UNKNOWN, FIELD_LICOFFSET, FIELD_LIC1, FIELD_LIC2)

# Expected payload length per byte field
FIELD_LENGTHS = {
    FIELD_HEADER: HEADER_LEN,
    FIELD_UNKNOWN: UNKNOWN_LEN,
    FIELD_LIC1: LIC1_LEN,
    FIELD_LIC2: LIC2_LEN,
}

# Derived file naming
LIC_SUFFIX = "-lic"
STRIPPED_MARKER = ".stripped"
RESTORED_MARKER = ".restored"
