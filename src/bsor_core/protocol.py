"""BSOR replay protocol constants.

Single source of truth for the on-disk magic, version, section tags and
scalar layouts. Encoder and decoder must remain synchronized.
"""

# File header: [Magic(4) | Ver(1)] = 5 bytes
MAGIC = 0x442D3D69
VERSION = 1
FILE_HEADER_FMT = "<iB"
FILE_HEADER_LEN = 5

# Section tags, in the order a well-formed file carries them
SECTION_INFO = 0
SECTION_FRAMES = 1
SECTION_NOTES = 2
SECTION_WALLS = 3
SECTION_HEIGHTS = 4
SECTION_PAUSES = 5

SECTION_NAMES = {
    SECTION_INFO: "info",
    SECTION_FRAMES: "frames",
    SECTION_NOTES: "notes",
    SECTION_WALLS: "walls",
    SECTION_HEIGHTS: "heights",
    SECTION_PAUSES: "pauses",
}
SECTION_TAGS = {name: tag for tag, name in SECTION_NAMES.items()}
SECTION_COUNT = len(SECTION_NAMES)

# Scalar layouts (little-endian)
INT32_FMT = "<i"
UINT8_FMT = "<B"
FLOAT32_FMT = "<f"
INT64_FMT = "<q"

# A string length prefix outside [0, MAX_STRING_LEN] means the cursor is not
# on a string; the reader shifts by one byte and retries.
MAX_STRING_LEN = 300

# Lengths of the field that follows the player name, as seen in real files.
# The name's own prefix is unreliable for some platforms, so the reader
# probes forward until it lands on one of these. Observed quirk, not derived.
NAME_BOUNDARY_LENGTHS = frozenset({5, 6, 8})

# Note event types that carry a CutInfo block
CUT_EVENT_TYPES = frozenset({0, 1})

# Encode buffer estimate: base + factor * len(json text)
ENCODE_BASE_SIZE = 1000
ENCODE_JSON_FACTOR = 2
