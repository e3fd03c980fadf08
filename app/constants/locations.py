# Paths are split on PATH_SEPARATOR to rebuild the zone / aisle / bin
# columns, so a label may never contain it. Codes only join labels for
# display and lookup; a label may contain CODE_SEPARATOR.
CODE_SEPARATOR = "-"
PATH_SEPARATOR = "."

ZONE_CODE_PREFIX = "ZONE"
LEVEL_LABEL_PREFIX = "L"

LABEL_MAX_LENGTH = 50

LAYOUT_DOCUMENT_VERSION = "1.0"
