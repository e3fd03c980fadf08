"""
Code and path derivation for the location tree.

Every node's positional coordinates, ``code`` and ``path`` are computed here
and nowhere else. Descendants copy the zone / aisle coordinates of their
parent and append their own normalized label:

    depth 0   zone=A                       code=ZONE-A      path=A
    depth 1   zone=A aisle=A1              code=A-A1        path=A.A1
    depth 2   zone=A aisle=A1 bin_code=L1  code=A-A1-L1     path=A.A1.L1
"""

import re
from typing import Optional

from app.constants.locations import (
    CODE_SEPARATOR,
    PATH_SEPARATOR,
    ZONE_CODE_PREFIX,
    LEVEL_LABEL_PREFIX,
    LABEL_MAX_LENGTH,
)
from app.models.enums.location_depth import LocationDepth

_DIGITS_RE = re.compile(r"(\d+)")


class LabelError(ValueError):
    """Raised when a zone / aisle / bin label cannot be used as a coordinate."""


def normalize_label(label: Optional[str]) -> str:
    value = (label or "").strip().upper()

    if not value:
        raise LabelError("Label must not be empty")

    if len(value) > LABEL_MAX_LENGTH:
        raise LabelError(f"Label must be at most {LABEL_MAX_LENGTH} characters")

    if PATH_SEPARATOR in value:
        raise LabelError(f'Label "{value}" must not contain "{PATH_SEPARATOR}"')

    return value


def level_label(number: int) -> str:
    return f"{LEVEL_LABEL_PREFIX}{number}"


def derive_location_fields(depth: int, label: str, parent=None) -> dict:
    """
    Return ``zone``, ``aisle``, ``bin_code``, ``code`` and ``path`` for a new
    node at ``depth`` below ``parent``.

    ``parent`` is any object exposing ``zone``, ``aisle`` and ``path``
    (an ORM row or a schema). Depth / parent consistency is checked by the
    repository before this is called.
    """
    depth = LocationDepth(depth)
    local = normalize_label(label)

    if depth == LocationDepth.ZONE:
        return {
            "zone": local,
            "aisle": None,
            "bin_code": None,
            "code": CODE_SEPARATOR.join([ZONE_CODE_PREFIX, local]),
            "path": local,
        }

    if parent is None:
        raise ValueError(f"A {depth.label} must be derived from its parent")

    if depth == LocationDepth.AISLE:
        return {
            "zone": parent.zone,
            "aisle": local,
            "bin_code": None,
            "code": CODE_SEPARATOR.join([parent.zone, local]),
            "path": PATH_SEPARATOR.join([parent.path, local]),
        }

    return {
        "zone": parent.zone,
        "aisle": parent.aisle,
        "bin_code": local,
        "code": CODE_SEPARATOR.join([parent.zone, parent.aisle, local]),
        "path": PATH_SEPARATOR.join([parent.path, local]),
    }


def natural_key(value: Optional[str]) -> tuple:
    # L2 sorts before L10
    return tuple(
        (0, int(part)) if part.isdigit() else (1, part)
        for part in _DIGITS_RE.split(value or "")
        if part
    )
