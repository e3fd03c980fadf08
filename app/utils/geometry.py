from typing import Iterable, Optional, TypeVar

R = TypeVar("R")


def contains(outer, inner) -> bool:
    """Axis-aligned bounding-box containment, edges inclusive."""
    return (
        inner.x >= outer.x
        and inner.y >= outer.y
        and inner.x + inner.width <= outer.x + outer.width
        and inner.y + inner.height <= outer.y + outer.height
    )


def find_container(inner, candidates: Iterable[R]) -> Optional[R]:
    """First candidate (in the given order) whose box contains ``inner``."""
    for candidate in candidates:
        if contains(candidate, inner):
            return candidate
    return None
