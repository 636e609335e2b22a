# client_registry/shared/utils/pagination.py

from typing import Optional, Tuple

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# Largest OFFSET a 64-bit store integer can carry
MAX_SKIP = 2 ** 63 - 1


def clamp_page(skip: Optional[int] = 0, take: Optional[int] = DEFAULT_PAGE_SIZE) -> Tuple[int, int]:
    """
    Normalize offset paging arguments instead of rejecting them.

    ``skip`` is raised to 0 when negative and capped at MAX_SKIP. A
    missing or negative ``take`` falls back to DEFAULT_PAGE_SIZE; larger
    values are capped at MAX_PAGE_SIZE. ``take=0`` is kept and yields an
    empty page.
    """
    skip = min(max(0, skip or 0), MAX_SKIP)
    if take is None or take < 0:
        take = DEFAULT_PAGE_SIZE
    return skip, min(take, MAX_PAGE_SIZE)
