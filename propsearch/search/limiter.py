"""Result page bounding."""
from __future__ import annotations

from typing import Sequence, TypeVar

from propsearch.config import MAX_RESULTS

T = TypeVar("T")


def limit_results(results: Sequence[T], max_count: int = MAX_RESULTS) -> list[T]:
    """First max_count results in store order (no ranking). Zero or negative gives []."""
    if max_count <= 0:
        return []
    return list(results[:max_count])
