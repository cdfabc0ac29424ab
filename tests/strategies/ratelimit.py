"""Hypothesis strategies for rate limiter property-based testing.

Event-Emitting Strategies (HypoFuzz-Optimized):
- hit_schedules: Emits hit_density=sparse|dense

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn


def user_ids() -> st.SearchStrategy[str]:
    """Short identifiers used for both users and groups."""
    return st.text(alphabet="abcdefgh", min_size=1, max_size=4)


@st.composite
def hit_schedules(draw: DrawFn, max_gap: int = 500) -> list[int]:
    """Gaps (ms) between consecutive hits.

    Events emitted:
    - hit_density=sparse|dense
    """
    gaps = draw(st.lists(st.integers(min_value=0, max_value=max_gap), min_size=1, max_size=30))
    average = sum(gaps) / len(gaps)
    event(f"hit_density={'dense' if average < max_gap / 4 else 'sparse'}")
    return gaps
