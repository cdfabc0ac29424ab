"""Hypothesis strategies for Translator property-based testing.

Provides reusable strategies for generating translation test data:
- Locale codes drawn from a realistic pool
- Dot-path keys and nested raw trees
- Template strings with and without placeholders

Event-Emitting Strategies (HypoFuzz-Optimized):
- nested_trees: Emits tree_depth=N
- templates: Emits template_placeholders=none|some

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING, Any

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LOCALE_POOL = [
    "en", "en-US", "en-GB",
    "de", "de-AT",
    "fr", "fr-CA",
    "es", "es-MX",
    "lv", "lt", "et",
    "ja", "ko", "zh",
    "pt", "pt-BR",
    "it", "nl", "pl", "sv",
]

_SEGMENT_CHARS = string.ascii_lowercase + string.digits + "_"

# Text that can never contain a placeholder
_PLAIN_ALPHABET = string.ascii_letters + string.digits + " .,!?'-"


def locale_codes() -> st.SearchStrategy[str]:
    """Locale codes from a realistic pool."""
    return st.sampled_from(_LOCALE_POOL)


def key_segments() -> st.SearchStrategy[str]:
    """A single key segment (no dots, never empty, never a marker key)."""
    return st.text(alphabet=_SEGMENT_CHARS, min_size=1, max_size=10)


@st.composite
def dotted_keys(draw: DrawFn, max_depth: int = 4) -> str:
    """Flattened keys such as ``app.menu.title``."""
    segments = draw(st.lists(key_segments(), min_size=1, max_size=max_depth))
    return ".".join(segments)


def plain_text() -> st.SearchStrategy[str]:
    """Template strings without any placeholder."""
    return st.text(alphabet=_PLAIN_ALPHABET, max_size=40)


@st.composite
def templates(draw: DrawFn) -> tuple[str, dict[str, str], str]:
    """Template, params and the expected rendering.

    Events emitted:
    - template_placeholders=none|some
    """
    names = draw(st.lists(key_segments(), max_size=3, unique=True))
    params = {name: draw(plain_text()) for name in names}
    pieces = [draw(plain_text())]
    expected = [pieces[0]]
    for name in names:
        filler = draw(plain_text())
        pieces.append(f"{{{name}}}{filler}")
        expected.append(f"{params[name]}{filler}")
    event(f"template_placeholders={'some' if names else 'none'}")
    return "".join(pieces), params, "".join(expected)


@st.composite
def nested_trees(draw: DrawFn, max_depth: int = 3) -> dict[str, Any]:
    """Nested raw trees with string leaves.

    Events emitted:
    - tree_depth=N
    """
    leaves: st.SearchStrategy[Any] = plain_text()
    tree_strategy = st.recursive(
        leaves,
        lambda children: st.dictionaries(key_segments(), children, min_size=1, max_size=4),
        max_leaves=12,
    )
    tree = draw(st.dictionaries(key_segments(), tree_strategy, min_size=1, max_size=5))
    event(f"tree_depth={_depth(tree)}")
    return tree


def _depth(node: Any) -> int:
    if isinstance(node, dict) and node:
        return 1 + max(_depth(child) for child in node.values())
    return 0


def flatten(tree: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Reference flattening used to check ingestion output."""
    flat: dict[str, str] = {}
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat
