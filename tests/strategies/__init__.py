"""Hypothesis strategies for tinyessentials property-based testing.

Strategies are organized by domain:

- localization: locale codes, dotted keys, templates, nested raw trees
- ratelimit: identifiers and hit schedules

Usage:
    from tests.strategies import dotted_keys, nested_trees
    from tests.strategies.ratelimit import hit_schedules
"""

from .localization import (
    dotted_keys,
    flatten,
    key_segments,
    locale_codes,
    nested_trees,
    plain_text,
    templates,
)
from .ratelimit import hit_schedules, user_ids

__all__ = [
    "dotted_keys",
    "flatten",
    "hit_schedules",
    "key_segments",
    "locale_codes",
    "nested_trees",
    "plain_text",
    "templates",
    "user_ids",
]
