"""Quickstart example for tinyessentials.

Demonstrates the three components:
1. Translator - in-memory and file-backed translation
2. SequentialTaskQueue - ordered async tasks with delays and cancellation
3. SlidingWindowRateLimiter - per-group hit counting

Run: python examples/quickstart.py
"""

import asyncio
import json
import tempfile
from pathlib import Path

from tinyessentials import (
    RateLimiterConfig,
    SequentialTaskQueue,
    SlidingWindowRateLimiter,
    TaskCancelledError,
    Translator,
)

# Example 1: In-memory translation
print("=" * 50)
print("Example 1: In-Memory Translation")
print("=" * 50)

i18n = Translator(
    "in-memory",
    "en",
    local_resources={
        "en": {
            "greet": "Hi {name}",
            "apples": {"$fn": "plural", "args": {"one": "1 apple", "many": "{count} apples"}},
            "errors": {"$pattern": "^error\\.", "value": "Something failed", "elseValue": "OK"},
        },
        "pt": {"greet": "Olá {name}"},
    },
)


def plural(params, helpers):
    args = params["args"]
    template = args["one"] if params.get("count") == 1 else args["many"]
    return template.replace("{count}", str(params.get("count")))


i18n.register_helper("plural", plural)

asyncio.run(i18n.set_locale("pt"))
print(i18n.t("greet", {"name": "Ana"}))
# Output: Olá Ana
print(i18n.t("apples", {"count": 5}))
# Output: 5 apples (falls back to the default locale)
print(i18n.p("error.db"))
# Output: Something failed

asyncio.run(i18n.set_locale(None))
print(i18n.t("greet", {"name": "Ana"}))
# Output: Hi Ana
print(i18n.t("missing"))
# Output: missing

# Example 2: File-backed translation
print("\n" + "=" * 50)
print("Example 2: File-Backed Translation")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmpdir:
    base = Path(tmpdir)
    (base / "en.json").write_text(json.dumps({"app": {"title": "My App"}}), encoding="utf-8")
    (base / "de.json").write_text(json.dumps({"app": {"title": "Meine App"}}), encoding="utf-8")

    files = Translator("file-backed", "en", base_path=base)
    asyncio.run(files.set_locale("de"))
    print(files.t("app.title"))
    # Output: Meine App
    for entry in files.stats().locales:
        print(f"{entry.locale} ({entry.display_name}): {entry.strings} strings")
    # Output: en (English): 1 strings
    #         de (German): 1 strings

# Example 3: Sequential task queue
print("\n" + "=" * 50)
print("Example 3: Sequential Task Queue")
print("=" * 50)


async def queue_demo() -> None:
    queue = SequentialTaskQueue()

    async def job(name: str) -> str:
        print(f"running {name}")
        return name

    first = queue.enqueue(lambda: job("a"), 0, "a")
    second = queue.enqueue(lambda: job("b"), 50, "b")
    third = queue.enqueue(lambda: job("c"), 0, "c")
    queue.cancel_task("c")

    results = await asyncio.gather(first, second, third, return_exceptions=True)
    for result in results:
        if isinstance(result, TaskCancelledError):
            print(f"cancelled: {result}")
        else:
            print(f"result: {result}")


asyncio.run(queue_demo())
# Output: running a, running b, then results a, b and the cancellation message

# Example 4: Rate limiter
print("\n" + "=" * 50)
print("Example 4: Sliding-Window Rate Limiter")
print("=" * 50)

config = RateLimiterConfig(max_hits=3, interval=1000, cleanup_interval=500, max_idle=1200)
with SlidingWindowRateLimiter(config) as limiter:
    limiter.assign_to_group("alice", "team")
    limiter.assign_to_group("bob", "team")
    for user in ("alice", "bob", "alice"):
        limiter.hit(user)
    print(f"limited after 3 hits: {limiter.is_rate_limited('team')}")
    # Output: limited after 3 hits: False
    limiter.hit("bob")
    print(f"limited after 4 hits: {limiter.is_rate_limited('alice')}")
    # Output: limited after 4 hits: True
    print(limiter.get_metrics("team"))
