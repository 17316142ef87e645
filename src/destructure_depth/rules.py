"""Rule ID registry and the ``recommended`` preset.

Rule IDs are ``<plugin>/<rule>``, the way they are written in an ESLint
config.  The plugin prefix is ``destructure-depth``.

Structure:
  PUBLIC_RULE_IDS      - stable, supported
  DEPRECATED_RULE_IDS  - kept loadable, do not add new usage
  ALL_RULE_IDS         - union of all buckets
  RECOMMENDED_CONFIG   - preset applied by ``extends: recommended``
"""

from __future__ import annotations

PLUGIN_NAME = "destructure-depth"

MAX_DEPTH = f"{PLUGIN_NAME}/max-depth"

PUBLIC_RULE_IDS: list[str] = sorted([
    MAX_DEPTH,
])

DEPRECATED_RULE_IDS: list[str] = sorted([
    # Add deprecated rules here before removal
])

ALL_RULE_IDS: list[str] = sorted(set(PUBLIC_RULE_IDS + DEPRECATED_RULE_IDS))

RECOMMENDED_CONFIG: dict = {
    "rules": {
        MAX_DEPTH: 2,
    },
}


def _assert_rule_registry_invariants() -> None:
    """Fail fast on invariant violations.

    Called at import time so CI and local runs catch issues immediately.
    """
    import re

    rule_re = re.compile(r"^[a-z][a-z0-9-]*/[a-z][a-z0-9-]*$")

    def _check_bucket(name: str, ids: list[str]) -> None:
        if ids != sorted(ids):
            raise AssertionError(f"{name} must be sorted")
        if len(ids) != len(set(ids)):
            raise AssertionError(f"{name} must contain unique IDs")
        bad = [x for x in ids if not rule_re.match(x) or not x.startswith(PLUGIN_NAME + "/")]
        if bad:
            raise AssertionError(f"{name} contains invalid rule IDs: {bad}")

    _check_bucket("PUBLIC_RULE_IDS", PUBLIC_RULE_IDS)
    _check_bucket("DEPRECATED_RULE_IDS", DEPRECATED_RULE_IDS)

    overlap = set(PUBLIC_RULE_IDS) & set(DEPRECATED_RULE_IDS)
    if overlap:
        raise AssertionError(
            f"Rule ID buckets must be disjoint; overlaps: {sorted(overlap)}"
        )

    unknown = set(RECOMMENDED_CONFIG["rules"]) - set(ALL_RULE_IDS)
    if unknown:
        raise AssertionError(f"RECOMMENDED_CONFIG names unknown rules: {sorted(unknown)}")


_assert_rule_registry_invariants()
