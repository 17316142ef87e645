"""Rule options → one canonical, immutable configuration.

The rule's first option slot comes in three historical shapes::

    {"VariableDeclarator": {"array": bool, "object": bool},
     "AssignmentExpression": {"array": bool, "object": bool}}   # per-construct
    {"array": bool, "object": bool}                              # flat boolean
    {"array": {"max": n}, "object": {"max": n}}                  # flat max-depth

``resolve_options`` is the only place that looks at those shapes; everything
downstream sees an ``EffectiveConfig``.  Input is assumed to have passed
``contracts.load.validate_options`` already, but absent or partial values
fall back to defaults instead of failing.

The second slot, ``{"enforceForRenamedProperties": bool}``, is carried on the
config and does not influence depth measurement.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from destructure_depth.model import ConstructKind, DestructuringType

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 0

_CONSTRUCT_KEYS = tuple(kind.value for kind in ConstructKind)


@dataclass(frozen=True)
class ConstructToggle:
    """Which destructuring flavours are checked for one construct kind."""

    array: bool = True
    object: bool = True

    def is_enabled(self, destructuring_type: DestructuringType) -> bool:
        return getattr(self, destructuring_type.value)


def _all_enabled() -> dict[ConstructKind, ConstructToggle]:
    return {kind: ConstructToggle() for kind in ConstructKind}


@dataclass(frozen=True)
class EffectiveConfig:
    """Immutable, resolved rule configuration.

    ``max_depth`` is always a non-negative integer; 0 means no nesting is
    allowed at all.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    enabled: Mapping[ConstructKind, ConstructToggle] = field(default_factory=_all_enabled)
    enforce_for_renamed_properties: bool = False

    def should_check(
        self,
        kind: ConstructKind,
        destructuring_type: DestructuringType = DestructuringType.OBJECT,
    ) -> bool:
        toggle = self.enabled.get(kind)
        return toggle is not None and toggle.is_enabled(destructuring_type)

    def with_max_depth(self, max_depth: int) -> "EffectiveConfig":
        """Return a copy with ``max_depth`` replaced (CLI ``--max`` override)."""
        return EffectiveConfig(
            max_depth=_coerce_max(max_depth),
            enabled=dict(self.enabled),
            enforce_for_renamed_properties=self.enforce_for_renamed_properties,
        )


# ── shape detection ──────────────────────────────────────────────────


def _is_per_construct(options: Mapping[str, Any]) -> bool:
    return any(key in options for key in _CONSTRUCT_KEYS)


def _flag(value: Any) -> bool:
    """Only an explicit ``False`` disables a check."""
    return value is not False


def _toggle_from(raw: Any) -> ConstructToggle:
    if not isinstance(raw, Mapping):
        return ConstructToggle()
    return ConstructToggle(
        array=_flag(raw.get("array")),
        object=_flag(raw.get("object")),
    )


def _coerce_max(value: Any) -> int:
    # bool is an int subclass; the schema rejects it, so treat it as absent.
    if value is None or isinstance(value, bool):
        return DEFAULT_MAX_DEPTH
    if not isinstance(value, (int, float)) or math.isnan(value):
        return DEFAULT_MAX_DEPTH
    if math.isinf(value):
        return DEFAULT_MAX_DEPTH if value < 0 else 2**31 - 1
    depth = int(value)
    if depth < 0:
        logger.debug("Negative max depth %r clamped to 0", value)
        return 0
    return depth


def _max_from(raw: Any) -> int:
    if isinstance(raw, Mapping):
        return _coerce_max(raw.get("max"))
    return DEFAULT_MAX_DEPTH


# ── public API ───────────────────────────────────────────────────────


def resolve_options(
    options: Mapping[str, Any] | None = None,
    extra: Mapping[str, Any] | None = None,
) -> EffectiveConfig:
    """Normalize the rule's two option slots into an ``EffectiveConfig``.

    Parameters
    ----------
    options:
        First option slot, in any of the three accepted shapes.  ``None``
        (no options at all) yields ``max_depth=0`` with every construct
        enabled.
    extra:
        Second option slot, ``{"enforceForRenamedProperties": bool}``.

    Returns
    -------
    EffectiveConfig
    """
    renamed = bool((extra or {}).get("enforceForRenamedProperties", False))

    if not options:
        return EffectiveConfig(enforce_for_renamed_properties=renamed)

    if _is_per_construct(options):
        enabled = {
            kind: _toggle_from(options.get(kind.value)) for kind in ConstructKind
        }
        return EffectiveConfig(
            max_depth=DEFAULT_MAX_DEPTH,
            enabled=enabled,
            enforce_for_renamed_properties=renamed,
        )

    # Flat forms: each of array/object is either a flag or a {max} block.
    array_raw = options.get("array")
    object_raw = options.get("object")
    toggle = ConstructToggle(
        array=_flag(array_raw) if not isinstance(array_raw, Mapping) else True,
        object=_flag(object_raw) if not isinstance(object_raw, Mapping) else True,
    )
    return EffectiveConfig(
        max_depth=_max_from(object_raw),
        enabled={kind: toggle for kind in ConstructKind},
        enforce_for_renamed_properties=renamed,
    )
