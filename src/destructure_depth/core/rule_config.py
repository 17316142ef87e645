"""ESLint-style rule entries and config files.

A rule entry is either a bare severity or a list::

    "error"
    2
    ["warn", {"object": {"max": 1}}]
    ["error", {"object": {"max": 1}}, {"enforceForRenamedProperties": true}]

Config files (JSON or YAML) hold a ``rules`` mapping and may extend the
``recommended`` preset::

    extends: recommended
    rules:
      destructure-depth/max-depth: [warn, {object: {max: 1}}]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

import jsonschema
import yaml

from destructure_depth.contracts.load import validate_options
from destructure_depth.core.config import EffectiveConfig, resolve_options
from destructure_depth.errors import RuleConfigError
from destructure_depth.model import Severity
from destructure_depth.rules import MAX_DEPTH, PLUGIN_NAME, RECOMMENDED_CONFIG

logger = logging.getLogger(__name__)

_SEVERITY_BY_NUMBER = {0: Severity.OFF, 1: Severity.WARN, 2: Severity.ERROR}

_RECOMMENDED_NAMES = frozenset({
    "recommended",
    f"plugin:{PLUGIN_NAME}/recommended",
})


@dataclass(frozen=True)
class RuleSetting:
    """A rule's severity together with its resolved options."""

    severity: Severity = Severity.ERROR
    config: EffectiveConfig = field(default_factory=EffectiveConfig)

    @property
    def enabled(self) -> bool:
        return self.severity is not Severity.OFF


def parse_severity(value: Any) -> Severity:
    """``0|1|2`` or ``"off"|"warn"|"error"`` (case-insensitive)."""
    if isinstance(value, bool):
        raise RuleConfigError(f"invalid severity {value!r}")
    if isinstance(value, int):
        if value in _SEVERITY_BY_NUMBER:
            return _SEVERITY_BY_NUMBER[value]
        raise RuleConfigError(f"invalid severity {value!r}; expected 0, 1 or 2")
    if isinstance(value, str):
        try:
            return Severity(value.strip().lower())
        except ValueError:
            raise RuleConfigError(
                f"invalid severity {value!r}; expected 'off', 'warn' or 'error'"
            ) from None
    raise RuleConfigError(f"invalid severity {value!r}")


def parse_options(options: Sequence[Any]) -> EffectiveConfig:
    """Validate the option slots against the bundled schema and resolve them."""
    options = list(options)
    try:
        validate_options(options)
    except jsonschema.ValidationError as exc:
        raise RuleConfigError(
            f"invalid options for {MAX_DEPTH}: {exc.message}", cause=exc
        ) from exc
    first = options[0] if options else None
    second = options[1] if len(options) > 1 else None
    return resolve_options(first, second)


def parse_rule_entry(entry: Any) -> RuleSetting:
    """Turn one rule entry into a ``RuleSetting``.

    Raises
    ------
    RuleConfigError
        If the severity is unknown or the options fail schema validation.
    """
    if isinstance(entry, (list, tuple)):
        if not entry:
            raise RuleConfigError(f"empty rule entry for {MAX_DEPTH}")
        severity = parse_severity(entry[0])
        options = entry[1:]
    else:
        severity = parse_severity(entry)
        options = ()
    return RuleSetting(severity=severity, config=parse_options(options))


# ── config documents ─────────────────────────────────────────────────


def _extends_recommended(document: Mapping[str, Any]) -> bool:
    extends = document.get("extends")
    if extends is None:
        return False
    names = [extends] if isinstance(extends, str) else list(extends)
    unknown = [n for n in names if n not in _RECOMMENDED_NAMES]
    if unknown:
        logger.warning("Ignoring unknown presets in 'extends': %s", ", ".join(map(str, unknown)))
    return len(unknown) < len(names)


def setting_from_document(document: Any) -> RuleSetting:
    """Resolve the max-depth rule setting from a parsed config document.

    Falls back to the ``recommended`` preset when the document does not
    mention the rule.
    """
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise RuleConfigError(
            f"config must be a mapping, got {type(document).__name__}"
        )

    rules: dict[str, Any] = {}
    if _extends_recommended(document):
        rules.update(RECOMMENDED_CONFIG["rules"])

    declared = document.get("rules")
    if declared is not None and not isinstance(declared, Mapping):
        raise RuleConfigError("'rules' must be a mapping")
    rules.update(declared or {})

    # A bare document may carry the rule entry at top level.
    if MAX_DEPTH not in rules and MAX_DEPTH in document:
        rules[MAX_DEPTH] = document[MAX_DEPTH]

    if MAX_DEPTH not in rules:
        logger.debug("%s not configured; using the recommended preset", MAX_DEPTH)
        rules[MAX_DEPTH] = RECOMMENDED_CONFIG["rules"][MAX_DEPTH]

    return parse_rule_entry(rules[MAX_DEPTH])


def read_document(path: Path) -> Any:
    """Parse a JSON or YAML file; the suffix decides, JSON is the default."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise RuleConfigError(f"{path}: config is not UTF-8: {exc}", cause=exc) from exc
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise RuleConfigError(f"{path}: cannot parse config: {exc}", cause=exc) from exc


def load_config(path: Path) -> RuleSetting:
    """Read a config file and resolve the max-depth rule setting.

    Raises ``OSError`` if the file cannot be read and ``RuleConfigError``
    if it cannot be parsed or validated.
    """
    setting = setting_from_document(read_document(path))
    logger.debug(
        "Loaded %s from %s: severity=%s max_depth=%d",
        MAX_DEPTH,
        path,
        setting.severity.value,
        setting.config.max_depth,
    )
    return setting
