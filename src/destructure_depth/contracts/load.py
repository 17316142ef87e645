"""Load bundled JSON schemas and validate instances against them.

Usage::

    from destructure_depth.contracts.load import validate_instance, validate_options

    validate_options([{"object": {"max": 1}}])
    validate_instance(report_dict, "lint_report.schema.json")
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

SCHEMA_DIR = "data/schemas"

OPTIONS_SCHEMA = "max_depth_options.schema.json"
REPORT_SCHEMA = "lint_report.schema.json"


def _schema_path(name: str) -> Path:
    """Resolve a bundled schema.

    Priority:
    1. ``data/schemas/`` relative to the package root (source checkout)
    2. package data via importlib.resources (wheel / zip installs)
    """
    canonical = Path(__file__).resolve().parents[1] / SCHEMA_DIR / name
    if canonical.exists():
        return canonical

    with resources.as_file(
        resources.files("destructure_depth") / SCHEMA_DIR / name
    ) as p:
        if not p.exists():
            raise FileNotFoundError(f"unknown schema: {name}")
        return p


@lru_cache(maxsize=None)
def _load_schema_text(name: str) -> str:
    return _schema_path(name).read_text(encoding="utf-8")


def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by filename (fresh dict on every call)."""
    return json.loads(_load_schema_text(name))


def validate_instance(instance: Any, schema_name: str) -> None:
    """Validate *instance* against the named schema.

    Raises ``jsonschema.ValidationError`` on failure.
    """
    schema = load_schema(schema_name)
    jsonschema.validate(instance=instance, schema=schema)


def validate_options(options: list[Any]) -> None:
    """Validate the rule's option slots (``[depthOptions?, renamedOptions?]``)."""
    validate_instance(options, OPTIONS_SCHEMA)


def validate_file(instance_path: Path, schema_name: str) -> None:
    """Load a JSON file and validate it against the named schema."""
    instance = json.loads(instance_path.read_text(encoding="utf-8"))

    # The schema already pins schema_version via "const"; this surfaces a
    # readable error before the generic jsonschema traceback.
    if schema_name == REPORT_SCHEMA:
        sv = instance.get("schema_version") if isinstance(instance, dict) else None
        if sv != "lint_report_v1":
            raise ValueError(
                f"{instance_path}: expected schema_version='lint_report_v1', got {sv!r}"
            )

    validate_instance(instance, schema_name)
