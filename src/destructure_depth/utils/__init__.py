"""Shared utilities for destructure_depth."""

from destructure_depth.utils.exit_codes import ExitCode
from destructure_depth.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "ExitCode",
    "stable_json_dump",
    "stable_json_dumps",
]
