"""File discovery — find ESTree JSON files respecting exclusion patterns."""

from __future__ import annotations

from pathlib import Path

# Default exclusion prefixes (relative to scan root).
_DEFAULT_EXCLUDES = frozenset(
    {
        ".git",
        ".github",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "dist",
        "build",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
    }
)

DEFAULT_INCLUDE = ("**/*.json",)

# Project manifests that share the .json suffix but are never ESTree.
_DEFAULT_EXCLUDE_FILES = frozenset(
    {
        "package.json",
        "package-lock.json",
        "tsconfig.json",
        "jsconfig.json",
        "composer.json",
        ".eslintrc.json",
        ".babelrc.json",
    }
)

_MAX_FILE_BYTES = 50_000_000  # ESTree dumps are verbose


def discover_estree_files(
    root: Path,
    *,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> list[Path]:
    """Find ESTree JSON files under *root*.

    Parameters
    ----------
    root:
        Directory to scan, or a single file (returned as-is).
    include:
        Glob patterns to include.  Default: ``["**/*.json"]``.
    exclude:
        Directory basenames to skip.  Merged with built-in defaults.
        Well-known manifests such as ``package.json`` are always skipped
        during a directory scan.

    Returns
    -------
    Sorted list of absolute ``Path`` objects.
    """
    if root.is_file():
        return [root.resolve()]

    skip = _DEFAULT_EXCLUDES | set(exclude or [])
    patterns = include or list(DEFAULT_INCLUDE)

    results: list[Path] = []
    for pat in patterns:
        for p in root.glob(pat):
            # Skip any path whose parents include an excluded directory.
            if any(part in skip for part in p.relative_to(root).parts):
                continue
            if not p.is_file() or p.name in _DEFAULT_EXCLUDE_FILES:
                continue
            try:
                if p.stat().st_size > _MAX_FILE_BYTES:
                    continue
            except OSError:
                continue
            results.append(p.resolve())

    return sorted(set(results))
