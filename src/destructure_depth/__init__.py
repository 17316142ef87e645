"""destructure_depth: limit how deeply destructuring patterns nest."""

__all__ = [
    "__version__",
    "lint_path",
    "lint_tree",
    "load_config",
    "setting_from",
    "validate_instance",
]
__version__ = "0.1.0"

# Programmatic entrypoints: see destructure_depth.api.
from destructure_depth.api import (  # noqa: E402, F401
    lint_path,
    lint_tree,
    load_config,
    setting_from,
    validate_instance,
)
