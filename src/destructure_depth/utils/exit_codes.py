"""Exit-code contract for every CLI command.

Code  Meaning
----  -------
  0   Success — no error-severity findings, warnings within --max-warnings
  1   Violation — findings at error severity, too many warnings, or
      options that fail schema validation (validate-options)
  2   Error — usage error, missing file, unreadable or invalid config
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    VIOLATION = 1
    ERROR = 2
