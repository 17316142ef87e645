"""Violation: the rule's decision for one checked construct."""

from __future__ import annotations

from dataclasses import dataclass

from destructure_depth.model import ConstructKind
from destructure_depth.model.pattern import Construct, SourceLocation

TOO_DEEPLY = "tooDeeply"

MESSAGES: dict[str, str] = {
    TOO_DEEPLY: (
        "Blocks are destructured too deeply ({{depth}}). "
        "Maximum allowed is {{maxDepth}}."
    ),
}


def render_message(message_id: str, data: dict) -> str:
    """Fill ``{{placeholder}}`` slots of a message template.

    Placeholders without a matching key are left untouched, the way ESLint
    leaves them.
    """
    text = MESSAGES[message_id]
    for key, value in data.items():
        text = text.replace("{{" + key + "}}", str(value))
    return text


@dataclass(frozen=True, slots=True)
class Violation:
    """Immutable record produced only when ``depth > max_depth``."""

    report_node: Construct
    depth: int
    max_depth: int
    message_id: str = TOO_DEEPLY

    @property
    def kind(self) -> ConstructKind:
        return self.report_node.kind

    @property
    def loc(self) -> SourceLocation | None:
        return self.report_node.loc

    @property
    def data(self) -> dict[str, int]:
        return {"depth": self.depth, "maxDepth": self.max_depth}

    @property
    def message(self) -> str:
        return render_message(self.message_id, self.data)
