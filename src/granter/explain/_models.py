"""Data model for explain output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["Explanation"]


@dataclass(frozen=True, slots=True)
class Explanation:
    """Trace of a single permission evaluation.

    Attributes:
        name: Name of the evaluated permission.
        result: The boolean it produced; always equal to a plain call.
        duration: Wall-clock time of this evaluation in milliseconds,
            including any children that were evaluated.
        operator: ``"AND"``, ``"OR"`` or ``"NOT"`` for composites, else ``None``.
        details: One node per child that was actually evaluated, in child
            order. Children skipped by short-circuiting are absent.
    """

    name: str
    result: bool
    duration: float
    operator: str | None = None
    details: tuple[Explanation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        data: dict[str, Any] = {
            "name": self.name,
            "result": self.result,
            "duration": self.duration,
        }
        if self.operator is not None:
            data["operator"] = self.operator
        if self.details:
            data["details"] = [d.to_dict() for d in self.details]
        return data

    def evaluated_names(self) -> list[str]:
        """Names of every node in the tree, depth-first, this node first."""
        names = [self.name]
        for detail in self.details:
            names.extend(detail.evaluated_names())
        return names

    def _lines(self, depth: int) -> list[str]:
        verdict = "ALLOWED" if self.result else "DENIED"
        lines = [f"{'  ' * depth}{self.name} [{verdict}] ({self.duration}ms)"]
        for detail in self.details:
            lines.extend(detail._lines(depth + 1))
        return lines

    def __str__(self) -> str:
        """Return a human-readable indented tree."""
        return "\n".join(self._lines(0))
