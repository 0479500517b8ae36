"""Trace recorder passed explicitly through one explain evaluation.

There is no ambient tracer: each evaluation owns its ``Trace`` objects, so
concurrent evaluations never see each other's nodes.
"""

from __future__ import annotations

from granter.explain._models import Explanation

__all__ = ["Trace"]


class Trace:
    """Ordered collector of sibling ``Explanation`` nodes."""

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: list[Explanation] = []

    def record(self, node: Explanation) -> None:
        self._nodes.append(node)

    def extend(self, other: Trace) -> None:
        self._nodes.extend(other._nodes)

    @property
    def nodes(self) -> tuple[Explanation, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)
