"""Explain mode: structured traces of permission evaluations."""

from granter.explain._models import Explanation
from granter.explain._trace import Trace

__all__ = ["Explanation", "Trace"]
