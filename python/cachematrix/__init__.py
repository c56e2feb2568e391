"""Memoized matrix inversion.

Usage::

    m = CacheableMatrix([[2.0, 0.0], [0.0, 2.0]])
    cache_solve(m)          # solved and cached
    cache_solve(m)          # served from the cache
    m.set_matrix(other)     # cache cleared
"""
from __future__ import annotations

__version__ = "0.1.0"

import logging as _logging
from typing import Any

from ._internal import config as _config
from ._internal import observability as _observability
from ._internal.cache import UNSET, CacheableMatrix, make_cache_matrix
from ._internal.errors import NotInvertibleError
from ._internal.observability import HitListener, SolveRecord
from ._internal.solve import SolveResult, cache_solve, solve_with_info
from ._internal.warnings import CacheMatrixConditioningWarning, CacheMatrixWarning

_logging.getLogger(__name__).addHandler(_logging.NullHandler())


def last_solve_trace(op: str | None = None) -> dict[str, Any] | None:
    """Return the most recent solve record (optionally for a specific op)."""
    return _observability.default_instance().last(op)


def clear_solve_traces() -> None:
    _observability.default_instance().clear()


def add_hit_listener(listener: HitListener) -> HitListener:
    """Call ``listener(record)`` whenever an inverse is served from the cache."""
    return _observability.default_instance().add_listener(listener)


def remove_hit_listener(listener: HitListener) -> None:
    _observability.default_instance().remove_listener(listener)


def get_ill_conditioned_policy() -> str:
    return _config.default_settings().ill_conditioned_policy()


def set_ill_conditioned_policy(value: str | None) -> str:
    """Set to ``"raise"`` or ``"warn"``; ``None`` falls back to the environment."""
    return _config.default_settings().set_ill_conditioned_policy(value)


__all__ = [
    "UNSET",
    "CacheableMatrix",
    "make_cache_matrix",
    "cache_solve",
    "solve_with_info",
    "SolveResult",
    "SolveRecord",
    "HitListener",
    "NotInvertibleError",
    "CacheMatrixWarning",
    "CacheMatrixConditioningWarning",
    "last_solve_trace",
    "clear_solve_traces",
    "add_hit_listener",
    "remove_hit_listener",
    "get_ill_conditioned_policy",
    "set_ill_conditioned_policy",
]
