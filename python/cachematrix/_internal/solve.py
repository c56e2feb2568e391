from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
import scipy.linalg

from . import config as _config
from . import observability as _observability
from .cache import UNSET
from .errors import NotInvertibleError
from .warnings import CacheMatrixConditioningWarning

_OP = "cache_solve"

# _solve_inverse -> _solve_with_info -> public entry point -> caller
_WARN_STACKLEVEL = 4


@dataclass(frozen=True)
class SolveResult:
    value: np.ndarray
    from_cache: bool


def _solve_identity(matrix: np.ndarray, options: dict[str, Any]) -> np.ndarray:
    rows = matrix.shape[0] if matrix.ndim >= 1 else 0
    identity = np.eye(rows, dtype=matrix.dtype)
    try:
        return scipy.linalg.solve(matrix, identity, **options)
    except np.linalg.LinAlgError as exc:
        raise NotInvertibleError(f"matrix is singular: {exc}") from exc
    except ValueError as exc:
        raise NotInvertibleError(f"matrix cannot be inverted: {exc}") from exc


def _solve_inverse(matrix: np.ndarray, options: dict[str, Any]) -> np.ndarray:
    """Solve ``matrix @ X = I`` for X.

    An ill-conditioned matrix either fails or warns depending on the
    configured policy.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("error", scipy.linalg.LinAlgWarning)
        try:
            return _solve_identity(matrix, options)
        except scipy.linalg.LinAlgWarning as exc:
            conditioning = exc

    if _config.default_settings().ill_conditioned_policy() == _config.RAISE:
        raise NotInvertibleError(f"matrix is ill-conditioned: {conditioning}") from conditioning

    warnings.warn(
        f"inverse of an ill-conditioned matrix may be inaccurate: {conditioning}",
        CacheMatrixConditioningWarning,
        stacklevel=_WARN_STACKLEVEL,
    )
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", scipy.linalg.LinAlgWarning)
        return _solve_identity(matrix, options)


def solve_with_info(cache: Any, **options: Any) -> SolveResult:
    """Return the inverse of ``cache``'s matrix along with whether it was cached.

    On a cache hit the stored inverse is returned as-is and a hit
    notification is emitted. On a miss the inverse is solved for, stored on
    ``cache`` and returned. ``options`` are forwarded untouched to
    ``scipy.linalg.solve``. A failed solve raises NotInvertibleError and
    leaves the cache slot as it was.
    """
    return _solve_with_info(cache, options)


def _solve_with_info(cache: Any, options: dict[str, Any]) -> SolveResult:
    # Every public entry point calls this directly so warning stacklevels line up.
    obs = _observability.default_instance()

    cached = cache.get_cached_inverse()
    if cached is not UNSET:
        obs.record_hit(_OP, cached)
        return SolveResult(value=cached, from_cache=True)

    inverse = _solve_inverse(cache.get_matrix(), options)
    inverse.setflags(write=False)
    cache.set_cached_inverse(inverse)
    obs.record_miss(_OP, inverse)
    return SolveResult(value=inverse, from_cache=False)


def cache_solve(cache: Any, **options: Any) -> np.ndarray:
    """Return the inverse of ``cache``'s matrix, computing it only when needed."""
    return _solve_with_info(cache, options).value
