from __future__ import annotations

from typing import Any

import numpy as np

from .coercion import owned_matrix


class _Unset:
    """Marker for an empty cache slot. Falsy and equal only to itself."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


class CacheableMatrix:
    """A square matrix that remembers its inverse.

    The holder stores state only. It never validates the matrix and never
    checks that a cached inverse is correct; ``cache_solve`` decides when an
    inverse has to be computed. Replacing the matrix always clears the cached
    inverse.

    Not safe for concurrent use: callers sharing an instance between threads
    must serialise every call, including ``cache_solve``.
    """

    __slots__ = ("_value", "_inverse")

    def __init__(self, value: Any) -> None:
        self._value = owned_matrix(value)
        self._inverse: np.ndarray | _Unset = UNSET

    def get_matrix(self) -> np.ndarray:
        return self._value

    def set_matrix(self, new_value: Any) -> None:
        self._value = owned_matrix(new_value)
        self._inverse = UNSET

    def get_cached_inverse(self) -> np.ndarray | _Unset:
        return self._inverse

    def set_cached_inverse(self, inv: np.ndarray) -> None:
        self._inverse = inv

    def has_cached_inverse(self) -> bool:
        return self._inverse is not UNSET

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(self._value.shape)

    def inverse(self, **options: Any) -> np.ndarray:
        """Shorthand for ``cache_solve(self, **options)``."""
        from .solve import _solve_with_info

        return _solve_with_info(self, options).value

    def __repr__(self) -> str:
        state = "cached" if self.has_cached_inverse() else "unset"
        return f"CacheableMatrix(shape={self.shape}, inverse={state})"


def make_cache_matrix(x: Any) -> CacheableMatrix:
    return CacheableMatrix(x)
