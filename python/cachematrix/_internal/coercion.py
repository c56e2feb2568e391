from __future__ import annotations

from typing import Any

import numpy as np


def owned_matrix(candidate: Any) -> np.ndarray:
    """Return a private, read-only float64 copy of ``candidate``.

    Shape is not checked here; a non-square or singular matrix is only
    rejected when its inverse is solved for.
    """
    arr = np.array(candidate, dtype=np.float64, copy=True)
    # In-place edits would bypass set_matrix and leave a stale inverse cached.
    arr.setflags(write=False)
    return arr
