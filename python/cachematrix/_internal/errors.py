from __future__ import annotations

import numpy as np


class NotInvertibleError(np.linalg.LinAlgError):
    """The matrix could not be inverted (singular, ill-conditioned or not square).

    Subclasses NumPy's LinAlgError so existing ``except LinAlgError`` blocks
    keep catching it. The solver's original exception is chained as
    ``__cause__``.
    """
