# packages/otbvcodec/src/otbvcodec/shape.py
from __future__ import annotations
from typing import Sequence, Tuple

import numpy as np

from .errors import InvalidShape

__all__ = [
    "Resolution",
    "pow2_roof",
    "max_res_pow2_roof",
    "as_volume",
    "reshape_to_cubic",
    "reshape",
    "deep_copy",
    "size",
]

Resolution = Tuple[int, int, int]


def pow2_roof(n: int) -> int:
    """Plus petite puissance de 2 >= `n` (n >= 1). Renvoie `n` si c'en est déjà une.

    `n < 1` lève `ValueError` : 0 n'a pas de "plafond" puissance de 2 utile ici.
    """
    n = int(n)
    if n < 1:
        raise ValueError(f"pow2_roof: expected n >= 1 (got {n})")
    return 1 << (n - 1).bit_length()


def max_res_pow2_roof(x_res: int | Sequence[int], y_res: int | None = None, z_res: int | None = None) -> int:
    """`pow2_roof(max(x, y, z))`. Accepte aussi un triplet unique."""
    if y_res is None and z_res is None:
        x_res, y_res, z_res = _triplet(x_res)
    return pow2_roof(max(int(x_res), int(y_res), int(z_res)))


def as_volume(data) -> np.ndarray:
    """Convertit `data` (listes imbriquées, ndarray int/bool...) en volume bool 3-D contigu."""
    vol = np.ascontiguousarray(np.asarray(data).astype(bool, copy=False))
    if vol.ndim != 3:
        raise InvalidShape(f"expected a 3-D volume, got ndim={vol.ndim}")
    return vol


def reshape_to_cubic(flat) -> np.ndarray:
    """Réinterprète une séquence 1-D de longueur a^3 comme un cube d'arête a.

    Remplissage row-major : x varie le plus lentement, z le plus vite.
    """
    arr = np.asarray(flat).reshape(-1)
    n = int(arr.size)
    edge = _icbrt(n)
    if edge ** 3 != n:
        raise InvalidShape(f"could not reshape {n} elements into a cubic volume")
    return np.ascontiguousarray(arr.astype(bool, copy=False).reshape(edge, edge, edge))


def reshape(flat, resolution: Resolution) -> np.ndarray:
    """Même remplissage row-major que `reshape_to_cubic`, vers une forme arbitraire."""
    x_res, y_res, z_res = _triplet(resolution)
    arr = np.asarray(flat).reshape(-1)
    expected = x_res * y_res * z_res
    if arr.size != expected:
        raise InvalidShape(
            f"cannot reshape {arr.size} elements to {(x_res, y_res, z_res)} ({expected} cells)"
        )
    return np.ascontiguousarray(arr.astype(bool, copy=False).reshape(x_res, y_res, z_res))


def deep_copy(vol: np.ndarray) -> np.ndarray:
    return np.array(vol, dtype=bool, copy=True, order="C")


def size(vol) -> int:
    """Nombre total de cellules (0 si une extension est nulle)."""
    shape = vol if isinstance(vol, tuple) else np.shape(vol)
    if len(shape) != 3:
        raise InvalidShape(f"expected a 3-D shape, got {tuple(shape)}")
    x_res, y_res, z_res = (int(s) for s in shape)
    return x_res * y_res * z_res


# ----------------------------- helpers ------------------------------------

def _triplet(resolution) -> Resolution:
    try:
        x_res, y_res, z_res = (int(v) for v in resolution)
    except (TypeError, ValueError):
        raise InvalidShape(f"expected a (x, y, z) resolution, got {resolution!r}") from None
    if min(x_res, y_res, z_res) < 0:
        raise InvalidShape(f"negative extent in resolution {(x_res, y_res, z_res)}")
    return x_res, y_res, z_res


def _icbrt(n: int) -> int:
    """Racine cubique entière (plancher), exacte pour les grands entiers."""
    if n < 2:
        return n
    r = int(round(n ** (1.0 / 3.0)))
    while r ** 3 > n:
        r -= 1
    while (r + 1) ** 3 <= n:
        r += 1
    return r
