# packages/otbvcodec/src/otbvcodec/octree.py
from __future__ import annotations

"""
OTBV - octree codec for binary volumes
======================================

Encoding is a pre-order traversal of an *implicit* octree over a cubic,
power-of-two volume. Each node emits one token bit:

    0 -> leaf: the box is homogeneous, followed by one value bit
    1 -> internal: the 8 octants follow, depth-first

Octants are visited x-low/x-high (outer), then y, then z (inner). That order
is part of the wire format and is shared by `encode` and `decode`.

A uniform cube of any edge therefore encodes to exactly two bits `[0, v]`.
Non-cubic volumes are padded with `False` up to the next power-of-two cube
before encoding (`pad_to_cube`) and trimmed back after decoding (`cut_volume`).
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .bits import BitSeq
from .config import CodecConfig, DEFAULT_CONFIG
from .errors import (
    EmptyVolume,
    InvalidShape,
    MalformedEncoding,
    MaxDepthExceeded,
    ZeroSizeSubvolume,
)
from .shape import Resolution, _triplet, as_volume, max_res_pow2_roof, size

__all__ = [
    "is_subvolume_homogeneous",
    "encode",
    "decode",
    "pad_to_cube",
    "padded_copy",
    "cut_volume",
]

log = logging.getLogger("otbv.octree")


def _halves(s: int, e: int) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    m = (s + e) >> 1
    return (s, m), (m, e)


def is_subvolume_homogeneous(vol: np.ndarray, xs: int, xe: int, ys: int, ye: int, zs: int, ze: int) -> bool:
    """True si toutes les cellules de [xs,xe)×[ys,ye)×[zs,ze) valent la première."""
    if (xe - xs) * (ye - ys) * (ze - zs) < 2:
        return True
    box = vol[xs:xe, ys:ye, zs:ze]
    first = vol[xs, ys, zs]
    # any() short-circuits on the first mismatch
    return not np.any(box != first)


# ---------------------------------------------------------------------------
# ENCODE
# ---------------------------------------------------------------------------

def _encode_box(vol: np.ndarray, out: BitSeq, xs: int, xe: int, ys: int, ye: int,
                zs: int, ze: int, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise MaxDepthExceeded(
            f"reached maximum recursion depth ({max_depth}) while encoding; "
            "the data is likely too large or malformed"
        )
    if (xe - xs) * (ye - ys) * (ze - zs) == 0:
        raise ZeroSizeSubvolume(
            f"zero-size subvolume [{xs},{xe})x[{ys},{ye})x[{zs},{ze}) while encoding; "
            "this indicates a bug in the octree traversal"
        )
    if is_subvolume_homogeneous(vol, xs, xe, ys, ye, zs, ze):
        out.append(0)
        out.append(vol[xs, ys, zs])
        return

    out.append(1)
    for x0, x1 in _halves(xs, xe):
        for y0, y1 in _halves(ys, ye):
            for z0, z1 in _halves(zs, ze):
                _encode_box(vol, out, x0, x1, y0, y1, z0, z1, depth + 1, max_depth)


def encode(vol, cfg: CodecConfig | None = None) -> BitSeq:
    """
    Encode un volume **cubique** d'arête puissance de 2 en `BitSeq`.

    Les autres formes doivent d'abord passer par `pad_to_cube`.

    Exceptions
    ----------
    EmptyVolume si le volume est vide, InvalidShape s'il n'est pas un cube
    d'arête 2^k, MaxDepthExceeded si l'arête dépasse 2^cfg.max_depth.
    """
    cfg = cfg or DEFAULT_CONFIG
    vol = as_volume(vol)
    if size(vol) == 0:
        raise EmptyVolume("cannot encode a volume of size 0")
    edge = vol.shape[0]
    if vol.shape != (edge, edge, edge) or (edge & (edge - 1)):
        raise InvalidShape(f"encode expects a power-of-two cube, got shape {vol.shape}; use pad_to_cube first")

    out = BitSeq()
    _encode_box(vol, out, 0, edge, 0, edge, 0, edge, 0, cfg.max_depth)
    log.debug("encoded %s volume into %d bits", vol.shape, len(out))
    return out


# ---------------------------------------------------------------------------
# DECODE
# ---------------------------------------------------------------------------

def _decode_box(bits: Sequence[int], out: np.ndarray, idx: int, xs: int, xe: int, ys: int, ye: int,
                zs: int, ze: int, depth: int, max_depth: int) -> int:
    if depth > max_depth:
        raise MaxDepthExceeded(
            f"reached maximum recursion depth ({max_depth}) while decoding; "
            "the data is likely too large or malformed"
        )
    if (xe - xs) * (ye - ys) * (ze - zs) == 0:
        raise ZeroSizeSubvolume(
            f"zero-size subvolume [{xs},{xe})x[{ys},{ye})x[{zs},{ze}) while decoding"
        )
    if idx >= len(bits):
        raise MalformedEncoding(f"unexpected end of the encoding at bit {idx}")
    if not bits[idx]:
        if idx + 1 >= len(bits):
            raise MalformedEncoding(f"unexpected end of the encoding at bit {idx + 1}")
        out[xs:xe, ys:ye, zs:ze] = bool(bits[idx + 1])
        return idx + 2

    idx += 1
    for x0, x1 in _halves(xs, xe):
        for y0, y1 in _halves(ys, ye):
            for z0, z1 in _halves(zs, ze):
                idx = _decode_box(bits, out, idx, x0, x1, y0, y1, z0, z1, depth + 1, max_depth)
    return idx


def decode(bits, resolution: Resolution, cfg: CodecConfig | None = None) -> np.ndarray:
    """
    Décode `bits` vers un volume bool de forme `resolution`.

    Le cube de travail a l'arête `max_res_pow2_roof(resolution)` ; il est coupé à
    `resolution` après le parcours. Tous les bits doivent être consommés.

    Exceptions
    ----------
    MalformedEncoding si `bits` est tronqué ou contient des bits en trop,
    MaxDepthExceeded / ZeroSizeSubvolume comme pour `encode`,
    EmptyVolume si une extension de `resolution` est nulle.
    """
    cfg = cfg or DEFAULT_CONFIG
    x_res, y_res, z_res = _triplet(resolution)
    if x_res * y_res * z_res == 0:
        raise EmptyVolume(f"cannot decode into an empty resolution {(x_res, y_res, z_res)}")

    seq: List[int] = bits.tolist() if isinstance(bits, BitSeq) else [int(bool(b)) for b in bits]
    edge = max_res_pow2_roof(x_res, y_res, z_res)
    out = np.zeros((edge, edge, edge), dtype=bool)
    end = _decode_box(seq, out, 0, 0, edge, 0, edge, 0, edge, 0, cfg.max_depth)
    if end != len(seq):
        raise MalformedEncoding(f"encoding has {len(seq) - end} trailing bits after the octree")
    return cut_volume(out, (x_res, y_res, z_res))


# ---------------------------------------------------------------------------
# PAD / CUT
# ---------------------------------------------------------------------------

def pad_to_cube(vol) -> np.ndarray:
    """
    Renvoie une copie de `vol` étendue au plus petit cube d'arête 2^k qui le contient.

    Les nouvelles cellules valent `False`. Le volume d'entrée n'est pas modifié.
    """
    vol = as_volume(vol)
    if size(vol) == 0:
        raise EmptyVolume("cannot pad data of size 0 to cube")
    edge = max_res_pow2_roof(vol.shape)
    out = np.zeros((edge, edge, edge), dtype=bool)
    x_res, y_res, z_res = vol.shape
    out[:x_res, :y_res, :z_res] = vol
    return out


# kept for callers of the non-mutating variant
padded_copy = pad_to_cube


def cut_volume(vol: np.ndarray, resolution: Resolution) -> np.ndarray:
    """Tronque chaque axe à `resolution`. Suppose `resolution <= vol.shape` (non vérifié)."""
    x_res, y_res, z_res = _triplet(resolution)
    return np.ascontiguousarray(vol[:x_res, :y_res, :z_res])
