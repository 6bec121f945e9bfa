from __future__ import annotations

import numpy as np
import pytest

from otbvcodec.errors import InvalidShape
from otbvcodec.shape import (
    as_volume, deep_copy, max_res_pow2_roof, pow2_roof, reshape, reshape_to_cubic, size,
)


def test_pow2_roof_properties():
    for n in range(1, 1100):
        p = pow2_roof(n)
        assert p & (p - 1) == 0, n          # puissance de 2
        assert p >= n
        assert p // 2 < n                   # aucune puissance plus petite ne suffit
        assert (p == n) == (n & (n - 1) == 0)


@pytest.mark.parametrize("n,expected", [(1, 1), (2, 2), (3, 4), (5, 8), (1000, 1024), (2**20, 2**20), (2**20 + 1, 2**21)])
def test_pow2_roof_values(n, expected):
    assert pow2_roof(n) == expected


@pytest.mark.parametrize("n", [0, -1])
def test_pow2_roof_rejects_non_positive(n):
    with pytest.raises(ValueError):
        pow2_roof(n)


def test_max_res_pow2_roof_args_and_tuple():
    assert max_res_pow2_roof(3, 5, 2) == 8
    assert max_res_pow2_roof((3, 5, 2)) == 8
    assert max_res_pow2_roof(1, 1, 1) == 1


def test_reshape_row_major_order():
    # (x, y, z) -> x*Y*Z + y*Z + z
    flat = [False] * 24
    flat[1 * 12 + 2 * 4 + 3] = True
    vol = reshape(flat, (2, 3, 4))
    assert vol.shape == (2, 3, 4) and vol.dtype == bool
    assert vol[1, 2, 3]
    assert int(vol.sum()) == 1


def test_reshape_size_mismatch():
    with pytest.raises(InvalidShape):
        reshape([True] * 10, (2, 2, 2))


def test_reshape_to_cubic():
    vol = reshape_to_cubic(np.arange(64) % 2)
    assert vol.shape == (4, 4, 4)
    assert not vol[0, 0, 0] and vol[0, 0, 1]
    with pytest.raises(InvalidShape):
        reshape_to_cubic([0] * 26)


def test_size_and_deep_copy():
    assert size(np.zeros((2, 3, 4), dtype=bool)) == 24
    assert size(np.zeros((0, 4, 4), dtype=bool)) == 0
    assert size((5, 0, 1)) == 0

    vol = np.zeros((2, 2, 2), dtype=bool)
    cp = deep_copy(vol)
    cp[0, 0, 0] = True
    assert not vol[0, 0, 0]


def test_as_volume_converts_and_validates():
    vol = as_volume([[[0, 1], [2, 0]]])
    assert vol.dtype == bool and vol.shape == (1, 2, 2)
    assert vol.tolist() == [[[False, True], [True, False]]]
    with pytest.raises(InvalidShape):
        as_volume(np.zeros((4, 4), dtype=bool))
