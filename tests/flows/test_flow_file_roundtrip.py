# tests/flows/test_flow_file_roundtrip.py
from __future__ import annotations

import numpy as np
import pytest

import otbv as ot
from otbvcodec.bitstream import looks_like_otbv, read_bitstream, write_bitstream


def _blobs(shape, seed=7):
    """Quelques boîtes pleines dans un volume vide (cohérence spatiale réaliste)."""
    rng = np.random.default_rng(seed)
    vol = np.zeros(shape, dtype=bool)
    for _ in range(4):
        lo = [int(rng.integers(0, s)) for s in shape]
        hi = [min(s, l + int(rng.integers(1, 6))) for s, l in zip(shape, lo)]
        vol[lo[0]:hi[0], lo[1]:hi[1], lo[2]:hi[2]] = True
    return vol


@pytest.mark.parametrize("shape", [(10, 20, 30), (32, 32, 32), (5, 1, 17)])
def test_flow_save_file_load_file(tmp_path, shape):
    """
    Round-trip fichier complet :
      - save_file écrit atomiquement et renvoie la taille
      - la signature est reconnue
      - load_file restitue exactement le volume d'origine
    """
    vol = _blobs(shape)
    path = tmp_path / "vol.otbv"
    n = ot.save_file(path, vol)
    assert n == path.stat().st_size == len(ot.save(vol))
    assert looks_like_otbv(path)
    assert not path.with_suffix(".otbv.tmp").exists()

    out = ot.load_file(path)
    assert out.shape == shape
    assert np.array_equal(out, vol)


def test_flow_empty_volume_writes_nothing(tmp_path):
    path = tmp_path / "empty.otbv"
    assert ot.save_file(path, np.zeros((4, 0, 4), dtype=bool)) == 0
    assert not path.exists()


def test_flow_missing_file_is_oserror(tmp_path):
    with pytest.raises(OSError):
        ot.load_file(tmp_path / "nope.otbv")
    assert not looks_like_otbv(tmp_path / "nope.otbv")


def test_flow_raw_bitstream_io(tmp_path):
    blob = ot.save(_blobs((8, 8, 8)))
    p = tmp_path / "raw.otbv"
    write_bitstream(blob, p)
    assert read_bitstream(p) == blob


def test_flow_codec_layers_agree():
    """save == header + encode(pad) packé ; load == decode + cut."""
    vol = _blobs((12, 7, 3), seed=3)
    padded = ot.pad_to_cube(vol)
    bits = ot.encode(padded)
    blob = ot.save(vol)
    pad_len = (8 - len(bits) % 8) % 8
    assert blob[22:] == bits.to_bytes(pad_len)
    assert np.array_equal(ot.decode(bits, vol.shape), vol)
    assert np.array_equal(ot.cut_volume(ot.decode(bits, padded.shape), vol.shape), vol)
