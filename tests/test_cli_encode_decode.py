from __future__ import annotations
import json

import numpy as np

from otbvcodec.bitstream import looks_like_otbv
from otbvwf.cli.decode import main as decode_main
from otbvwf.cli.encode import main as encode_main
from otbvwf.cli.info import main as info_main


def _vol():
    vol = np.zeros((6, 3, 9), dtype=bool)
    vol[2:5, 1, 3:8] = True
    return vol


def test_cli_encode_decode_roundtrip(tmp_path, monkeypatch):
    monkeypatch.delenv("OTBV_ARTIFACTS_DIR", raising=False)
    src = tmp_path / "vols"; src.mkdir()
    np.save(src / "a.npy", _vol())
    enc_dir = tmp_path / "enc"
    dec_dir = tmp_path / "dec"
    manifest = tmp_path / "run" / "manifest.json"

    rc = encode_main([str(src), "--out", str(enc_dir), "--manifest", str(manifest)])
    assert rc == 0
    bitstream = enc_dir / "a.otbv"
    assert bitstream.exists() and looks_like_otbv(bitstream)
    mani = json.loads(manifest.read_text(encoding="utf-8"))
    assert mani["outputs"] == [str(bitstream)]

    assert info_main([str(bitstream)]) == 0

    rc = decode_main([str(bitstream), "--out", str(dec_dir)])
    assert rc == 0
    out = np.load(dec_dir / "a_recon.npy")
    assert out.dtype == bool
    assert np.array_equal(out, _vol())


def test_cli_encode_resume_tag_and_journal(tmp_path, monkeypatch):
    monkeypatch.setenv("OTBV_ARTIFACTS_DIR", str(tmp_path / "artifacts"))
    np.save(tmp_path / "b.npy", _vol().astype(np.uint8))
    out_dir = tmp_path / "out"

    assert encode_main([str(tmp_path / "b.npy"), "--out", str(out_dir), "--tag-resolution"]) == 0
    target = out_dir / "b__6x3x9.otbv"
    assert target.exists()
    journal = (tmp_path / "artifacts" / "journal.log").read_text(encoding="utf-8")
    assert "encode" in journal and "b__6x3x9.otbv" in journal

    mtime = target.stat().st_mtime_ns
    assert encode_main([str(tmp_path / "b.npy"), "--out", str(out_dir), "--tag-resolution", "--resume"]) == 0
    assert target.stat().st_mtime_ns == mtime


def test_cli_out_dir_from_env(tmp_path, monkeypatch):
    monkeypatch.delenv("OTBV_ARTIFACTS_DIR", raising=False)
    monkeypatch.setenv("OTBV_OUTPUTS_DIR", str(tmp_path / "envout"))
    np.save(tmp_path / "c.npy", _vol())
    assert encode_main([str(tmp_path / "c.npy")]) == 0
    assert (tmp_path / "envout" / "c.otbv").exists()


def test_cli_failures_are_reported(tmp_path, monkeypatch):
    monkeypatch.delenv("OTBV_ARTIFACTS_DIR", raising=False)
    bad = tmp_path / "bad.otbv"
    bad.write_bytes(b"not an otbv file at all")
    assert decode_main([str(bad), "--out", str(tmp_path / "dec")]) == 1
    assert info_main([str(bad)]) == 1
    assert decode_main([str(tmp_path / "missing.otbv"), "--out", str(tmp_path / "dec")]) == 1

    np.save(tmp_path / "empty.npy", np.zeros((0, 2, 2), dtype=bool))
    assert encode_main([str(tmp_path / "empty.npy"), "--out", str(tmp_path / "enc")]) == 1
    assert not (tmp_path / "enc" / "empty.otbv").exists()
