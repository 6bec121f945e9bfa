from __future__ import annotations

import pytest

from otbvcodec import CodecConfig


def test_config_defaults():
    cfg = CodecConfig()
    assert cfg.max_depth == 20
    assert cfg.max_resolution == 100_000


@pytest.mark.parametrize("kw", [dict(max_depth=0), dict(max_depth=21), dict(max_resolution=0), dict(max_resolution=100_001)])
def test_config_bounds(kw):
    with pytest.raises(ValueError):
        CodecConfig(**kw)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("OTBV_MAX_DEPTH", "5")
    monkeypatch.setenv("OTBV_MAX_RESOLUTION", "512")
    cfg = CodecConfig.from_env()
    assert (cfg.max_depth, cfg.max_resolution) == (5, 512)

    monkeypatch.delenv("OTBV_MAX_DEPTH")
    assert CodecConfig.from_env().max_depth == 20

    monkeypatch.setenv("OTBV_MAX_RESOLUTION", "lots")
    with pytest.raises(ValueError):
        CodecConfig.from_env()


def test_config_is_frozen():
    cfg = CodecConfig()
    with pytest.raises(Exception):
        cfg.max_depth = 3  # type: ignore[misc]
