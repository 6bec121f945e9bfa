# packages/otbvcodec/src/otbvcodec/bitstream/io.py
from __future__ import annotations
from pathlib import Path
import logging

import numpy as np

from ..config import CodecConfig
from .header import SIGNATURE
from .stream import load, save

__all__ = ["read_bitstream", "write_bitstream", "save_file", "load_file", "looks_like_otbv"]

log = logging.getLogger("otbv.io")


def read_bitstream(path: str | Path) -> bytes:
    """Read an OTBV file from disk (raw bytes)."""
    return Path(path).read_bytes()


def write_bitstream(payload: bytes, path: str | Path) -> None:
    """Atomic write to target path."""
    p = Path(path)
    tmp = p.with_suffix(p.suffix + ".tmp")
    tmp.write_bytes(payload)
    tmp.replace(p)


def save_file(path: str | Path, vol) -> int:
    """Encode `vol` and write it to `path`. Returns the number of bytes written.

    An empty volume writes nothing and returns 0.
    """
    payload = save(vol)
    if not payload:
        return 0
    write_bitstream(payload, path)
    log.info("Written %d bytes to %s", len(payload), path)
    return len(payload)


def load_file(path: str | Path, cfg: CodecConfig | None = None) -> np.ndarray:
    """Read and decode the volume stored at `path`."""
    return load(read_bitstream(path), cfg)


def looks_like_otbv(path: str | Path) -> bool:
    try:
        with open(path, "rb") as f:
            return f.read(len(SIGNATURE)) == SIGNATURE
    except OSError:
        return False
