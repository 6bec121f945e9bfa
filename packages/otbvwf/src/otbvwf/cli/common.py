from __future__ import annotations
import logging, subprocess, sys, time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from otbvcodec.bitstream import looks_like_otbv  # re-exported for the CLIs
from otbvwf.paths import PathsConfig

def setup_logging(log_file: Optional[Path], verbose: bool = True) -> None:
    log_fmt = "[%(asctime)s] %(levelname)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=level, format=log_fmt, datefmt=datefmt, handlers=handlers)

def ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def resolve_out_dir(out: Optional[str]) -> Path:
    """--out explicite, sinon OTBV_OUTPUTS_DIR, sinon le dossier courant."""
    if out:
        return Path(out)
    return PathsConfig.from_env().outputs() or Path(".")

def list_volumes(inputs: list[str], exts=(".npy",)) -> list[Path]:
    """Expand directories into the volume files they contain (recursive)."""
    out: list[Path] = []
    for s in inputs:
        p = Path(s)
        if p.is_dir():
            out.extend(sorted(q for q in p.rglob("*") if q.suffix.lower() in exts))
        else:
            out.append(p)
    return out

@dataclass
class RunMeta:
    cmd: list[str]
    start_ts: float
    git_commit: Optional[str]
    numpy: str

    @staticmethod
    def collect() -> "RunMeta":
        git_commit = None
        try:
            git_commit = subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"], text=True, stderr=subprocess.DEVNULL
            ).strip()
        except (OSError, subprocess.CalledProcessError):
            pass
        return RunMeta(sys.argv[:], time.time(), git_commit, np.__version__)

__all__ = ["setup_logging", "ensure_dir", "resolve_out_dir", "list_volumes", "RunMeta", "looks_like_otbv"]
