from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

@dataclass(frozen=True)
class PathsConfig:
    """Parametric path resolver for CLI outputs.

    ENV keys
    --------
    OTBV_OUTPUTS_DIR   → encoded .otbv files / decoded .npy volumes
    OTBV_ARTIFACTS_DIR → manifests, logs (append-only)
    """
    outputs_dir: Path | None = None
    artifacts_dir: Path | None = None

    @staticmethod
    def from_env() -> "PathsConfig":
        return PathsConfig(
            outputs_dir=_opt_env("OTBV_OUTPUTS_DIR"),
            artifacts_dir=_opt_env("OTBV_ARTIFACTS_DIR"),
        )

    # Accessors (explicit → ENV fallback)
    def outputs(self) -> Path | None: return self.outputs_dir or _opt_env("OTBV_OUTPUTS_DIR")
    def artifacts(self) -> Path | None: return self.artifacts_dir or _opt_env("OTBV_ARTIFACTS_DIR")

    def artifacts_path(self, *parts: str, create: bool = False) -> Path | None:
        root = self.artifacts()
        if not root: return None
        p = root / Path(*parts)
        if create: p.parent.mkdir(parents=True, exist_ok=True)
        return p

def _opt_env(name: str) -> Path | None:
    v = os.getenv(name)
    return Path(v) if v else None

__all__ = ["PathsConfig"]
