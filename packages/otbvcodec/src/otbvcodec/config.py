# packages/otbvcodec/src/otbvcodec/config.py
from __future__ import annotations
from dataclasses import dataclass
import os

__all__ = ["CodecConfig", "MAX_DEPTH", "MAX_RESOLUTION"]

# enough for volumes up to 2^20 cells per axis
MAX_DEPTH = 20
MAX_RESOLUTION = 100_000


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** du codec OTBV.

    Champs
    ------
    max_depth : int, default=20
        Profondeur maximale de l'octree. La racine est à la profondeur 0, donc un
        cube d'arête 2^max_depth est le plus grand volume encodable. Doit
        vérifier 1 <= max_depth <= 20 (le format fichier suppose 20).
    max_resolution : int, default=100_000
        Résolution maximale par axe acceptée au chargement d'un fichier, avant
        toute allocation. Doit vérifier 1 <= max_resolution <= 100_000.

    Notes
    -----
    - La dataclass est **immuable** (`frozen=True`).
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    - `from_env()` lit `OTBV_MAX_DEPTH` et `OTBV_MAX_RESOLUTION`.
    """

    max_depth: int = MAX_DEPTH
    max_resolution: int = MAX_RESOLUTION

    def __post_init__(self) -> None:
        if not (1 <= int(self.max_depth) <= MAX_DEPTH):
            raise ValueError(f"CodecConfig.max_depth must be in [1..{MAX_DEPTH}]")
        if not (1 <= int(self.max_resolution) <= MAX_RESOLUTION):
            raise ValueError(f"CodecConfig.max_resolution must be in [1..{MAX_RESOLUTION}]")

    @staticmethod
    def from_env() -> "CodecConfig":
        return CodecConfig(
            max_depth=_int_env("OTBV_MAX_DEPTH", MAX_DEPTH),
            max_resolution=_int_env("OTBV_MAX_RESOLUTION", MAX_RESOLUTION),
        )


DEFAULT_CONFIG = CodecConfig()


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name, "").strip()
    if not v:
        return default
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {v!r})") from None
