# packages/otbvwf/src/otbvwf/__init__.py
from __future__ import annotations

from .api import atomic_write, otbv_name, log_append
from .paths import PathsConfig

__all__ = [
    "atomic_write",
    "otbv_name",
    "log_append",
    "PathsConfig",
    # on n’importe PAS le sous-module cli ici
]

__version__ = "1.0.0"
