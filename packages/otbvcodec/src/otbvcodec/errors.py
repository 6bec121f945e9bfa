# packages/otbvcodec/src/otbvcodec/errors.py
from __future__ import annotations

"""Erreurs du codec OTBV.

Chaque mode d'échec a sa propre classe pour que l'appelant puisse distinguer
une entrée corrompue (`MalformedEncoding`, `SignatureMismatch`, ...) d'un
invariant interne cassé (`ZeroSizeSubvolume`) ou d'un mauvais usage
(`InvalidShape`, `EmptyVolume`).

Les erreurs "entrée invalide" dérivent aussi de `ValueError`, les erreurs de
parcours de `RuntimeError`. Les erreurs d'E/S restent des `OSError` natives.
"""

__all__ = [
    "OTBVError",
    "InvalidShape",
    "EmptyVolume",
    "MaxDepthExceeded",
    "ZeroSizeSubvolume",
    "MalformedEncoding",
    "SignatureMismatch",
    "ResolutionTooLarge",
]


class OTBVError(Exception):
    """Base de toutes les erreurs levées par otbvcodec."""


class InvalidShape(OTBVError, ValueError):
    """Reshape impossible, ou volume qui n'est pas 3-D / cubique quand il doit l'être."""


class EmptyVolume(OTBVError, ValueError):
    """Volume de taille 0 là où un volume non vide est requis."""


class MaxDepthExceeded(OTBVError, RuntimeError):
    """Le parcours de l'octree a dépassé le plafond de profondeur."""


class ZeroSizeSubvolume(OTBVError, RuntimeError):
    """Sous-volume vide rencontré pendant le parcours (invariant interne cassé)."""


class MalformedEncoding(OTBVError, ValueError):
    """Séquence de bits ou buffer tronqué / incohérent."""


class SignatureMismatch(OTBVError, ValueError):
    """Le buffer ne commence pas par la signature OTBV."""


class ResolutionTooLarge(OTBVError, ValueError):
    """Résolution déclarée dans le header au-delà du maximum autorisé."""
