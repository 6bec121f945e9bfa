# packages/otbvcodec/src/otbvcodec/__init__.py
from __future__ import annotations

"""OTBV - octree codec for binary volumes (public surface)."""

__version__ = "1.0.0"

from .config import CodecConfig
from .errors import (
    OTBVError,
    InvalidShape,
    EmptyVolume,
    MaxDepthExceeded,
    ZeroSizeSubvolume,
    MalformedEncoding,
    SignatureMismatch,
    ResolutionTooLarge,
)
from .bits import BitSeq
from .shape import pow2_roof, max_res_pow2_roof, as_volume, reshape_to_cubic, reshape, deep_copy, size
from .octree import is_subvolume_homogeneous, encode, decode, pad_to_cube, padded_copy, cut_volume
from .bitstream import save, save_flat, load, dump, read, save_file, load_file

__all__ = [
    "__version__",
    "CodecConfig",
    "OTBVError", "InvalidShape", "EmptyVolume", "MaxDepthExceeded", "ZeroSizeSubvolume",
    "MalformedEncoding", "SignatureMismatch", "ResolutionTooLarge",
    "BitSeq",
    "pow2_roof", "max_res_pow2_roof", "as_volume", "reshape_to_cubic", "reshape", "deep_copy", "size",
    "is_subvolume_homogeneous", "encode", "decode", "pad_to_cube", "padded_copy", "cut_volume",
    "save", "save_flat", "load", "dump", "read", "save_file", "load_file",
]
