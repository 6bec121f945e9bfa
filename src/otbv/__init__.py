"""OTBV - unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import otbv as ot
    blob = ot.save(volume)          # bool ndarray (X, Y, Z) -> bytes
    vol  = ot.load(blob)

Or detailed modules:

    from otbv import codec, wf
"""

__version__ = "1.0.0"

import otbvcodec as codec
import otbvwf as wf

# High-level convenience re-exports (top-level functions)
from otbvcodec import (
    CodecConfig,
    BitSeq,
    encode, decode, pad_to_cube, cut_volume,
    save, save_flat, load, dump, read, save_file, load_file,
    pow2_roof, max_res_pow2_roof, reshape, reshape_to_cubic, as_volume,
    OTBVError, InvalidShape, EmptyVolume, MaxDepthExceeded, ZeroSizeSubvolume,
    MalformedEncoding, SignatureMismatch, ResolutionTooLarge,
)
from otbvwf import atomic_write

__all__ = [
    # sub-namespaces
    "codec", "wf",
    # convenience
    "CodecConfig", "BitSeq",
    "encode", "decode", "pad_to_cube", "cut_volume",
    "save", "save_flat", "load", "dump", "read", "save_file", "load_file",
    "pow2_roof", "max_res_pow2_roof", "reshape", "reshape_to_cubic", "as_volume",
    "OTBVError", "InvalidShape", "EmptyVolume", "MaxDepthExceeded", "ZeroSizeSubvolume",
    "MalformedEncoding", "SignatureMismatch", "ResolutionTooLarge",
    "atomic_write",
    "__version__",
]
