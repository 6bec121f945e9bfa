# packages/otbvcodec/src/otbvcodec/bitstream/header.py
from __future__ import annotations
from dataclasses import dataclass
import struct

from ..errors import MalformedEncoding, SignatureMismatch

__all__ = ["SIGNATURE", "HEADER_FMT", "HEADER_SIZE", "Header", "pack_header", "unpack_header"]

SIGNATURE = b"OTBV\x96"

# signature | meta u8 | x_res u32 | y_res u32 | z_res u32 | data_len u32  (little-endian)
HEADER_FMT = "<5sBIIII"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # = 22 bytes

_PAD_SHIFT = 5
_PADDED_BIT = 1 << 4


@dataclass(frozen=True)
class Header:
    """Fixed 22-byte OTBV header.

    `x_res/y_res/z_res` are the original (unpadded) extents. On disk, y/z are only
    stored when `padded` is set; otherwise they are written as 0 and read back as
    `x_res`.
    """
    x_res: int
    y_res: int
    z_res: int
    pad_len: int = 0      # leading zero bits in the data section (0..7)
    padded: bool = False  # volume was grown to a power-of-two cube before encoding
    data_len: int = 0     # packed data section length in bytes

    @property
    def resolution(self) -> tuple[int, int, int]:
        return self.x_res, self.y_res, self.z_res

    @property
    def meta(self) -> int:
        return ((self.pad_len & 0x7) << _PAD_SHIFT) | (_PADDED_BIT if self.padded else 0)


def pack_header(h: Header) -> bytes:
    if not (0 <= h.pad_len <= 7):
        raise ValueError(f"pad_len must be in [0..7] (got {h.pad_len})")
    y_res, z_res = (h.y_res, h.z_res) if h.padded else (0, 0)
    try:
        return struct.pack(HEADER_FMT, SIGNATURE, h.meta, h.x_res, y_res, z_res, h.data_len)
    except struct.error as e:
        raise ValueError(f"header field out of u32 range: {e}") from None


def unpack_header(buf: bytes) -> Header:
    if len(buf) < len(SIGNATURE) or bytes(buf[:len(SIGNATURE)]) != SIGNATURE:
        raise SignatureMismatch(
            "signature validation failed; the buffer does not look like an OTBV file"
        )
    if len(buf) < HEADER_SIZE:
        raise MalformedEncoding(f"header truncated ({len(buf)} < {HEADER_SIZE} bytes)")

    _, meta, x_res, y_res, z_res, data_len = struct.unpack_from(HEADER_FMT, buf, 0)
    padded = bool(meta & _PADDED_BIT)
    if not padded:
        y_res = z_res = x_res
    return Header(
        x_res=int(x_res),
        y_res=int(y_res),
        z_res=int(z_res),
        pad_len=(meta >> _PAD_SHIFT) & 0x7,
        padded=padded,
        data_len=int(data_len),
    )
