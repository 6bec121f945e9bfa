# packages/otbvcodec/src/otbvcodec/bits.py
from __future__ import annotations
from typing import Iterable, Iterator, List

import numpy as np

__all__ = ["BitSeq"]


class BitSeq:
    """Growable bit sequence with an exact bit length.

    Bits are packed MSB-first into a `bytearray`; `len()` is the number of bits,
    independent of the backing byte count. This is the storage for the octree
    encoding and for the packed data section of a file.
    """

    __slots__ = ("_buf", "_n")

    def __init__(self, bits: Iterable[int] = ()) -> None:
        self._buf = bytearray()
        self._n = 0
        self.extend(bits)

    # ------------------------------ building ------------------------------

    def append(self, bit) -> None:
        i = self._n
        if (i & 7) == 0:
            self._buf.append(0)
        if bit:
            self._buf[i >> 3] |= 0x80 >> (i & 7)
        self._n = i + 1

    def extend(self, bits: Iterable[int]) -> None:
        for b in bits:
            self.append(b)

    # ------------------------------ access --------------------------------

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, i: int) -> int:
        if i < 0:
            i += self._n
        if not (0 <= i < self._n):
            raise IndexError("BitSeq index out of range")
        return (self._buf[i >> 3] >> (7 - (i & 7))) & 1

    def __iter__(self) -> Iterator[int]:
        return iter(self.tolist())

    def tolist(self) -> List[int]:
        return self._unpacked().tolist()

    def __eq__(self, other) -> bool:
        if isinstance(other, BitSeq):
            return self._n == other._n and self._buf == other._buf
        try:
            return self.tolist() == [int(bool(b)) for b in other]
        except TypeError:
            return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        head = "".join(str(b) for b in self.tolist()[:64])
        more = "..." if self._n > 64 else ""
        return f"BitSeq(n={self._n}, bits={head}{more})"

    # ------------------------------ packing -------------------------------

    def to_bytes(self, pad_len: int = 0) -> bytes:
        """Pack to bytes MSB-first, after prepending `pad_len` zero bits.

        The trailing partial byte (if any) is zero-filled on the right, so callers
        that need exact framing choose `pad_len` such that the total is a multiple
        of 8.
        """
        if pad_len < 0:
            raise ValueError("pad_len must be >= 0")
        if pad_len == 0:
            return bytes(self._buf)
        bits = np.concatenate([np.zeros(pad_len, dtype=np.uint8), self._unpacked()])
        return np.packbits(bits, bitorder="big").tobytes()

    @classmethod
    def from_bytes(cls, data: bytes, skip: int = 0, count: int | None = None) -> "BitSeq":
        """Unpack `data` MSB-first, dropping the first `skip` bits.

        `count` limits the number of bits kept after `skip` (default: all).
        """
        total = len(data) * 8
        if not (0 <= skip <= total):
            raise ValueError(f"skip must be in [0..{total}] (got {skip})")
        out = cls()
        if skip == 0 and (count is None or count == total):
            out._buf = bytearray(data)
            out._n = total
            return out
        bits = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8), bitorder="big")[skip:]
        if count is not None:
            bits = bits[:count]
        out._buf = bytearray(np.packbits(bits, bitorder="big").tobytes())
        out._n = int(bits.size)
        return out

    def _unpacked(self) -> np.ndarray:
        return np.unpackbits(np.frombuffer(bytes(self._buf), dtype=np.uint8),
                             count=self._n, bitorder="big")
