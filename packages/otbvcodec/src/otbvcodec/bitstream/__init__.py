# packages/otbvcodec/src/otbvcodec/bitstream/__init__.py
from __future__ import annotations

# Header fixe 22 octets
from .header import SIGNATURE, HEADER_SIZE, Header, pack_header, unpack_header

# Framing complet header + données
from .stream import stream_data_as_file_bytes, save, save_flat, dump, load, read, read_header

# I/O disque
from .io import read_bitstream, write_bitstream, save_file, load_file, looks_like_otbv

__all__ = [
    "SIGNATURE", "HEADER_SIZE", "Header", "pack_header", "unpack_header",
    "stream_data_as_file_bytes", "save", "save_flat", "dump", "load", "read", "read_header",
    "read_bitstream", "write_bitstream", "save_file", "load_file", "looks_like_otbv",
]
