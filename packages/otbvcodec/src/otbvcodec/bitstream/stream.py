# packages/otbvcodec/src/otbvcodec/bitstream/stream.py
from __future__ import annotations
from typing import BinaryIO, Tuple
import io
import logging

import numpy as np

from ..bits import BitSeq
from ..config import CodecConfig, DEFAULT_CONFIG
from ..errors import EmptyVolume, MalformedEncoding, ResolutionTooLarge
from ..octree import decode, encode, pad_to_cube
from ..shape import Resolution, as_volume, reshape, size
from .header import HEADER_SIZE, Header, pack_header, unpack_header

__all__ = [
    "stream_data_as_file_bytes",
    "save",
    "save_flat",
    "dump",
    "load",
    "read",
    "read_header",
]

log = logging.getLogger("otbv.stream")


def stream_data_as_file_bytes(fp: BinaryIO, bits: BitSeq, resolution: Resolution, padded: bool) -> int:
    """
    Écrit header + données d'un encodage déjà calculé dans le flux binaire `fp`.

    `pad_len` zéros sont préfixés à `bits` pour tomber sur une frontière d'octet,
    puis le tout est packé MSB-first. Renvoie le nombre d'octets écrits.
    """
    rem = len(bits) % 8
    pad_len = 0 if rem == 0 else 8 - rem
    data = bits.to_bytes(pad_len)
    x_res, y_res, z_res = resolution
    h = Header(x_res=int(x_res), y_res=int(y_res), z_res=int(z_res),
               pad_len=pad_len, padded=bool(padded), data_len=len(data))
    head = pack_header(h)
    fp.write(head)
    fp.write(data)
    return len(head) + len(data)


def save(vol) -> bytes:
    """
    Encode `vol` en fichier OTBV complet (bytes).

    Un volume vide n'est pas une erreur : un warning est loggé et `b""` est
    renvoyé (rien à écrire).
    """
    buf = io.BytesIO()
    dump(vol, buf)
    return buf.getvalue()


def save_flat(flat, resolution: Resolution) -> bytes:
    """Variante de `save` pour des données aplaties : reshape vers `resolution` puis save."""
    return save(reshape(flat, resolution))


def dump(vol, fp: BinaryIO) -> int:
    """Écrit `vol` dans le puits d'octets `fp` (ouvert/fermé par l'appelant)."""
    vol = as_volume(vol)
    if size(vol) == 0:
        log.warning("The provided volume size is 0. Nothing will be written")
        return 0
    padded_vol = pad_to_cube(vol)
    bits = encode(padded_vol)
    n = stream_data_as_file_bytes(fp, bits, vol.shape, size(padded_vol) > size(vol))
    log.debug("written %d bytes (%d octree bits) for volume %s", n, len(bits), vol.shape)
    return n


def read_header(buf: bytes, cfg: CodecConfig | None = None) -> Header:
    """Parse et valide le header (signature, résolutions) sans décoder les données."""
    cfg = cfg or DEFAULT_CONFIG
    h = unpack_header(buf)
    if max(h.resolution) > cfg.max_resolution:
        raise ResolutionTooLarge(
            f"volume lists resolution {h.resolution} above allowed maximum "
            f"{cfg.max_resolution} per dimension"
        )
    if min(h.resolution) == 0:
        raise EmptyVolume(f"header declares an empty resolution {h.resolution}")
    return h


def _split(buf: bytes, cfg: CodecConfig | None) -> Tuple[Header, bytes]:
    h = read_header(buf, cfg)
    end = HEADER_SIZE + h.data_len
    if len(buf) < end:
        raise MalformedEncoding(
            f"data section truncated (declared {h.data_len} bytes, got {len(buf) - HEADER_SIZE})"
        )
    if h.data_len * 8 < h.pad_len:
        raise MalformedEncoding(f"pad_len {h.pad_len} exceeds the data section ({h.data_len} bytes)")
    return h, bytes(buf[HEADER_SIZE:end])


def load(buf: bytes, cfg: CodecConfig | None = None) -> np.ndarray:
    """
    Décode un fichier OTBV complet (bytes) vers un volume bool.

    Étapes : header -> bytes de données -> bits (MSB-first) -> suppression des
    `pad_len` bits de tête -> décodage octree -> découpe à la résolution d'origine.
    """
    h, data = _split(buf, cfg)
    bits = BitSeq.from_bytes(data, skip=h.pad_len)
    vol = decode(bits, h.resolution, cfg)
    log.debug("loaded volume %s from %d data bytes", vol.shape, h.data_len)
    return vol


def read(fp: BinaryIO, cfg: CodecConfig | None = None) -> np.ndarray:
    """Lit un fichier OTBV depuis la source d'octets `fp` (ouverte/fermée par l'appelant)."""
    head = fp.read(HEADER_SIZE)
    h = read_header(head, cfg)
    return load(head + fp.read(h.data_len), cfg)
