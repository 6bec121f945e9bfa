from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from .common import setup_logging
from otbvcodec import CodecConfig
from otbvcodec.bitstream import HEADER_SIZE, read_header

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OTBV - Affiche le header de fichiers .otbv")
    p.add_argument("files", nargs="+", help="Fichiers .otbv")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    cfg = CodecConfig.from_env()
    ok = 0
    for p in map(Path, args.files):
        try:
            with open(p, "rb") as f:
                h = read_header(f.read(HEADER_SIZE), cfg)
            total = HEADER_SIZE + h.data_len
            cells = h.x_res * h.y_res * h.z_res
            logging.info(
                "%s: resolution=%dx%dx%d padded=%s pad_len=%d data=%d bytes (x%.1f vs bits bruts)",
                p, h.x_res, h.y_res, h.z_res, h.padded, h.pad_len, h.data_len, cells / 8.0 / total,
            )
            ok += 1
        except Exception as e:
            logging.exception("Header illisible %s: %s", p, e)
    return 0 if ok == len(args.files) else 1

if __name__ == "__main__":
    sys.exit(main())
