from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

import numpy as np

from .common import setup_logging, ensure_dir, resolve_out_dir
from otbvcodec import CodecConfig
from otbvcodec.bitstream import load_file

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OTBV - Decode .otbv -> .npy (bool)")
    p.add_argument("files", nargs="+", help="Fichiers .otbv")
    p.add_argument("--out", default=None, help="Dossier de sortie (défaut: OTBV_OUTPUTS_DIR ou .)")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    out_dir = resolve_out_dir(args.out); ensure_dir(out_dir)
    cfg = CodecConfig.from_env()
    ok = 0
    for i, p in enumerate(args.files, 1):
        p = Path(p)
        try:
            logging.info("[%d/%d] decode: %s", i, len(args.files), p)
            vol = load_file(p, cfg)
            out_path = out_dir / f"{p.stem}_recon.npy"
            np.save(out_path, vol)
            logging.info("→ OK %s %s", vol.shape, out_path)
            ok += 1
        except Exception as e:
            logging.exception("Échec decode %s: %s", p, e)
    return 0 if ok == len(args.files) else 1

if __name__ == "__main__":
    sys.exit(main())
