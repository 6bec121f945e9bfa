from __future__ import annotations
import argparse, json, logging, sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import numpy as np

from .common import setup_logging, ensure_dir, resolve_out_dir, list_volumes, RunMeta, looks_like_otbv
from otbvcodec import as_volume, save
from otbvwf.api import atomic_write, otbv_name, log_append
from otbvwf.paths import PathsConfig

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="OTBV - Encode des volumes .npy (bool) en .otbv")
    p.add_argument("volumes", nargs="+", help="Fichiers .npy ou dossiers")
    p.add_argument("--out", default=None, help="Dossier de sortie (défaut: OTBV_OUTPUTS_DIR ou .)")
    p.add_argument("--tag-resolution", action="store_true", help="Suffixe la résolution au nom de fichier")
    p.add_argument("--manifest", default=None, help="(Optionnel) manifeste JSON du run")
    p.add_argument("--journal", default=None, help="(Optionnel) journal append-only (défaut: OTBV_ARTIFACTS_DIR/journal.log)")
    p.add_argument("--resume", action="store_true", help="Skip si sortie existe et valide")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def _journal_path(args) -> Optional[Path]:
    if args.journal:
        return Path(args.journal)
    return PathsConfig.from_env().artifacts_path("journal.log", create=True)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)

    out_dir = resolve_out_dir(args.out); ensure_dir(out_dir)
    vols = list_volumes(args.volumes)
    if not vols:
        logging.error("Aucun volume trouvé dans %s", args.volumes); return 2
    journal = _journal_path(args)

    manifest = {"run": asdict(RunMeta.collect()), "inputs": [str(p) for p in vols], "outputs": []}
    ok = 0
    for i, path in enumerate(vols, 1):
        try:
            vol = as_volume(np.load(path, allow_pickle=False))
            name = otbv_name(path.stem, vol.shape) if args.tag_resolution else f"{path.stem}.otbv"
            out_path = out_dir / name
            if args.resume and out_path.exists() and looks_like_otbv(out_path):
                logging.info("[%d/%d] skip: %s", i, len(vols), out_path)
                manifest["outputs"].append(str(out_path)); ok += 1; continue

            logging.info("[%d/%d] encode: %s %s", i, len(vols), path, vol.shape)
            blob = save(vol)
            if not blob:
                logging.warning("[%d/%d] volume vide, rien écrit: %s", i, len(vols), path)
                continue
            atomic_write(out_path, blob)
            ratio = vol.size / 8.0 / max(1, len(blob))
            logging.info("→ OK %d bytes (x%.1f vs bits bruts) → %s", len(blob), ratio, out_path)
            if journal:
                log_append(journal, f"encode {path} -> {out_path} ({len(blob)} bytes)")
            manifest["outputs"].append(str(out_path))
            ok += 1
        except Exception as e:
            logging.exception("Échec encodage %s: %s", path, e)

    if args.manifest:
        Path(args.manifest).parent.mkdir(parents=True, exist_ok=True)
        Path(args.manifest).write_text(json.dumps(manifest, ensure_ascii=False, indent=2), encoding="utf-8")

    logging.info("Terminé: %d/%d encodés", ok, len(vols))
    return 0 if ok == len(vols) else 1

if __name__ == "__main__":
    sys.exit(main())
