"""JSON-configured Ewald energy runs for periodic charges and dipoles."""

from __future__ import annotations

import argparse
import hashlib
import json
import logging
import re
import socket
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from ewaldpy.core import ewald_parameters, energy_terms, get_neighbors, wrap_positions
from ewaldpy.core.types import DEFAULT_C0, DEFAULT_C1, System
from ewaldpy.modeling import HARTREE_EV, ewald_energy_to_ev
from ewaldpy.models import reference_crystal


logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _sanitize_token(value: str) -> str:
    token = re.sub(r"[^A-Za-z0-9._-]+", "_", value.strip())
    return token if token else "unnamed"


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as fh:
        while True:
            chunk = fh.read(1024 * 1024)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def _resolve_path(base_dir: Path, path_like: str | Path) -> Path:
    p = Path(path_like)
    return p if p.is_absolute() else (base_dir / p)


def _to_builtin(value: Any) -> Any:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (np.floating, np.integer)):
        return value.item()
    if isinstance(value, dict):
        return {str(k): _to_builtin(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_builtin(v) for v in value]
    return value


def _load_json_config(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8-sig") as fh:
        cfg = json.load(fh)
    if not isinstance(cfg, dict):
        raise ValueError("Input config must be a JSON object.")
    return cfg


def _save_json(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(_to_builtin(payload), fh, indent=2, sort_keys=True)
        fh.write("\n")


def _build_system(cfg: dict[str, Any]) -> tuple[System, np.ndarray | None, np.ndarray | None, dict[str, Any]]:
    sys_cfg = dict(cfg.get("system", {}))
    c0 = float(sys_cfg.get("c0", DEFAULT_C0))
    c1 = float(sys_cfg.get("c1", DEFAULT_C1))

    crystal_cfg = cfg.get("crystal", None)
    if crystal_cfg is not None:
        crystal_cfg = dict(crystal_cfg)
        if "name" not in crystal_cfg:
            raise ValueError("crystal.name is required when a crystal block is given.")
        lattice_constant = crystal_cfg.get("lattice_constant", None)
        crystal = reference_crystal(
            str(crystal_cfg["name"]),
            lattice_constant=None if lattice_constant is None else float(lattice_constant),
        )
        info = {
            "name": crystal.name,
            "nearest_neighbor_distance": crystal.nearest_neighbor_distance,
            "formula_units": crystal.formula_units,
            "reference_madelung": crystal.reference_madelung,
        }
        return crystal.system(c0=c0, c1=c1), crystal.charges, None, info

    if "latvecs" not in sys_cfg or "positions" not in sys_cfg:
        raise ValueError("system.latvecs and system.positions are required without a crystal block.")
    system = System(latvecs=sys_cfg["latvecs"], positions=sys_cfg["positions"], c0=c0, c1=c1)
    src_cfg = dict(cfg.get("sources", {}))
    charges = src_cfg.get("charges", None)
    dipoles = src_cfg.get("dipoles", None)
    return (
        system,
        None if charges is None else np.asarray(charges, dtype=float),
        None if dipoles is None else np.asarray(dipoles, dtype=float),
        {},
    )


def _converted_energies(total: float, length_unit: str) -> dict[str, float]:
    if length_unit == "none":
        return {}
    ev = float(ewald_energy_to_ev(total, length_unit))
    return {"ev": ev, "hartree": ev / HARTREE_EV}


def _default_template() -> dict[str, Any]:
    return {
        "run": {
            "name": "cscl_madelung",
            "output_dir": "outputs/ewald_runs",
            "write_report": True,
        },
        "system": {
            "latvecs": [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]],
            "positions": [[0.0, 0.0, 0.0], [0.5, 0.5, 0.5]],
            "c0": DEFAULT_C0,
            "c1": DEFAULT_C1,
        },
        "sources": {
            "charges": [1.0, -1.0],
            "dipoles": None,
        },
        "units": {
            "length": "none",
        },
    }


def write_input_template(path: str | Path) -> Path:
    out = Path(path)
    _save_json(out, _default_template())
    return out


def run_ewald(config_path: str | Path) -> dict[str, Any]:
    cfg_path = Path(config_path)
    cfg_dir = cfg_path.parent if cfg_path.parent != Path("") else Path(".")
    cfg = _load_json_config(cfg_path)
    run_cfg = dict(cfg.get("run", {}))
    run_name = str(run_cfg.get("name", f"ewald_{cfg_path.stem}"))
    run_name_safe = _sanitize_token(run_name)
    output_dir = _resolve_path(cfg_dir, run_cfg.get("output_dir", "outputs/ewald_runs"))
    write_report = bool(run_cfg.get("write_report", True))
    length_unit = str(dict(cfg.get("units", {})).get("length", "none")).lower()
    if length_unit not in {"none", "angstrom", "bohr"}:
        raise ValueError("units.length must be one of: none, angstrom, bohr.")

    t0 = time.perf_counter()
    started = _utc_now_iso()
    cfg_path_abs = cfg_path.resolve()
    cfg_sha256 = _sha256_file(cfg_path_abs)

    system, charges, dipoles, crystal_info = _build_system(cfg)
    wrapped = wrap_positions(system, warn=False)
    for rec in wrapped:
        logger.warning(
            "Ion %d at %s was outside the unit cell (fractional %s); wrapped.",
            rec.index,
            rec.position,
            rec.fractional,
        )
    params = ewald_parameters(system)
    neighbors = get_neighbors(system)
    terms = energy_terms(system, charges=charges, dipoles=dipoles, neighbors=neighbors)
    total = terms.total

    runtime = time.perf_counter() - t0
    report: dict[str, Any] = {
        "run": {
            "name": run_name,
            "input_config": str(cfg_path_abs),
            "started_utc": started,
            "finished_utc": _utc_now_iso(),
            "runtime_seconds": float(runtime),
        },
        "system": {
            "n_sites": system.n_sites,
            "latvecs": system.latvecs,
            "positions_wrapped": system.positions,
            "c0": system.c0,
            "c1": system.c1,
            "wrapped_sites": [
                {"index": rec.index, "position": rec.position, "fractional": rec.fractional} for rec in wrapped
            ],
        },
        "parameters": {
            "sigma": params.sigma,
            "real_space_cutoff": params.real_space_cutoff,
            "fourier_space_cutoff": params.fourier_space_cutoff,
            "cell_bounds": params.cell_bounds,
            "mode_bounds": params.mode_bounds,
            "n_neighbor_entries": int(sum(len(g) for g in neighbors)),
        },
        "energy": {
            "real_space": terms.real_space,
            "fourier_space": terms.fourier_space,
            "self_energy": terms.self_energy,
            "total": total,
            "length_unit": length_unit,
            "converted": _converted_energies(total, length_unit),
        },
        "provenance": {
            "config_sha256": cfg_sha256,
            "hostname": socket.gethostname(),
        },
        "outputs": {},
    }
    if crystal_info:
        madelung = total * crystal_info["nearest_neighbor_distance"] / crystal_info["formula_units"]
        report["crystal"] = dict(crystal_info, madelung=madelung)

    if write_report:
        report_path = output_dir / run_cfg.get("report_filename", f"{run_name_safe}_report.json")
        _save_json(report_path, report)
        report["outputs"]["report"] = str(report_path)
    return report


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", type=Path, default=None, help="Path to JSON run configuration.")
    parser.add_argument("--write-template", type=Path, default=None, help="Write template config and exit.")
    parser.add_argument("--verbose", action="store_true", help="Log derived parameters and sums.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if args.write_template is not None:
        out = write_input_template(args.write_template)
        print(f"Wrote template: {out}")
        return
    if args.input is None:
        raise ValueError("Provide --input <config.json> or --write-template <path>.")

    report = run_ewald(args.input)
    print(f"Run complete: {report['run']['name']}")
    print(f"energy={report['energy']['total']:.16g}")
    print(f"runtime_seconds={report['run']['runtime_seconds']:.3f}")
    print(f"outputs={report['outputs']}")
