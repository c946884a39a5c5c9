from __future__ import annotations

import argparse
from pathlib import Path

from ..cli.output import build_base_payload, emit
from ..config.loader import load_config
from ..core.context import RunContext
from ..core.exit_codes import OK
from ..stubs.timestamps import reset_stub_modified_dates


def configure_normalize_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("normalize", help="reset modification times of generated stubs to the epoch")
    p.add_argument("directory", nargs="?", help="stub directory (defaults to the scope output directory)")
    p.add_argument("--json", action="store_true", help="emit JSON output")


def run_normalize_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.directory:
        target = Path(ns.directory)
        target = target if target.is_absolute() else ctx.project_root / target
    else:
        target = load_config(ctx.project_root, ns.config).output_directory_for(ctx.scope, ctx.project_root)
    touched = reset_stub_modified_dates(target)
    if ctx.output_format == "json" or ns.json:
        payload = build_base_payload(ctx)
        payload.update({"directory": str(target), "normalized": touched})
        emit(payload, as_json=True)
    elif not ctx.quiet:
        print(f"reset {touched} stub timestamp(s) under {target}")
    return OK
