from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..config.loader import load_config
from ..core.context import RunContext
from ..core.exit_codes import OK


def configure_config_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("config", help="configuration commands")
    config_sub = p.add_subparsers(dest="config_cmd", required=True)
    dump = config_sub.add_parser("dump", help="print the effective configuration")
    dump.add_argument("--json", action="store_true", help="emit JSON output")
    validate = config_sub.add_parser("validate", help="validate configuration against the schema")
    validate.add_argument("--json", action="store_true", help="emit JSON output")


def run_config_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_config(ctx.project_root, ns.config)
    as_json = ctx.output_format == "json" or ns.json
    if ns.config_cmd == "dump":
        payload = build_base_payload(ctx)
        payload["config"] = config.to_json()
        emit(payload, as_json=as_json)
        return OK
    if as_json:
        payload = build_base_payload(ctx)
        payload["origin"] = config.origin
        emit(payload, as_json=True)
    elif not ctx.quiet:
        print(f"configuration ok: {config.origin}")
    return OK
