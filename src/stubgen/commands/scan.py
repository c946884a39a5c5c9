from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..config.loader import load_config
from ..core.context import RunContext
from ..core.exit_codes import OK
from ..globalvars.naming import variable_name, wrapper_class_name
from ..sources.model import ScriptFile, SourceSet, normalize_source_sets
from ..sources.scanner import scan_for_sources
from ..stubs.host import ProjectBuildHost


def configure_scan_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("scan", help="list the Groovy sources each source set contributes")
    p.add_argument("--json", action="store_true", help="emit JSON output")


def _row(source_set: SourceSet, scripts: list[ScriptFile]) -> dict[str, object]:
    row: dict[str, object] = {**source_set.to_json(), "files": [str(script.path) for script in scripts]}
    if source_set.is_global_vars:
        row["variables"] = {variable_name(script): wrapper_class_name(variable_name(script)) for script in scripts}
    return row


def run_scan_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_config(ctx.project_root, ns.config)
    host = ProjectBuildHost(ctx, config)
    declared = host.get_sources()
    source_sets = normalize_source_sets(declared if declared is not None else host.get_default_sources(), ctx.project_root)
    listing = [(source_set, scan_for_sources(source_set)) for source_set in source_sets]

    if ctx.output_format == "json" or ns.json:
        payload = build_base_payload(ctx)
        payload["source_sets"] = [_row(source_set, scripts) for source_set, scripts in listing]
        emit(payload, as_json=True)
        return OK
    if not listing:
        print("no source sets")
    for source_set, scripts in listing:
        print(f"{source_set.directory} ({source_set.mode})")
        for script in scripts:
            print(f"  {script.path}")
    return OK
