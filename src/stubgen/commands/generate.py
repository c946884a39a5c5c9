from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..config.loader import load_config
from ..core.context import RunContext
from ..core.exit_codes import OK
from ..stubs.compiler import DryRunStubCompiler
from ..stubs.driver import stub_summary
from ..stubs.host import ProjectBuildHost
from ..stubs.pipeline import create_compiler, generate_stubs


def configure_generate_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("generate", help="generate Java stubs for the configured Groovy sources")
    p.add_argument("--source-encoding", help="encoding used to read sources (defaults to the project encoding)")
    p.add_argument("--output-dir", help="override the stub output directory for the selected scope")
    p.add_argument("--dry-run", action="store_true", help="scan and transform sources without running the stub compiler")
    p.add_argument("--json", action="store_true", help="emit JSON output")


def run_generate_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_config(ctx.project_root, ns.config).with_overrides(
        source_encoding=ns.source_encoding,
        output_directory=ns.output_dir,
        scope=ctx.scope,
    )
    host = ProjectBuildHost(ctx, config)
    compiler = create_compiler(ctx, config, dry_run=ns.dry_run)
    report = generate_stubs(ctx, config, compiler, host)
    state_path = host.write_state()

    if ctx.output_format == "json" or ns.json:
        payload = build_base_payload(ctx)
        payload.update(report.to_json())
        payload["state_file"] = str(state_path)
        if isinstance(compiler, DryRunStubCompiler) and compiler.last_request is not None:
            payload["request"] = compiler.last_request.to_json()
        emit(payload, as_json=True)
        return OK
    if not ctx.quiet:
        print(stub_summary(report.generated_count))
        for path in report.files:
            print(f" + {path}")
        if report.dry_run:
            print(f"dry run: {len(report.files)} source(s) prepared, stub compiler not invoked")
    return OK
