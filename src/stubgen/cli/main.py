from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..commands.config import configure_config_parser, run_config_command
from ..commands.generate import configure_generate_parser, run_generate_command
from ..commands.normalize import configure_normalize_parser, run_normalize_command
from ..commands.scan import configure_scan_parser, run_scan_command
from ..core.context import SCOPES, RunContext
from ..core.errors import StubgenError
from ..core.exit_codes import ERR_INTERNAL, OK
from ..core.logging import log_event
from .output import emit, render_error

COMMANDS = {
    "config": run_config_command,
    "generate": run_generate_command,
    "normalize": run_normalize_command,
    "scan": run_scan_command,
}


def _version_string() -> str:
    return f"stubgen {__version__}"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="stubgen", description="Java stub generation for Groovy sources")
    p.add_argument("--version", action="version", version=_version_string())
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--project-root", help="project directory (defaults to STUBGEN_PROJECT_ROOT or cwd)")
    p.add_argument("--scope", choices=list(SCOPES), default="main", help="main or test sources")
    p.add_argument("--config", help="configuration file (defaults to stubgen.toml or pyproject.toml)")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print the stubgen version")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    configure_generate_parser(sub)
    configure_scan_parser(sub)
    configure_normalize_parser(sub)
    configure_config_parser(sub)
    return p


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    ns = build_parser().parse_args(argv)
    as_json = bool(ns.json or "--json" in raw_argv)
    if ns.cmd == "version":
        if as_json:
            emit({"schema_version": 1, "tool": "stubgen", "status": "ok", "version": __version__}, as_json=True)
        else:
            print(_version_string())
        return OK

    run_id = ""
    try:
        ctx = RunContext.from_args(
            ns.run_id,
            ns.project_root,
            ns.scope,
            "json" if as_json else "text",
            ns.verbose,
            ns.quiet,
            ns.log_json,
        )
        run_id = ctx.run_id
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, scope=ctx.scope, project_root=str(ctx.project_root))
        rc = COMMANDS[ns.cmd](ctx, ns)
        log_event(ctx, "debug", "cli", "finish", cmd=ns.cmd, rc=rc)
        return rc
    except StubgenError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind, run_id=run_id), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(
            render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL, run_id=run_id),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
