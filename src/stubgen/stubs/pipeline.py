from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..config.model import StubgenConfig, intermediate_root_for
from ..core.context import RunContext
from ..core.fs import ensure_dir
from ..core.logging import log_event
from ..sources.model import normalize_source_sets
from .command_compiler import CommandStubCompiler
from .compiler import DryRunStubCompiler, Keys, StubCompiler
from .driver import compile_sources
from .host import BuildHost
from .timestamps import reset_stub_modified_dates


@dataclass(frozen=True)
class StubGenerationReport:
    scope: str
    output_directory: Path
    generated_count: int
    files: tuple[Path, ...]
    source_roots: tuple[Path, ...]
    variables: tuple[str, ...]
    normalized: int
    dry_run: bool

    def to_json(self) -> dict[str, object]:
        return {
            "scope": self.scope,
            "output_directory": str(self.output_directory),
            "generated_count": self.generated_count,
            "files": [str(path) for path in self.files],
            "source_roots": [str(path) for path in self.source_roots],
            "global_variables": list(self.variables),
            "normalized": self.normalized,
            "dry_run": self.dry_run,
        }


def create_compiler(ctx: RunContext, config: StubgenConfig, dry_run: bool = False) -> StubCompiler:
    if dry_run:
        return DryRunStubCompiler()
    if not config.compiler.command:
        log_event(ctx, "warn", "stubs", "no-compiler", message="no stub compiler command configured; running dry")
        return DryRunStubCompiler()
    return CommandStubCompiler(config.compiler.command, ctx.project_root, config.compiler.timeout_seconds, ctx)


def configure_compiler(
    compiler: StubCompiler,
    output_directory: Path,
    class_path: Sequence[str],
    encoding: str | None,
) -> None:
    compiler.set_target_directory(output_directory)
    compiler.set_class_path(class_path)
    if encoding is not None:
        compiler.config.set(Keys.SOURCE_ENCODING, encoding)


def generate_stubs(ctx: RunContext, config: StubgenConfig, compiler: StubCompiler, host: BuildHost) -> StubGenerationReport:
    """Scan, transform, compile, then reset stub timestamps, in that order."""
    declared = host.get_sources()
    if declared is None:
        declared = host.get_default_sources()
    source_sets = normalize_source_sets(declared, ctx.project_root)

    output_directory = ensure_dir(host.get_output_directory())
    configure_compiler(compiler, output_directory, config.class_path_for(ctx.project_root), config.effective_encoding)
    outcome = compile_sources(
        ctx,
        compiler,
        host,
        source_sets,
        intermediate_root_for(ctx.scope, ctx.project_root),
        config.read_encoding,
    )

    normalized = reset_stub_modified_dates(output_directory)
    log_event(ctx, "debug", "stubs", "reset-timestamps", directory=str(output_directory), files=normalized)

    variables = tuple(wrapper.variable for wrapper in outcome.global_vars.wrappers) if outcome.global_vars else ()
    return StubGenerationReport(
        scope=ctx.scope,
        output_directory=output_directory,
        generated_count=outcome.result.generated_count,
        files=outcome.files,
        source_roots=host.source_roots,
        variables=variables,
        normalized=normalized,
        dry_run=isinstance(compiler, DryRunStubCompiler),
    )
