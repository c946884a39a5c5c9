from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core.context import RunContext
from ..core.errors import CompilerError, ConfigurationError, StubgenError
from ..core.logging import log_event
from ..globalvars.transformer import GlobalVarsResult, transform_global_vars
from ..sources.model import SourceSet
from ..sources.scanner import scan_for_sources
from ..sources.suffix import STUB_MAPPINGS
from .compiler import StubCompilationResult, StubCompiler
from .host import BuildHost


@dataclass(frozen=True)
class DriverOutcome:
    result: StubCompilationResult
    files: tuple[Path, ...]
    source_sets: tuple[SourceSet, ...]
    global_vars: GlobalVarsResult | None = None


def stub_summary(count: int) -> str:
    if count == 0:
        return "No sources found for Java stub generation"
    return f"Generated {count} Java stub" + ("s" if count > 1 else "")


def compile_sources(
    ctx: RunContext,
    compiler: StubCompiler,
    host: BuildHost,
    source_sets: Sequence[SourceSet],
    intermediate_root: Path,
    encoding: str = "utf-8",
) -> DriverOutcome:
    """Feed every source set to ``compiler`` and compile once.

    Global variable libraries are transformed first and replaced by the
    generated wrapper tree. Every file is force-compiled downstream.
    """
    # other tools (javadoc, site) only see stubs through the source roots
    host.add_source_root(host.get_output_directory())

    files: list[Path] = []
    seen: set[Path] = set()
    effective: list[SourceSet] = []
    global_vars: GlobalVarsResult | None = None
    for source_set in source_sets:
        if source_set.mode == "auto":
            raise ConfigurationError(f"source set mode was not resolved: {source_set.directory}")
        host.add_source_root(source_set.directory)
        current = source_set
        if source_set.is_global_vars:
            global_vars = transform_global_vars(ctx, source_set, intermediate_root, encoding)
            current = global_vars.source_set
            host.add_source_root(current.directory)
        effective.append(current)
        for script in scan_for_sources(current, STUB_MAPPINGS):
            # nested source sets list the same file twice
            if script.path in seen:
                continue
            seen.add(script.path)
            log_event(ctx, "debug", "stubs", "add", path=str(script.path))
            compiler.add(script.path)
            host.force_compile(script.path)
            files.append(script.path)

    try:
        count = compiler.compile()
    except StubgenError:
        raise
    except Exception as exc:
        raise CompilerError(f"stub compiler failed: {exc}") from exc

    log_event(ctx, "info", "stubs", "compile", generated=count, files=len(files), message=stub_summary(count))
    return DriverOutcome(
        result=StubCompilationResult(generated_count=count),
        files=tuple(files),
        source_sets=tuple(effective),
        global_vars=global_vars,
    )
