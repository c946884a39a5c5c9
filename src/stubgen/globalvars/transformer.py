from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from ..core.context import RunContext
from ..core.errors import FileSystemError, VariableCollisionError
from ..core.fs import ensure_dir, write_text_if_changed
from ..core.logging import log_event
from ..sources.model import ScriptFile, SourceSet
from ..sources.scanner import scan_for_sources
from ..sources.suffix import GROOVY_TO_JAVA, STUB_MAPPINGS
from .naming import (
    GLOBALVARS_PACKAGE,
    REGISTRY_FILE_STEM,
    render_registry,
    render_wrapper,
    transform_line,
    variable_name,
    wrapper_class_name,
)


@dataclass(frozen=True)
class WrapperModule:
    variable: str
    class_name: str
    source_path: Path
    generated_path: Path


@dataclass(frozen=True)
class RegistryModule:
    path: Path
    entries: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class GlobalVarsResult:
    source_set: SourceSet
    wrappers: tuple[WrapperModule, ...]
    registry: RegistryModule
    rewritten: int


def _read_body(path: Path, encoding: str) -> list[str]:
    body: list[str] = []
    try:
        with path.open("r", encoding=encoding, newline=None) as handle:
            for raw in handle:
                body.append(transform_line(raw[:-1] if raw.endswith("\n") else raw))
    except (OSError, UnicodeError, LookupError) as exc:
        raise FileSystemError(f"failed to read global variable script {path}: {exc}") from exc
    return body


def _plan_wrappers(scripts: list[ScriptFile], package_dir: Path) -> list[WrapperModule]:
    by_class: dict[str, list[ScriptFile]] = defaultdict(list)
    for script in scripts:
        by_class[wrapper_class_name(variable_name(script))].append(script)
    collisions = {name: group for name, group in by_class.items() if len(group) > 1}
    if collisions:
        details = "; ".join(
            f"{name} <- {', '.join(str(script.path) for script in group)}" for name, group in sorted(collisions.items())
        )
        raise VariableCollisionError(f"global variable names collide on wrapper class: {details}")
    suffix = GROOVY_TO_JAVA.source_suffix
    return [
        WrapperModule(
            variable=variable_name(script),
            class_name=wrapper_class_name(variable_name(script)),
            source_path=script.path,
            generated_path=package_dir / f"{wrapper_class_name(variable_name(script))}{suffix}",
        )
        for script in scripts
    ]


def _prune_stale(package_dir: Path, keep: set[Path]) -> list[Path]:
    removed: list[Path] = []
    try:
        for path in sorted(package_dir.glob(f"*{GROOVY_TO_JAVA.source_suffix}")):
            if path.is_file() and path not in keep:
                path.unlink()
                removed.append(path)
    except OSError as exc:
        raise FileSystemError(f"failed to prune stale wrappers in {package_dir}: {exc}") from exc
    return removed


def transform_global_vars(
    ctx: RunContext,
    source_set: SourceSet,
    intermediate_root: Path,
    encoding: str = "utf-8",
) -> GlobalVarsResult:
    """Rewrite a global variable library into wrapper classes plus one registry.

    Every ``<name>.groovy`` becomes ``globalvars/Var<NAME>.groovy`` under
    ``intermediate_root`` and ``Vars.groovy`` lists them all as fields of
    ``GlobalVars``. The returned source set points at ``intermediate_root``.
    Nothing is written when two scripts map to the same wrapper class.
    """
    log_event(
        ctx,
        "info",
        "globalvars",
        "discovered",
        directory=str(source_set.directory),
        message="Discovered Pipeline Library global Vars, will handle in a custom way",
    )
    scripts = scan_for_sources(source_set, STUB_MAPPINGS)
    package_dir = intermediate_root / GLOBALVARS_PACKAGE
    wrappers = _plan_wrappers(scripts, package_dir)
    ensure_dir(package_dir)

    rewritten = 0
    for wrapper in wrappers:
        body = _read_body(wrapper.source_path, encoding)
        if write_text_if_changed(wrapper.generated_path, render_wrapper(wrapper.class_name, body), encoding):
            rewritten += 1
        log_event(ctx, "debug", "globalvars", "wrapper", variable=wrapper.variable, path=str(wrapper.generated_path))
    for stale in _prune_stale(package_dir, {wrapper.generated_path for wrapper in wrappers}):
        log_event(ctx, "debug", "globalvars", "prune", path=str(stale))

    entries = tuple(sorted((wrapper.variable, wrapper.class_name) for wrapper in wrappers))
    registry = RegistryModule(
        path=intermediate_root / f"{REGISTRY_FILE_STEM}{GROOVY_TO_JAVA.source_suffix}",
        entries=entries,
    )
    if write_text_if_changed(registry.path, render_registry(entries), encoding):
        rewritten += 1

    transformed = SourceSet(
        directory=intermediate_root.absolute(),
        includes=source_set.includes,
        line_ending=source_set.line_ending,
        model_encoding=source_set.model_encoding,
        mode="plain",
    )
    log_event(ctx, "info", "globalvars", "transformed", variables=len(wrappers), rewritten=rewritten)
    return GlobalVarsResult(source_set=transformed, wrappers=tuple(wrappers), registry=registry, rewritten=rewritten)
