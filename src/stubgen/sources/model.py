from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Literal

from ..core.errors import ConfigurationError

SourceSetMode = Literal["auto", "plain", "global-vars"]

SOURCE_SET_MODES: tuple[SourceSetMode, ...] = ("auto", "plain", "global-vars")
GLOBAL_VARS_SEGMENT = "vars"
DEFAULT_INCLUDES: tuple[str, ...] = ("**/*.groovy",)


@dataclass(frozen=True)
class SourceSet:
    directory: Path
    includes: tuple[str, ...] = DEFAULT_INCLUDES
    excludes: tuple[str, ...] = ()
    line_ending: str | None = None
    model_encoding: str | None = None
    mode: SourceSetMode = "auto"

    @property
    def is_global_vars(self) -> bool:
        return self.mode == "global-vars"

    def to_json(self) -> dict[str, object]:
        return {
            "directory": str(self.directory),
            "includes": list(self.includes),
            "excludes": list(self.excludes),
            "line_ending": self.line_ending,
            "model_encoding": self.model_encoding,
            "mode": self.mode,
        }


@dataclass(frozen=True)
class ScriptFile:
    path: Path
    base_name: str

    @classmethod
    def from_path(cls, path: Path) -> "ScriptFile":
        resolved = path.absolute()
        return cls(path=resolved, base_name=resolved.name)


def infer_mode(directory: Path) -> SourceSetMode:
    return "global-vars" if directory.name == GLOBAL_VARS_SEGMENT else "plain"


def _validate_patterns(directory: Path, label: str, patterns: tuple[str, ...]) -> None:
    for pattern in patterns:
        if not isinstance(pattern, str) or not pattern.strip():
            raise ConfigurationError(f"empty {label} pattern in source set {directory}")


def normalize_source_sets(source_sets: Iterable[SourceSet], project_root: Path) -> tuple[SourceSet, ...]:
    """Resolve directories against ``project_root`` and settle every set's mode.

    ``auto`` becomes ``global-vars`` for directories whose last segment is
    ``vars`` and ``plain`` otherwise; explicit modes are kept as declared.
    """
    out: list[SourceSet] = []
    seen: set[Path] = set()
    global_vars: SourceSet | None = None
    for source_set in source_sets:
        if not str(source_set.directory).strip():
            raise ConfigurationError("source set without a directory")
        if source_set.mode not in SOURCE_SET_MODES:
            raise ConfigurationError(f"unknown source set mode `{source_set.mode}` for {source_set.directory}")
        directory = source_set.directory
        if not directory.is_absolute():
            directory = project_root / directory
        directory = Path(directory).absolute()
        _validate_patterns(directory, "include", source_set.includes)
        _validate_patterns(directory, "exclude", source_set.excludes)
        if directory in seen:
            raise ConfigurationError(f"source directory configured more than once: {directory}")
        seen.add(directory)
        mode = infer_mode(directory) if source_set.mode == "auto" else source_set.mode
        normalized = replace(source_set, directory=directory, mode=mode)
        if normalized.is_global_vars:
            if global_vars is not None:
                raise ConfigurationError(
                    f"only one global variable library per scope is supported: {global_vars.directory} and {directory}"
                )
            global_vars = normalized
        out.append(normalized)
    return tuple(out)
