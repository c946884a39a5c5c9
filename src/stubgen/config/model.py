from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from ..core.context import Scope
from ..sources.model import SourceSet

DEFAULT_SOURCE_DIRS: dict[str, str] = {
    "main": "src/main/groovy",
    "test": "src/test/groovy",
}
DEFAULT_OUTPUT_DIRS: dict[str, str] = {
    "main": "target/generated-sources/groovy-stubs/main",
    "test": "target/generated-sources/groovy-stubs/test",
}
INTERMEDIATE_DIRS: dict[str, str] = {
    "main": "target/generated-sources/globalVarsTmp",
    "test": "target/generated-test-sources/globalVarsTmp",
}
DEFAULT_READ_ENCODING = "utf-8"


@dataclass(frozen=True)
class CompilerSettings:
    command: tuple[str, ...] = ()
    timeout_seconds: int = 0


@dataclass(frozen=True)
class StubgenConfig:
    source_encoding: str | None = None
    project_encoding: str | None = None
    classpath: tuple[str, ...] = ()
    output_directory: str | None = None
    test_output_directory: str | None = None
    compiler: CompilerSettings = field(default_factory=CompilerSettings)
    sources: tuple[SourceSet, ...] | None = None
    test_sources: tuple[SourceSet, ...] | None = None
    origin: str = "<defaults>"

    @property
    def effective_encoding(self) -> str | None:
        return self.source_encoding or self.project_encoding

    @property
    def read_encoding(self) -> str:
        return self.effective_encoding or DEFAULT_READ_ENCODING

    def with_overrides(self, source_encoding: str | None = None, output_directory: str | None = None, scope: Scope = "main") -> "StubgenConfig":
        updated = self
        if source_encoding:
            updated = replace(updated, source_encoding=source_encoding)
        if output_directory:
            key = "output_directory" if scope == "main" else "test_output_directory"
            updated = replace(updated, **{key: output_directory})
        return updated

    def sources_for(self, scope: Scope) -> tuple[SourceSet, ...] | None:
        return self.sources if scope == "main" else self.test_sources

    def output_directory_for(self, scope: Scope, project_root: Path) -> Path:
        raw = self.output_directory if scope == "main" else self.test_output_directory
        path = Path(raw or DEFAULT_OUTPUT_DIRS[scope])
        return path if path.is_absolute() else project_root / path

    def class_path_for(self, project_root: Path) -> tuple[str, ...]:
        out: list[str] = []
        for entry in self.classpath:
            path = Path(entry)
            out.append(str(path if path.is_absolute() else project_root / path))
        return tuple(out)

    def to_json(self) -> dict[str, object]:
        return {
            "origin": self.origin,
            "source_encoding": self.source_encoding,
            "project_encoding": self.project_encoding,
            "classpath": list(self.classpath),
            "output_directory": self.output_directory,
            "test_output_directory": self.test_output_directory,
            "compiler": {
                "command": list(self.compiler.command),
                "timeout_seconds": self.compiler.timeout_seconds,
            },
            "sources": None if self.sources is None else [item.to_json() for item in self.sources],
            "test_sources": None if self.test_sources is None else [item.to_json() for item in self.test_sources],
        }


def intermediate_root_for(scope: Scope, project_root: Path) -> Path:
    return project_root / INTERMEDIATE_DIRS[scope]


def default_source_set(scope: Scope, project_root: Path) -> SourceSet:
    return SourceSet(directory=project_root / DEFAULT_SOURCE_DIRS[scope])
