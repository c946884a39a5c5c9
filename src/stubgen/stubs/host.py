from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..config.model import StubgenConfig, default_source_set
from ..core.context import RunContext
from ..core.fs import write_json
from ..sources.model import SourceSet

STATE_SCHEMA_VERSION = 1


class BuildHost(Protocol):
    @property
    def source_roots(self) -> tuple[Path, ...]: ...

    def add_source_root(self, path: Path) -> None: ...

    def get_output_directory(self) -> Path: ...

    def get_sources(self) -> tuple[SourceSet, ...] | None: ...

    def get_default_sources(self) -> tuple[SourceSet, ...]: ...

    def force_compile(self, path: Path) -> None: ...


class ProjectBuildHost:
    """Build host for a plain project directory.

    Source roots and forced files are kept in registration order and written to
    ``target/stubgen/<scope>-build-state.json`` for the Java compile step.
    """

    def __init__(self, ctx: RunContext, config: StubgenConfig) -> None:
        self.ctx = ctx
        self.config = config
        self._source_roots: list[Path] = []
        self._forced: list[Path] = []

    @property
    def source_roots(self) -> tuple[Path, ...]:
        return tuple(self._source_roots)

    @property
    def forced(self) -> tuple[Path, ...]:
        return tuple(self._forced)

    @property
    def state_path(self) -> Path:
        return self.ctx.build_root / "stubgen" / f"{self.ctx.scope}-build-state.json"

    def add_source_root(self, path: Path) -> None:
        resolved = path.absolute()
        if resolved not in self._source_roots:
            self._source_roots.append(resolved)

    def get_output_directory(self) -> Path:
        return self.config.output_directory_for(self.ctx.scope, self.ctx.project_root)

    def get_sources(self) -> tuple[SourceSet, ...] | None:
        return self.config.sources_for(self.ctx.scope)

    def get_default_sources(self) -> tuple[SourceSet, ...]:
        default = default_source_set(self.ctx.scope, self.ctx.project_root)
        return (default,) if default.directory.is_dir() else ()

    def force_compile(self, path: Path) -> None:
        resolved = path.absolute()
        if resolved not in self._forced:
            self._forced.append(resolved)

    def write_state(self) -> Path:
        return write_json(
            self.state_path,
            {
                "schema_version": STATE_SCHEMA_VERSION,
                "scope": self.ctx.scope,
                "output_directory": str(self.get_output_directory()),
                "source_roots": [str(path) for path in self._source_roots],
                "force_compile": [str(path) for path in self._forced],
            },
        )
