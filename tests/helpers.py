from __future__ import annotations

from pathlib import Path

from stubgen.sources.model import SourceSet
from stubgen.sources.suffix import GROOVY_TO_JAVA
from stubgen.stubs.compiler import StubCompilationRequest, StubCompiler


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class RecordingStubCompiler(StubCompiler):
    """Writes one `.java` file per source into the target directory."""

    def __init__(self) -> None:
        super().__init__()
        self.requests: list[StubCompilationRequest] = []

    def _generate(self, request: StubCompilationRequest) -> int:
        self.requests.append(request)
        request.target_directory.mkdir(parents=True, exist_ok=True)
        for source in request.files:
            stub = request.target_directory / GROOVY_TO_JAVA.target_name(source.name)
            stub.write_text(f"// stub for {source.name}\n", encoding="utf-8")
        return len(request.files)


class FailingStubCompiler(StubCompiler):
    def __init__(self, exc: Exception) -> None:
        super().__init__()
        self.exc = exc

    def _generate(self, request: StubCompilationRequest) -> int:
        raise self.exc


class RecordingHost:
    def __init__(self, output_directory: Path, sources: tuple[SourceSet, ...] | None = None) -> None:
        self.output_directory = output_directory
        self.sources = sources
        self.calls: list[tuple[str, Path]] = []

    @property
    def source_roots(self) -> tuple[Path, ...]:
        return tuple(path for name, path in self.calls if name == "add_source_root")

    def add_source_root(self, path: Path) -> None:
        self.calls.append(("add_source_root", path))

    def get_output_directory(self) -> Path:
        return self.output_directory

    def get_sources(self) -> tuple[SourceSet, ...] | None:
        return self.sources

    def get_default_sources(self) -> tuple[SourceSet, ...]:
        return ()

    def force_compile(self, path: Path) -> None:
        self.calls.append(("force_compile", path))

    @property
    def forced(self) -> list[Path]:
        return [path for name, path in self.calls if name == "force_compile"]
