"""Seam to the external stub compiler.

The compiler turns Groovy sources into bare Java declarations. stubgen never
interprets that output; it only decides which files go in, where stubs land and
which encoding the compiler should use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..core.errors import CompilerError, ConfigurationError


class Keys:
    SOURCE_ENCODING = "sourceEncoding"


KNOWN_KEYS = frozenset({Keys.SOURCE_ENCODING})


class CompilerConfig:
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        if key not in KNOWN_KEYS:
            raise ConfigurationError(f"unknown stub compiler option: {key}")
        self._values[key] = value

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(key, default)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)


@dataclass(frozen=True)
class StubCompilationRequest:
    target_directory: Path
    class_path: tuple[str, ...]
    config: dict[str, str] = field(default_factory=dict)
    files: tuple[Path, ...] = ()

    def to_json(self) -> dict[str, object]:
        return {
            "target_directory": str(self.target_directory),
            "class_path": list(self.class_path),
            "config": dict(sorted(self.config.items())),
            "files": [str(path) for path in self.files],
        }


@dataclass(frozen=True)
class StubCompilationResult:
    generated_count: int


class StubCompiler:
    """Accumulates a :class:`StubCompilationRequest` and compiles it once."""

    def __init__(self) -> None:
        self.config = CompilerConfig()
        self._target_directory: Path | None = None
        self._class_path: tuple[str, ...] = ()
        self._files: list[Path] = []
        self._compiled = False

    @property
    def files(self) -> tuple[Path, ...]:
        return tuple(self._files)

    def set_target_directory(self, path: Path) -> None:
        self._target_directory = path

    def set_class_path(self, entries: Iterable[str | Path]) -> None:
        self._class_path = tuple(str(entry) for entry in entries)

    def add(self, file: Path) -> None:
        if self._compiled:
            raise CompilerError(f"cannot add {file}: stub compiler already ran")
        self._files.append(file)

    def request(self) -> StubCompilationRequest:
        if self._target_directory is None:
            raise CompilerError("stub compiler target directory is not set")
        return StubCompilationRequest(
            target_directory=self._target_directory,
            class_path=self._class_path,
            config=self.config.as_dict(),
            files=tuple(self._files),
        )

    def compile(self) -> int:
        if self._compiled:
            raise CompilerError("stub compiler already ran for this invocation")
        request = self.request()
        self._compiled = True
        return self._generate(request)

    def _generate(self, request: StubCompilationRequest) -> int:
        raise NotImplementedError


class DryRunStubCompiler(StubCompiler):
    """Records the request without generating anything."""

    def __init__(self) -> None:
        super().__init__()
        self.last_request: StubCompilationRequest | None = None

    def _generate(self, request: StubCompilationRequest) -> int:
        self.last_request = request
        return 0
