from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_COMPILER, ERR_CONFIG, ERR_FILESYSTEM, ERR_INTERNAL


@dataclass
class StubgenError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigurationError(StubgenError):
    code: int = ERR_CONFIG
    kind: str = "configuration_error"


@dataclass
class VariableCollisionError(ConfigurationError):
    kind: str = "variable_collision"


@dataclass
class FileSystemError(StubgenError):
    code: int = ERR_FILESYSTEM
    kind: str = "filesystem_error"


@dataclass
class CompilerError(StubgenError):
    code: int = ERR_COMPILER
    kind: str = "compiler_error"
