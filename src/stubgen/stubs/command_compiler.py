from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from ..core.context import RunContext
from ..core.errors import CompilerError
from ..core.process import TIMEOUT_EXIT_CODE, run_command
from ..sources.suffix import STUB_MAPPINGS
from .compiler import Keys, StubCompilationRequest, StubCompiler
from .timestamps import snapshot_mtimes

PLACEHOLDERS = ("{target}", "{classpath}", "{encoding}")


class CommandStubCompiler(StubCompiler):
    """Runs an external stub generator command.

    ``{target}``, ``{classpath}`` and ``{encoding}`` are substituted in the
    command; a token whose placeholder has no value is dropped together with
    the option flag in front of it. Source files are appended last; the
    command is not run when no file was added.
    """

    def __init__(
        self,
        command: Sequence[str],
        cwd: Path,
        timeout_seconds: int = 0,
        ctx: RunContext | None = None,
    ) -> None:
        super().__init__()
        if not command:
            raise CompilerError("stub compiler command is empty")
        self.command = tuple(command)
        self.cwd = cwd
        self.timeout_seconds = timeout_seconds
        self.ctx = ctx

    def render_command(self, request: StubCompilationRequest) -> list[str]:
        values = {
            "{target}": str(request.target_directory),
            "{classpath}": os.pathsep.join(request.class_path),
            "{encoding}": request.config.get(Keys.SOURCE_ENCODING, ""),
        }
        out: list[str] = []
        for token in self.command:
            used = [name for name in PLACEHOLDERS if name in token]
            if any(not values[name] for name in used):
                if token in PLACEHOLDERS and out and out[-1].startswith("-"):
                    out.pop()
                continue
            for name in used:
                token = token.replace(name, values[name])
            out.append(token)
        out.extend(str(path) for path in request.files)
        return out

    def _generate(self, request: StubCompilationRequest) -> int:
        if not request.files:
            return 0
        suffixes = tuple(mapping.target_suffix for mapping in STUB_MAPPINGS)
        before = snapshot_mtimes(request.target_directory, suffixes)
        cmd = self.render_command(request)
        try:
            result = run_command(cmd, self.cwd, timeout_seconds=self.timeout_seconds, ctx=self.ctx)
        except OSError as exc:
            raise CompilerError(f"failed to start stub compiler `{cmd[0]}`: {exc}") from exc
        if result.code == TIMEOUT_EXIT_CODE and "timed out" in result.stderr:
            raise CompilerError(f"stub compiler timed out after {self.timeout_seconds}s")
        if result.code != 0:
            detail = result.combined_output or "no output"
            raise CompilerError(f"stub compiler exited with code {result.code}: {detail}")
        after = snapshot_mtimes(request.target_directory, suffixes)
        return sum(1 for path, mtime in after.items() if before.get(path) != mtime)
