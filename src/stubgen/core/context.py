from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .env import getenv, getenv_flag
from .errors import ConfigurationError
from .run_id import make_run_id

OutputFormat = Literal["text", "json"]
Scope = Literal["main", "test"]

SCOPES: tuple[Scope, ...] = ("main", "test")


@dataclass(frozen=True)
class RunContext:
    run_id: str
    project_root: Path
    scope: Scope
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool

    @property
    def build_root(self) -> Path:
        return self.project_root / "target"

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        project_root: str | None = None,
        scope: str = "main",
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        root = Path(project_root or getenv("STUBGEN_PROJECT_ROOT") or ".").resolve()
        if not root.is_dir():
            raise ConfigurationError(f"project root is not a directory: {root}")
        if scope not in SCOPES:
            raise ConfigurationError(f"unknown scope `{scope}` (expected one of {', '.join(SCOPES)})")
        resolved_run_id = run_id or getenv("STUBGEN_RUN_ID") or make_run_id(root)
        return cls(
            run_id=resolved_run_id,
            project_root=root,
            scope=scope,  # type: ignore[arg-type]
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json or getenv_flag("STUBGEN_LOG_JSON"),
        )
