from __future__ import annotations

from pathlib import Path
from typing import Any

from ..core.errors import ConfigurationError
from ..sources.model import DEFAULT_INCLUDES, SourceSet
from .model import CompilerSettings, StubgenConfig
from .schema import validate_config

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

CONFIG_FILE = "stubgen.toml"
PYPROJECT_FILE = "pyproject.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"malformed TOML in {path}: {exc}") from exc


def find_config_file(project_root: Path, explicit: str | None = None) -> Path | None:
    if explicit:
        path = Path(explicit)
        path = path if path.is_absolute() else project_root / path
        if not path.is_file():
            raise ConfigurationError(f"configuration file not found: {path}")
        return path
    for name in (CONFIG_FILE, PYPROJECT_FILE):
        candidate = project_root / name
        if candidate.is_file():
            return candidate
    return None


def _section(path: Path, data: dict[str, Any]) -> dict[str, Any] | None:
    if path.name == PYPROJECT_FILE:
        section = data.get("tool", {}).get("stubgen")
        return section if isinstance(section, dict) else None
    nested = data.get("tool", {}).get("stubgen") if isinstance(data.get("tool"), dict) else None
    return nested if isinstance(nested, dict) else data


def _source_sets(rows: list[dict[str, Any]] | None) -> tuple[SourceSet, ...] | None:
    if rows is None:
        return None
    return tuple(
        SourceSet(
            directory=Path(row["directory"]),
            includes=tuple(row.get("includes", DEFAULT_INCLUDES)),
            excludes=tuple(row.get("excludes", ())),
            line_ending=row.get("line-ending"),
            model_encoding=row.get("model-encoding"),
            mode=row.get("mode", "auto"),
        )
        for row in rows
    )


def parse_config(raw: dict[str, Any], origin: str = "<config>") -> StubgenConfig:
    validate_config(raw, origin)
    compiler = raw.get("compiler", {})
    return StubgenConfig(
        source_encoding=raw.get("source-encoding"),
        project_encoding=raw.get("project-encoding"),
        classpath=tuple(raw.get("classpath", ())),
        output_directory=raw.get("output-directory"),
        test_output_directory=raw.get("test-output-directory"),
        compiler=CompilerSettings(
            command=tuple(compiler.get("command", ())),
            timeout_seconds=int(compiler.get("timeout-seconds", 0)),
        ),
        sources=_source_sets(raw.get("sources")),
        test_sources=_source_sets(raw.get("test-sources")),
        origin=origin,
    )


def load_config(project_root: Path, explicit: str | None = None) -> StubgenConfig:
    """Load `stubgen.toml`, else `[tool.stubgen]` from `pyproject.toml`, else defaults."""
    path = find_config_file(project_root, explicit)
    if path is None:
        return StubgenConfig()
    section = _section(path, _read_toml(path))
    if section is None:
        return StubgenConfig(origin=str(path))
    return parse_config(section, str(path))
