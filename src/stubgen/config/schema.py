from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.errors import ConfigurationError

SCHEMA_PATH = Path(__file__).with_name("stubgen-config.schema.json")


def load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_config(payload: Any, origin: str = "<config>") -> None:
    import jsonschema

    try:
        jsonschema.validate(payload, load_schema())
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ConfigurationError(f"invalid stubgen configuration in {origin} at {loc}: {exc.message}") from exc
