from __future__ import annotations

from typing import Iterable

from ..sources.model import ScriptFile
from ..sources.suffix import GROOVY_TO_JAVA, SuffixMapping

GLOBALVARS_PACKAGE = "globalvars"
REGISTRY_CLASS = "GlobalVars"
REGISTRY_FILE_STEM = "Vars"
WRAPPER_PREFIX = "Var"
COMMENT_MARKER = "#"


def variable_name(script: ScriptFile, mapping: SuffixMapping = GROOVY_TO_JAVA) -> str:
    return mapping.strip(script.base_name)


def wrapper_class_name(variable: str) -> str:
    return WRAPPER_PREFIX + variable.upper()


def transform_line(line: str) -> str:
    # var docs start with a `#` line
    if line.startswith(COMMENT_MARKER):
        return "// " + line
    return line


def render_wrapper(class_name: str, body: Iterable[str]) -> str:
    out = [f"package {GLOBALVARS_PACKAGE}\n", "\n", f"class {class_name} {{\n"]
    out.extend(line + "\n" for line in body)
    out.append("\n}\n")
    return "".join(out)


def render_registry(entries: Iterable[tuple[str, str]]) -> str:
    out = [f"class {REGISTRY_CLASS} {{\n"]
    for variable, class_name in entries:
        out.append(f"/** Global variable {variable} */\n")
        out.append(f"{GLOBALVARS_PACKAGE}.{class_name} {variable}\n")
    out.append("}\n")
    return "".join(out)
