"""Source set model, suffix mapping and source discovery."""

from .model import GLOBAL_VARS_SEGMENT, ScriptFile, SourceSet, SourceSetMode, normalize_source_sets
from .scanner import scan_for_sources
from .suffix import STUB_MAPPINGS, SuffixMapping, is_candidate

__all__ = [
    "GLOBAL_VARS_SEGMENT",
    "STUB_MAPPINGS",
    "ScriptFile",
    "SourceSet",
    "SourceSetMode",
    "SuffixMapping",
    "is_candidate",
    "normalize_source_sets",
    "scan_for_sources",
]
