from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class SuffixMapping:
    source_suffix: str
    target_suffix: str

    def matches(self, name: str) -> bool:
        return name.endswith(self.source_suffix) and len(name) > len(self.source_suffix)

    def strip(self, name: str) -> str:
        return name[: -len(self.source_suffix)] if self.matches(name) else name

    def target_name(self, name: str) -> str:
        return self.strip(name) + self.target_suffix


GROOVY_TO_JAVA = SuffixMapping(".groovy", ".java")
STUB_MAPPINGS: tuple[SuffixMapping, ...] = (GROOVY_TO_JAVA,)


def mapping_for(name: str, mappings: Iterable[SuffixMapping] = STUB_MAPPINGS) -> SuffixMapping | None:
    for mapping in mappings:
        if mapping.matches(name):
            return mapping
    return None


def is_candidate(name: str, mappings: Iterable[SuffixMapping] = STUB_MAPPINGS) -> bool:
    return mapping_for(name, mappings) is not None
