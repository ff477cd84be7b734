from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Sequence, Tuple

from .text_utils import normalize_name


class ModSource(str, Enum):
    EXTERNAL = "external"
    LOCAL = "local"

    @property
    def label(self) -> str:
        return "Steam" if self is ModSource.EXTERNAL else "Local"


class ModListKind(str, Enum):
    COLLECTION = "collection"
    LIST = "list"


class DiffSection(str, Enum):
    ONLY_IN_A = "only_in_a"
    ONLY_IN_B = "only_in_b"
    COMMON = "common"


class OutputFormat(str, Enum):
    PLAIN = "plain"
    CHAT = "chat"
    HTML_LINKS = "html-links"


class SortOrder(str, Enum):
    DEFAULT = "default"
    NAME_ASC = "a-z"
    NAME_DESC = "z-a"
    SIZE_DESC = "size-desc"
    SIZE_ASC = "size-asc"


DEFAULT_SECTIONS: Tuple[DiffSection, ...] = (
    DiffSection.ONLY_IN_A,
    DiffSection.ONLY_IN_B,
    DiffSection.COMMON,
)
DEFAULT_CHAT_LIMIT = 2000


@dataclass(frozen=True, slots=True)
class ModEntry:
    display_name: str
    external_id: str | None = None
    external_url: str | None = None
    source: ModSource = ModSource.LOCAL

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.display_name)

    @property
    def source_label(self) -> str:
        return self.source.label


@dataclass(frozen=True, slots=True)
class ModList:
    kind: ModListKind
    entries: Tuple[ModEntry, ...] = ()
    name: str | None = None

    @property
    def num_entries(self) -> int:
        return len(self.entries)


@dataclass(slots=True)
class DiffResult:
    only_in_a: Tuple[ModEntry, ...] = ()
    only_in_b: Tuple[ModEntry, ...] = ()
    common: Tuple[ModEntry, ...] = ()
    duplicates_a: int = 0
    duplicates_b: int = 0

    def section(self, key: DiffSection) -> Tuple[ModEntry, ...]:
        if key is DiffSection.ONLY_IN_A:
            return self.only_in_a
        if key is DiffSection.ONLY_IN_B:
            return self.only_in_b
        return self.common

    @property
    def has_differences(self) -> bool:
        return bool(self.only_in_a or self.only_in_b)


@dataclass(slots=True)
class SizeContext:
    sizes: Mapping[str, int] = field(default_factory=dict)
    total_a: int | None = None
    total_b: int | None = None

    def size_of(self, entry: ModEntry) -> int | None:
        if not entry.external_id:
            return None
        return self.sizes.get(entry.external_id)


@dataclass(slots=True)
class MergeOptions:
    name: str
    kind: ModListKind | str = ModListKind.COLLECTION


@dataclass(slots=True)
class FormatOptions:
    format: OutputFormat = OutputFormat.PLAIN
    include_links: bool = False
    raw_string: bool = False
    name_a: str | None = None
    name_b: str | None = None
    sections: Sequence[DiffSection] = DEFAULT_SECTIONS
    section_labels: Dict[DiffSection, str] = field(default_factory=dict)
    chat_limit: int = DEFAULT_CHAT_LIMIT
    size_context: SizeContext | None = None
    size_footer: str | None = None
    sort: SortOrder = SortOrder.DEFAULT


@dataclass(slots=True)
class FormatResult:
    text: str
    parts: List[str] = field(default_factory=list)
    character_count: int = 0
