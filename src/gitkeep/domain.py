from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Protocol


class Mode(Enum):
    NORMAL = "normal"
    CLEAN = "clean"
    CHECK = "check"


class PathPredicate(Protocol):
    def matches(self, path: str) -> bool: ...


@dataclass(frozen=True)
class Rule:
    pattern: str
    negated: bool
    dir_only: bool
    anchored: bool
    base_dir: str
    predicate: PathPredicate
    original: str

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        return self.predicate.matches(rel_path)


RulesMap = Dict[str, List[Rule]]


@dataclass(frozen=True)
class Config:
    root: Path
    mode: Mode = Mode.NORMAL
    dry_run: bool = False
    marker_name: str = ".gitkeep"
    marker_content: str = ""
    exclude_dirs: FrozenSet[str] = frozenset()
    respect_marker_ignore: bool = True
    verbose: bool = False
    report_file: Optional[str] = None


@dataclass
class Summary:
    created: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    mismatched: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)
