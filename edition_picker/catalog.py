from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple

Entry = Tuple[str, str]


@dataclass(frozen=True)
class Catalog:
    """Ordered, immutable (display_name, short_code) pairs.

    Entries keep the order they are offered to the operator in. Detection
    scans match_order, where a name always precedes any name it contains.
    """

    entries: Tuple[Entry, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for name, _code in self.entries:
            if name in seen:
                raise ValueError(f"Duplicate catalog display name: {name!r}")
            seen.add(name)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[str]]) -> "Catalog":
        return cls(entries=tuple((str(p[0]), str(p[1])) for p in pairs))

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, display_name: object) -> bool:
        return any(name == display_name for name, _ in self.entries)

    @property
    def display_names(self) -> list[str]:
        return [name for name, _ in self.entries]

    def lookup(self, display_name: str) -> Optional[str]:
        """Exact-match lookup used for manual picks."""
        for name, code in self.entries:
            if name == display_name:
                return code
        return None

    @property
    def match_order(self) -> Tuple[Entry, ...]:
        """Catalog order, except each name moves ahead of any name it contains.

        "Pro Education" must be tried before "Education" and "Pro", or it
        could never match.
        """
        ordered: list[Entry] = []
        for entry in self.entries:
            for i, (placed, _) in enumerate(ordered):
                if placed in entry[0]:
                    ordered.insert(i, entry)
                    break
            else:
                ordered.append(entry)
        return tuple(ordered)

    def first_contained_in(self, text: str) -> Optional[Entry]:
        """Case-sensitive substring scan in match order."""
        for name, code in self.match_order:
            if name in text:
                return name, code
        return None


EDITIONS = Catalog(
    entries=(
        ("Home", "home"),
        ("Education", "edu"),
        ("Enterprise", "ent"),
        ("Pro for Workstations", "prows"),
        ("Pro Education", "proedu"),
        ("Pro", "pro"),
    )
)

FAMILIES = Catalog(
    entries=(
        ("Windows 10", "Windows 10"),
        ("Windows 11", "Windows 11"),
    )
)

# OEM reports label the Home edition "Core".
HOME_ALIAS = "Core"
HOME_DISPLAY_NAME = "Home"
