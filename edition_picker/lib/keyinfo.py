from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..catalog import EDITIONS, HOME_ALIAS, HOME_DISPLAY_NAME, Catalog

UNKNOWN = "Unknown"

_EDITION_RE = re.compile(r"OEM Edition:\s*(.*)")
_KEY_RE = re.compile(r"OEM Key:\s*(.*)")


@dataclass(frozen=True)
class DetectionResult:
    edition_short_code: str
    edition_display_name: str
    oem_product_key: Optional[str]
    enabled: bool

    @classmethod
    def unknown(cls, oem_product_key: Optional[str] = None) -> "DetectionResult":
        return cls(
            edition_short_code=UNKNOWN,
            edition_display_name=UNKNOWN,
            oem_product_key=oem_product_key,
            enabled=False,
        )


def _first_match(pattern: re.Pattern[str], lines: Iterable[str]) -> Optional[str]:
    for line in lines:
        m = pattern.search(line)
        if m:
            return m.group(1).strip()
    return None


def map_edition(edition_text: str, catalog: Catalog = EDITIONS) -> Optional[tuple[str, str]]:
    """Map free-form OEM edition text to a (display_name, short_code) entry.

    Substring containment, case-sensitive, first catalog entry wins.
    """

    if HOME_ALIAS in edition_text:
        code = catalog.lookup(HOME_DISPLAY_NAME)
        if code is not None:
            return HOME_DISPLAY_NAME, code
    return catalog.first_contained_in(edition_text)


def parse_key_info(lines: Iterable[str], catalog: Catalog = EDITIONS) -> DetectionResult:
    """Parse report lines into a DetectionResult. Never raises on bad input."""

    lines = [ln.lstrip("\ufeff") for ln in lines]

    key = _first_match(_KEY_RE, lines) or None
    edition_text = _first_match(_EDITION_RE, lines)
    if edition_text is None:
        return DetectionResult.unknown(key)

    entry = map_edition(edition_text, catalog)
    if entry is None:
        return DetectionResult.unknown(key)

    name, code = entry
    return DetectionResult(
        edition_short_code=code,
        edition_display_name=name,
        oem_product_key=key,
        enabled=True,
    )
