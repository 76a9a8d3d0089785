from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .catalog import EDITIONS, Catalog
from .config import FieldNames
from .errors import SelectionCancelled, SelectionError
from .lib.env_store import EnvironmentStore
from .lib.keyinfo import DetectionResult

logger = logging.getLogger(__name__)

BLANK = ""

INITIAL = "initial"
AWAITING = "awaiting"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"


def auto_label(detection: DetectionResult) -> str:
    return f"Auto (Detected: {detection.edition_display_name})"


@dataclass(frozen=True)
class SelectionOutcome:
    os_family: Optional[str]
    os_edition_short_code: str
    is_auto_selected: bool
    oem_product_key: Optional[str]


class SelectionDialog:
    """Decision state for the edition (and optional family) picker.

    initial -> awaiting -> confirmed | cancelled

    Presenters drive it through select_*(), confirm() and cancel(); the OK
    control must mirror can_confirm. Cancel is always allowed.
    """

    def __init__(
        self,
        detection: DetectionResult,
        *,
        editions: Catalog = EDITIONS,
        families: Optional[Catalog] = None,
        default_family: Optional[str] = None,
        family_label: str = "Windows",
    ):
        self.detection = detection
        self.editions = editions
        self.families = families
        self.family_label = family_label
        self.state = INITIAL
        self._outcome: Optional[SelectionOutcome] = None

        self.edition_items: List[str] = [BLANK]
        if detection.enabled:
            self.edition_items.append(auto_label(detection))
        self.edition_items.extend(editions.display_names)

        self.family_items: List[str] = []
        if families is not None:
            self.family_items = [BLANK, *families.display_names]

        self.edition = auto_label(detection) if detection.enabled else BLANK
        self.family = default_family if (families is not None and default_family in families) else BLANK

        self.state = AWAITING
        logger.debug(
            "Dialog ready: edition=%r family=%r auto=%s",
            self.edition,
            self.family if self.has_family else None,
            detection.enabled,
        )

    @property
    def has_family(self) -> bool:
        return self.families is not None

    @property
    def resolved(self) -> bool:
        return self.state in {CONFIRMED, CANCELLED}

    @property
    def can_confirm(self) -> bool:
        if self.state != AWAITING:
            return False
        if self.edition == BLANK:
            return False
        if self.has_family and self.family == BLANK:
            return False
        return True

    def _require_awaiting(self) -> None:
        if self.state != AWAITING:
            raise SelectionError(f"Selection already {self.state}")

    def select_edition(self, item: str) -> None:
        self._require_awaiting()
        if item not in self.edition_items:
            raise SelectionError(f"Not an offered edition: {item!r}")
        self.edition = item

    def select_family(self, item: str) -> None:
        self._require_awaiting()
        if not self.has_family:
            raise SelectionError("Family selection is not offered")
        if item not in self.family_items:
            raise SelectionError(f"Not an offered family: {item!r}")
        self.family = item

    def confirm(self) -> SelectionOutcome:
        if not self.can_confirm:
            raise SelectionError("Nothing selected")

        family = self._family_code()
        if self.detection.enabled and self.edition == auto_label(self.detection):
            outcome = SelectionOutcome(
                os_family=family,
                os_edition_short_code=self.detection.edition_short_code,
                is_auto_selected=True,
                oem_product_key=self.detection.oem_product_key,
            )
        else:
            code = self.editions.lookup(self.edition)
            if code is None:
                raise SelectionError(f"Unknown edition: {self.edition!r}")
            outcome = SelectionOutcome(
                os_family=family,
                os_edition_short_code=code,
                is_auto_selected=False,
                oem_product_key=None,
            )

        self.state = CONFIRMED
        self._outcome = outcome
        logger.info(
            "Selection confirmed: family=%s edition=%s auto=%s",
            outcome.os_family,
            outcome.os_edition_short_code,
            outcome.is_auto_selected,
        )
        return outcome

    def cancel(self) -> None:
        self._require_awaiting()
        self.state = CANCELLED
        logger.info("Selection cancelled by operator")

    @property
    def outcome(self) -> SelectionOutcome:
        if self.state == CANCELLED:
            raise SelectionCancelled("Selection cancelled by operator")
        if self._outcome is None:
            raise SelectionError("Selection not confirmed")
        return self._outcome

    def _family_code(self) -> Optional[str]:
        if not self.has_family:
            return None
        assert self.families is not None
        return self.families.lookup(self.family)


def write_outcome(
    store: Optional[EnvironmentStore],
    outcome: SelectionOutcome,
    *,
    names: FieldNames,
    dry_run: bool = False,
) -> dict[str, str]:
    """Persist the outcome, one set() per field. Returns what was (or would be) written."""

    values: dict[str, str] = {}
    if outcome.os_family is not None:
        values[names.family] = outcome.os_family
    values[names.edition] = outcome.os_edition_short_code
    values[names.auto] = "true" if outcome.is_auto_selected else "false"
    if outcome.is_auto_selected and outcome.oem_product_key:
        values[names.oem_key] = outcome.oem_product_key

    for name, value in values.items():
        if dry_run or store is None:
            logger.info("Would set %s=%s", name, value if name != names.oem_key else "<redacted>")
            continue
        store.set(name, value)
        logger.info("Set %s=%s", name, value if name != names.oem_key else "<redacted>")

    return values
