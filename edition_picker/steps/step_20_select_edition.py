from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..config import RunOptions
from ..lib.keyinfo import DetectionResult
from ..selection import SelectionDialog

logger = logging.getLogger(__name__)


def known_family(opts: RunOptions, state: Dict[str, Any]) -> Optional[str]:
    """Family supplied from outside: CLI override first, then the environment."""

    if opts.os_family:
        return opts.os_family
    store = state.get("store")
    if store is not None:
        return store.get(opts.config.names.family) or None
    return None


class SelectEditionStep:
    step_id = "20_select_edition"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        opts: RunOptions = state["options"]
        detection: DetectionResult = state.get("detection") or DetectionResult.unknown()

        family = known_family(opts, state)
        ask_family = family is None and not opts.skip_family
        logger.info("Family: known=%s ask=%s", family, ask_family)

        dialog = SelectionDialog(
            detection,
            editions=opts.config.editions,
            families=opts.config.families if ask_family else None,
            default_family=opts.default_family,
            family_label=family or opts.family_fallback_name,
        )
        state["dialog"] = dialog

        state["presenter"].choose(dialog)
        # Raises SelectionCancelled when the operator cancelled.
        state["outcome"] = dialog.outcome
        return state
