from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import RunOptions
from ..selection import SelectionOutcome, write_outcome

logger = logging.getLogger(__name__)


class WriteEnvironmentStep:
    step_id = "30_write_environment"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        opts: RunOptions = state["options"]
        outcome: SelectionOutcome = state["outcome"]

        state["written"] = write_outcome(
            state.get("store"),
            outcome,
            names=opts.config.names,
            dry_run=opts.testing,
        )
        return state
