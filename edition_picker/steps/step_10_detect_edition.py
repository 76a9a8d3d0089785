from __future__ import annotations

import logging
from typing import Any, Dict

from ..config import RunOptions
from ..lib.detect import detect_oem_edition

logger = logging.getLogger(__name__)


class DetectEditionStep:
    step_id = "10_detect_edition"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        opts: RunOptions = state["options"]

        state["detection"] = detect_oem_edition(
            opts.detector_path,
            opts.report_path,
            opts.config.editions,
        )
        return state
