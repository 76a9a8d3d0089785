from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Optional

from ..catalog import EDITIONS, Catalog
from .command import invoke_detector
from .keyinfo import DetectionResult, parse_key_info

logger = logging.getLogger(__name__)


def _decode_report(data: bytes) -> str:
    # Key readers on Windows commonly write UTF-16 with a BOM.
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def _remove_report(p: Path) -> bool:
    try:
        p.unlink(missing_ok=True)
    except OSError as e:
        # Locked by the detector or a read-only folder.
        logger.warning("Unable to remove detection report %s: %s", p, e)
        return False
    return True


def read_report(report_path: str) -> Optional[list[str]]:
    """Read the report once and delete it. None when the report is missing."""

    p = Path(report_path)
    try:
        data = p.read_bytes()
    except FileNotFoundError:
        logger.warning("Detection report not found: %s", report_path)
        return None
    except OSError as e:
        logger.warning("Detection report unreadable (%s): %s", report_path, e)
        return None

    if _remove_report(p):
        logger.info("Read and removed detection report %s (%d bytes)", report_path, len(data))
    return _decode_report(data).splitlines()


def detect_oem_edition(
    exe_path: str,
    report_path: str,
    catalog: Catalog = EDITIONS,
) -> DetectionResult:
    """Best-effort OEM edition detection.

    Every failure degrades to DetectionResult.unknown(); detection is an
    optional pre-fill, never a reason to stop the deployment.
    """

    if not Path(exe_path).is_file():
        logger.info("Detector not found at %s; manual selection only", exe_path)
        return DetectionResult.unknown()

    # A report left behind by an earlier run must not be mistaken for ours.
    if not _remove_report(Path(report_path)):
        return DetectionResult.unknown()

    try:
        r = invoke_detector(exe_path, report_path)
    except OSError as e:
        logger.warning("Failed to start detector %s: %s", exe_path, e)
        return DetectionResult.unknown()

    logger.info("Detector exited with %d", r.returncode)

    lines = read_report(report_path)
    if lines is None:
        return DetectionResult.unknown()

    result = parse_key_info(lines, catalog)
    logger.info(
        "Detection: edition=%s (%s) key_found=%s enabled=%s",
        result.edition_display_name,
        result.edition_short_code,
        result.oem_product_key is not None,
        result.enabled,
    )
    return result
