import logging

import pytest

from edition_picker.lib.keyinfo import DetectionResult


@pytest.fixture(autouse=True)
def reset_root_logging():
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    for attr in ("_edition_picker_configured", "_edition_picker_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def detected_pro_edu():
    return DetectionResult(
        edition_short_code="proedu",
        edition_display_name="Pro Education",
        oem_product_key="ABCDE-12345-FGHIJ-67890-KLMNO",
        enabled=True,
    )


