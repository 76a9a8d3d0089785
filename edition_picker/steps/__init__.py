from .step_10_detect_edition import DetectEditionStep
from .step_20_select_edition import SelectEditionStep
from .step_30_write_environment import WriteEnvironmentStep

__all__ = [
    "DetectEditionStep",
    "SelectEditionStep",
    "WriteEnvironmentStep",
]
