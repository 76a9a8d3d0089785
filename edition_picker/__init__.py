"""Edition picker for OS deployment task sequences.

Core design goals:
- Offer the OEM edition found in firmware as an "Auto" choice
- Never block deployment on a missing or broken detector
- Single, explicit write of the operator's choice
- Centralized logging
"""

__all__ = []
