from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..errors import EnvironmentUnavailable, EnvironmentWriteError

logger = logging.getLogger(__name__)


class EnvironmentStore(Protocol):
    """Deployment environment key/value store."""

    def get(self, name: str) -> Optional[str]:
        ...

    def set(self, name: str, value: str) -> None:
        ...


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML environment requested but PyYAML is not available. "
            "Use a JSON environment file or install PyYAML."
        ) from e
    return yaml


class FileEnvironmentStore:
    """Flat string mapping persisted to a JSON or YAML file.

    The file is owned by the surrounding deployment tooling; it must exist
    before the picker runs. Every set() writes through to disk.
    """

    def __init__(self, path: str, values: Dict[str, str]):
        self.path = Path(path)
        self._values = values

    @classmethod
    def open(cls, path: str) -> "FileEnvironmentStore":
        p = Path(path)
        if not p.is_file():
            raise EnvironmentUnavailable(f"Environment store not found: {path}")

        fmt = _detect_format(p)
        try:
            text = p.read_text(encoding="utf-8")
            if fmt == "json":
                data = json.loads(text) if text.strip() else {}
            else:
                data = _yaml().safe_load(text) or {}
        except Exception as e:
            # OSError, JSON decode errors and yaml.YAMLError alike.
            raise EnvironmentUnavailable(f"Environment store unreadable: {path}: {e}") from e

        if not isinstance(data, dict):
            raise EnvironmentUnavailable(f"Environment store must be an object/dict, got {type(data)}")

        values = {str(k): "" if v is None else str(v) for k, v in data.items()}
        logger.info("Opened environment store %s (%d variables)", path, len(values))
        return cls(path=str(p), values=values)

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        values = dict(self._values)
        values[name] = str(value)
        try:
            self._save(values)
        except (OSError, RuntimeError) as e:
            raise EnvironmentWriteError(f"Failed to set {name}: {e}") from e
        self._values = values

    def _save(self, values: Dict[str, str]) -> None:
        fmt = _detect_format(self.path)
        if fmt == "json":
            self.path.write_text(json.dumps(values, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        else:
            self.path.write_text(_yaml().safe_dump(values, sort_keys=False) + "\n", encoding="utf-8")
