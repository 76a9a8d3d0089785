from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .catalog import EDITIONS, FAMILIES, Catalog
from .errors import ConfigError

REPORT_SUFFIXES = {".txt"}
LOG_SUFFIXES = {".log"}
ENV_SUFFIXES = {".json", ".yaml", ".yml"}
OPTIONAL_DEFAULTS = {"default_family"}


@dataclass(frozen=True)
class FieldNames:
    """Names of the persisted environment variables."""

    family: str = "osFamily"
    edition: str = "osEdition"
    auto: str = "isAutoEdition"
    oem_key: str = "oemKey"


@dataclass(frozen=True)
class Defaults:
    detector_path: str = "ShowKeyPlus.exe"
    report_path: str = "ShowKeyPlus.txt"
    log_path: str = "edition-picker.log"
    env_path: str = "ts_environment.json"
    default_family: Optional[str] = None
    family_fallback_name: str = "Windows"


DEFAULTS = Defaults()


@dataclass(frozen=True)
class PickerConfig:
    editions: Catalog = EDITIONS
    families: Catalog = FAMILIES
    defaults: Defaults = DEFAULTS
    names: FieldNames = field(default_factory=FieldNames)


def check_suffix(path: str, allowed: set[str], what: str) -> str:
    if Path(path).suffix.lower() not in allowed:
        raise ConfigError(f"{what} must end in one of {', '.join(sorted(allowed))}: {path}")
    return path


def _catalog_from_yaml(raw: Any, what: str) -> Catalog:
    # Lists keep order explicit: either [name, code] pairs or {name: code} items.
    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"{what} must be a non-empty list")

    pairs: List[Sequence[str]] = []
    for item in raw:
        if isinstance(item, dict) and len(item) == 1:
            ((name, code),) = item.items()
            pairs.append((str(name), str(code)))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            pairs.append((str(item[0]), str(item[1])))
        else:
            raise ConfigError(f"{what}: unsupported entry {item!r}")

    try:
        return Catalog.from_pairs(pairs)
    except ValueError as e:
        raise ConfigError(f"{what}: {e}") from e


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping/object")
    return value


def check_unique_names(names: FieldNames) -> FieldNames:
    """Each persisted field needs its own variable, or one write hides another."""
    values = [names.family, names.edition, names.auto, names.oem_key]
    dupes = sorted({v for v in values if values.count(v) > 1})
    if dupes:
        raise ConfigError(f"Variable names must be distinct: {', '.join(dupes)}")
    return names


def load_picker_config(path: Optional[str]) -> PickerConfig:
    """Load catalog and default overrides from YAML.

    Missing keys keep the built-in values.
    """

    if not path:
        return PickerConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("picker config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the picker config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError("picker config must contain a mapping/object")

    cfg = PickerConfig()
    if "editions" in raw:
        cfg = replace(cfg, editions=_catalog_from_yaml(raw["editions"], "editions"))
    if "families" in raw:
        cfg = replace(cfg, families=_catalog_from_yaml(raw["families"], "families"))

    d: Dict[str, Any] = _section(raw, "defaults")
    if d:
        known = set(Defaults.__dataclass_fields__)
        unknown = set(d) - known
        if unknown:
            raise ConfigError(f"Unknown defaults: {', '.join(sorted(str(k) for k in unknown))}")
        for k, v in d.items():
            if not isinstance(v, str) and not (k in OPTIONAL_DEFAULTS and v is None):
                raise ConfigError(f"defaults.{k} must be a string, got {v!r}")
        cfg = replace(cfg, defaults=replace(cfg.defaults, **d))

    n: Dict[str, Any] = _section(raw, "variables")
    if n:
        known = set(FieldNames.__dataclass_fields__)
        unknown = set(n) - known
        if unknown:
            raise ConfigError(f"Unknown variables: {', '.join(sorted(str(k) for k in unknown))}")
        cfg = replace(cfg, names=replace(cfg.names, **{k: str(v) for k, v in n.items()}))
        check_unique_names(cfg.names)

    return cfg


@dataclass(frozen=True)
class RunOptions:
    """Everything one picker run needs, resolved from CLI + config file."""

    config: PickerConfig = field(default_factory=PickerConfig)
    os_family: Optional[str] = None
    detector_path: str = DEFAULTS.detector_path
    report_path: str = DEFAULTS.report_path
    log_path: str = DEFAULTS.log_path
    env_path: str = DEFAULTS.env_path
    testing: bool = False
    skip_family: bool = False
    default_family: Optional[str] = None
    family_fallback_name: str = DEFAULTS.family_fallback_name
