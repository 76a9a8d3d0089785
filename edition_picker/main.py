from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Any, Dict, Optional

from .config import (
    ENV_SUFFIXES,
    LOG_SUFFIXES,
    REPORT_SUFFIXES,
    RunOptions,
    check_suffix,
    check_unique_names,
    load_picker_config,
)
from .errors import (
    ConfigError,
    EnvironmentUnavailable,
    EnvironmentWriteError,
    SelectionCancelled,
)
from .lib.env_store import EnvironmentStore, FileEnvironmentStore
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .steps import DetectEditionStep, SelectEditionStep, WriteEnvironmentStep
from .ui import Presenter, get_presenter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
# Windows ERROR_CANCELLED; task sequences treat it as "operator stopped".
EXIT_CANCELLED = 1223


def build_steps():
    return [
        DetectEditionStep(),
        SelectEditionStep(),
        WriteEnvironmentStep(),
    ]


def open_store(opts: RunOptions, presenter: Presenter) -> Optional[EnvironmentStore]:
    """Open the environment store; fatal outside testing mode."""

    try:
        return FileEnvironmentStore.open(opts.env_path)
    except EnvironmentUnavailable as e:
        if opts.testing:
            logger.warning("%s; continuing without it (testing mode)", e)
            return None
        logger.error("%s", e)
        presenter.notify_error(f"Unable to reach the task sequence environment.\n\n{e}")
        raise


def run(
    opts: RunOptions,
    *,
    presenter: Presenter,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Run detection, selection and the environment write once."""

    configure_logging(
        log_path=None if opts.testing else opts.log_path,
        level=logging.DEBUG if verbose else logging.INFO,
    )
    logger.info(
        "edition-picker start (testing=%s detector=%s report=%s env=%s)",
        opts.testing,
        opts.detector_path,
        opts.report_path,
        opts.env_path,
    )

    state: Dict[str, Any] = {
        "options": opts,
        "presenter": presenter,
        "store": open_store(opts, presenter),
        "execution": {"current_step": None},
    }

    result = run_pipeline(state=state, steps=build_steps())
    state = result.state
    state["execution"]["ran_steps"] = result.ran_steps
    return state


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="edition-picker")
    p.add_argument("--config", default=None, help="YAML file overriding catalogs and defaults")
    p.add_argument("--os-family", default=None, help="OS family override (skips family selection)")
    p.add_argument("--detector", default=None, help="OEM key detector executable")
    p.add_argument("--report", default=None, help="Detection report path (.txt)")
    p.add_argument("--log", default=None, help="Log file path (.log)")
    p.add_argument("--env", default=None, help="Environment store file (.json|.yaml|.yml)")
    p.add_argument("--testing", action="store_true", help="Do not write the environment or a log file")
    p.add_argument("--skip-family", action="store_true", help="Never ask for the OS family")
    p.add_argument("--family-var", default=None, help="Variable name for the OS family")
    p.add_argument("--edition-var", default=None, help="Variable name for the edition short code")
    p.add_argument("--auto-var", default=None, help="Variable name for the auto-selected flag")
    p.add_argument("--oem-key-var", default=None, help="Variable name for the OEM product key")
    p.add_argument("--default-family", default=None, help="Family pre-selected in the family selector")
    p.add_argument("--family-fallback-name", default=None, help="Label used when no family is known")
    p.add_argument("--ui", choices=["console", "gui"], default="console")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def options_from_args(args: argparse.Namespace) -> RunOptions:
    cfg = load_picker_config(args.config)
    d = cfg.defaults

    overrides = {
        "family": args.family_var,
        "edition": args.edition_var,
        "auto": args.auto_var,
        "oem_key": args.oem_key_var,
    }
    names = check_unique_names(replace(cfg.names, **{k: v for k, v in overrides.items() if v}))
    cfg = replace(cfg, names=names)

    opts = RunOptions(
        config=cfg,
        os_family=args.os_family,
        detector_path=args.detector or d.detector_path,
        report_path=args.report or d.report_path,
        log_path=args.log or d.log_path,
        env_path=args.env or d.env_path,
        testing=bool(args.testing),
        skip_family=bool(args.skip_family),
        default_family=args.default_family or d.default_family,
        family_fallback_name=args.family_fallback_name or d.family_fallback_name,
    )

    check_suffix(opts.report_path, REPORT_SUFFIXES, "report path")
    check_suffix(opts.log_path, LOG_SUFFIXES, "log path")
    check_suffix(opts.env_path, ENV_SUFFIXES, "environment store path")
    return opts


def main(argv: Optional[list[str]] = None, *, presenter: Optional[Presenter] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        opts = options_from_args(args)
    except (ConfigError, FileNotFoundError) as e:
        p.error(str(e))

    presenter = presenter or get_presenter(args.ui)

    try:
        run(opts, presenter=presenter, verbose=bool(args.verbose))
    except (SelectionCancelled, KeyboardInterrupt):
        logger.info("Cancelled; exiting with %d", EXIT_CANCELLED)
        return EXIT_CANCELLED
    except (EnvironmentUnavailable, EnvironmentWriteError) as e:
        logger.error("Aborting: %s", e)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
