from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)

# Windows only; 0 elsewhere so the same call works on any host.
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(argv: Sequence[str], *, hide_window: bool = False) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Blocks until the child exits and both streams are drained.
    - A non-zero exit is returned, not raised; callers decide what it means.
    - hide_window suppresses the console window on Windows.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    p = subprocess.run(
        argv_list,
        text=True,
        errors="replace",
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        creationflags=CREATE_NO_WINDOW if hide_window else 0,
    )

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


def invoke_detector(exe_path: str, report_path: str) -> CmdResult:
    """Run the key detector with the report path as its only argument.

    Output is returned for logging only; the report is read from the file.
    """

    return run_cmd([exe_path, report_path], hide_window=True)
