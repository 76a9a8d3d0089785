from __future__ import annotations

import sys
from typing import Callable, List, Optional

from ..selection import BLANK, SelectionDialog

CANCEL_WORDS = {"q", "quit", "cancel"}


def _label(item: str) -> str:
    return item if item != BLANK else "(none)"


class ConsolePresenter:
    """Numbered menus on a terminal.

    Empty input keeps the current pre-selection; q, EOF and Ctrl-C cancel.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Optional[Callable[[str], None]] = None,
    ):
        self.input_fn = input_fn
        self.output_fn = output_fn or print

    def _pick(self, title: str, items: List[str], current: str) -> Optional[str]:
        choices = [it for it in items if it != BLANK]
        while True:
            self.output_fn(title)
            for i, it in enumerate(choices, start=1):
                marker = "*" if it == current else " "
                self.output_fn(f" {marker}{i}) {it}")
            try:
                raw = self.input_fn(f"Choice [{_label(current)}], q to cancel: ").strip()
            except (EOFError, KeyboardInterrupt):
                return None

            if raw.lower() in CANCEL_WORDS:
                return None
            if not raw:
                if current != BLANK:
                    return current
                self.output_fn("A selection is required.")
                continue
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return choices[int(raw) - 1]
            if raw in choices:
                return raw
            self.output_fn(f"Invalid choice: {raw}")

    def choose(self, dialog: SelectionDialog) -> SelectionDialog:
        if dialog.has_family:
            fam = self._pick(f"Select {dialog.family_label} family:", dialog.family_items, dialog.family)
            if fam is None:
                dialog.cancel()
                return dialog
            dialog.select_family(fam)

        ed = self._pick(f"Select {dialog.family_label} edition:", dialog.edition_items, dialog.edition)
        if ed is None:
            dialog.cancel()
            return dialog
        dialog.select_edition(ed)

        dialog.confirm()
        return dialog

    def notify_error(self, message: str) -> None:
        sys.stderr.write(f"ERROR: {message}\n")
        try:
            self.input_fn("Press Enter to continue...")
        except EOFError:
            pass
