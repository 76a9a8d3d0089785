"""Presentation layer.

A presenter shows a SelectionDialog and returns it resolved (confirmed or
cancelled). It owns nothing else: window placement, focus and DPI are its
own business.
"""

from __future__ import annotations

from typing import Protocol

from ..selection import SelectionDialog


class Presenter(Protocol):
    def choose(self, dialog: SelectionDialog) -> SelectionDialog:
        ...

    def notify_error(self, message: str) -> None:
        ...


def get_presenter(kind: str) -> Presenter:
    if kind == "gui":
        from .dialog import TkPresenter

        return TkPresenter()
    from .console import ConsolePresenter

    return ConsolePresenter()


__all__ = ["Presenter", "get_presenter"]
