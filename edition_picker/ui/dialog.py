"""Tk dialog presenter for WinPE / full Windows sessions."""

from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk

from ..selection import SelectionDialog

logger = logging.getLogger(__name__)

TITLE = "Select Windows Edition"


class TkPresenter:
    def choose(self, dialog: SelectionDialog) -> SelectionDialog:
        root = tk.Tk()
        root.title(TITLE)
        root.resizable(False, False)
        # Task sequence progress windows sit on top; stay above them.
        root.attributes("-topmost", True)

        style = ttk.Style(root)
        style.configure("TLabel", font=("Segoe UI", 10))
        style.configure("TButton", font=("Segoe UI", 10))

        frame = ttk.Frame(root, padding=16)
        frame.grid(row=0, column=0, sticky="nsew")

        row = 0
        family_var = tk.StringVar(value=dialog.family)
        if dialog.has_family:
            ttk.Label(frame, text=f"{dialog.family_label} family:").grid(row=row, column=0, sticky="w", pady=4)
            family_box = ttk.Combobox(
                frame, textvariable=family_var, values=dialog.family_items, state="readonly", width=36
            )
            family_box.grid(row=row, column=1, sticky="ew", pady=4)
            row += 1

        edition_var = tk.StringVar(value=dialog.edition)
        ttk.Label(frame, text=f"{dialog.family_label} edition:").grid(row=row, column=0, sticky="w", pady=4)
        edition_box = ttk.Combobox(
            frame, textvariable=edition_var, values=dialog.edition_items, state="readonly", width=36
        )
        edition_box.grid(row=row, column=1, sticky="ew", pady=4)
        row += 1

        buttons = ttk.Frame(frame)
        buttons.grid(row=row, column=0, columnspan=2, sticky="e", pady=(12, 0))

        def refresh(*_args) -> None:
            if dialog.has_family:
                dialog.select_family(family_var.get())
            dialog.select_edition(edition_var.get())
            ok_button.state(["!disabled"] if dialog.can_confirm else ["disabled"])

        def on_ok() -> None:
            if dialog.can_confirm:
                dialog.confirm()
                root.destroy()

        def on_cancel() -> None:
            dialog.cancel()
            root.destroy()

        ok_button = ttk.Button(buttons, text="OK", command=on_ok)
        ok_button.grid(row=0, column=0, padx=4)
        ttk.Button(buttons, text="Cancel", command=on_cancel).grid(row=0, column=1, padx=4)

        family_var.trace_add("write", refresh)
        edition_var.trace_add("write", refresh)
        root.protocol("WM_DELETE_WINDOW", on_cancel)
        root.bind("<Return>", lambda _e: on_ok())
        root.bind("<Escape>", lambda _e: on_cancel())
        refresh()

        root.lift()
        root.focus_force()
        root.mainloop()

        if not dialog.resolved:
            # Window torn down without a decision.
            dialog.cancel()
        return dialog

    def notify_error(self, message: str) -> None:
        logger.error(message)
        root = tk.Tk()
        root.withdraw()
        root.attributes("-topmost", True)
        messagebox.showerror(TITLE, message, parent=root)
        root.destroy()
