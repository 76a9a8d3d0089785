"""Tests for the terminal presenter."""

from edition_picker.catalog import FAMILIES
from edition_picker.lib.keyinfo import DetectionResult
from edition_picker.selection import CANCELLED, CONFIRMED, SelectionDialog
from edition_picker.ui.console import ConsolePresenter


def scripted(*answers):
    it = iter(answers)
    out = []

    def input_fn(prompt):
        out.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    return input_fn, out


def test_enter_accepts_auto(detected_pro_edu):
    input_fn, out = scripted("")
    d = ConsolePresenter(input_fn, out.append).choose(SelectionDialog(detected_pro_edu))
    assert d.state == CONFIRMED
    assert d.outcome.is_auto_selected is True


def test_pick_by_number_and_name():
    d = SelectionDialog(DetectionResult.unknown())
    # Choices: Home, Education, Enterprise, Pro for Workstations, Pro Education, Pro
    input_fn, out = scripted("3")
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.outcome.os_edition_short_code == "ent"

    d = SelectionDialog(DetectionResult.unknown())
    input_fn, out = scripted("Pro for Workstations")
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.outcome.os_edition_short_code == "prows"


def test_blank_required_and_invalid_reprompt():
    d = SelectionDialog(DetectionResult.unknown())
    input_fn, out = scripted("", "99", "pro", "6")
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.outcome.os_edition_short_code == "pro"
    assert "A selection is required." in out
    assert "Invalid choice: 99" in out


def test_quit_cancels():
    d = SelectionDialog(DetectionResult.unknown())
    input_fn, out = scripted("q")
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.state == CANCELLED


def test_eof_cancels(detected_pro_edu):
    d = SelectionDialog(detected_pro_edu, families=FAMILIES)
    input_fn, out = scripted()
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.state == CANCELLED


def test_family_then_edition():
    d = SelectionDialog(DetectionResult.unknown(), families=FAMILIES, default_family="Windows 10")
    input_fn, out = scripted("", "1")
    ConsolePresenter(input_fn, out.append).choose(d)
    assert d.outcome.os_family == "Windows 10"
    assert d.outcome.os_edition_short_code == "home"


def test_notify_error_writes_stderr(capsys):
    input_fn, out = scripted("")
    ConsolePresenter(input_fn, out.append).notify_error("store missing")
    assert "ERROR: store missing" in capsys.readouterr().err


def test_default_presenter_is_console():
    from edition_picker.ui import get_presenter

    assert isinstance(get_presenter("console"), ConsolePresenter)


def test_ctrl_c_cancels(detected_pro_edu):
    def interrupted(prompt):
        raise KeyboardInterrupt

    d = ConsolePresenter(interrupted, lambda line: None).choose(SelectionDialog(detected_pro_edu))
    assert d.state == CANCELLED
