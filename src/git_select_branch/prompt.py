"""Interactive branch selector."""

import signal
import sys
from contextlib import contextmanager
from types import FrameType
from typing import Any, Iterator, Optional

from InquirerPy import inquirer
from InquirerPy.base.control import Choice
from InquirerPy.utils import InquirerPyStyle, get_style
from rich.console import Console

from git_select_branch.branches import BranchInfo

PROMPT_MESSAGE = "Which branch would you like to switch to?"


class PromptInterrupted(Exception):
    """The prompt was stopped with Ctrl-C or SIGINT."""


def _save_terminal_mode() -> Optional[list[Any]]:
    """Snapshot the tty attributes of stdin, if it is a terminal."""
    if sys.platform == "win32" or not sys.stdin.isatty():
        return None
    import termios

    try:
        return termios.tcgetattr(sys.stdin.fileno())
    except (termios.error, OSError, ValueError):
        return None


def _restore_terminal_mode(mode: Optional[list[Any]]) -> None:
    if mode is None:
        return
    import termios

    try:
        termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, mode)
    except (termios.error, OSError, ValueError):
        pass  # stdin was closed under us, nothing left to restore


@contextmanager
def interrupt_guard(console: Optional[Console] = None) -> Iterator[None]:
    """Make Ctrl-C stop a blocking prompt without breaking the terminal.

    While active, SIGINT raises ``KeyboardInterrupt`` in the main thread, which
    unwinds the prompt's read loop. On every way out the terminal mode saved on
    entry is put back, the cursor is shown again and the previous SIGINT
    handler is reinstalled.

    Must be entered from the main thread.
    """
    console = console or Console(stderr=True)
    saved_mode = _save_terminal_mode()

    def _handle_sigint(_signum: int, _frame: Optional[FrameType]) -> None:
        raise KeyboardInterrupt

    previous = signal.signal(signal.SIGINT, _handle_sigint)
    try:
        yield
    finally:
        # None means the old handler was not installed from Python
        signal.signal(signal.SIGINT, previous if previous is not None else signal.default_int_handler)
        _restore_terminal_mode(saved_mode)
        console.show_cursor(True)


def get_prompt_style(theme: str) -> InquirerPyStyle:
    """Map a theme name to an InquirerPy style."""
    if theme == "simple":
        return get_style({}, style_override=True)
    return get_style({}, style_override=False)


def select_branch(
    branches: list[BranchInfo],
    *,
    current: Optional[str],
    fuzzy: bool = True,
    theme: str = "colorful",
) -> Optional[str]:
    """Ask the user to pick a branch.

    Args:
        branches: Branches to offer, in display order
        current: Name of the checked out branch, shown in the prompt
        fuzzy: Use the type-to-filter prompt instead of a plain list
        theme: "colorful" or "simple"

    Returns:
        The selected branch name, or None if the user cancelled with Escape.

    Raises:
        PromptInterrupted: If the prompt was stopped with Ctrl-C
    """
    message = f"On {current or '<no branch>'}. {PROMPT_MESSAGE}"
    choices = [Choice(value=branch.name, name=branch.name) for branch in branches]
    make_prompt = inquirer.fuzzy if fuzzy else inquirer.select
    prompt = make_prompt(
        message=message,
        choices=choices,
        style=get_prompt_style(theme),
        mandatory=False,
        keybindings={"skip": [{"key": "escape"}]},
        long_instruction="enter: checkout, esc: cancel",
    )

    with interrupt_guard():
        try:
            return prompt.execute()
        except KeyboardInterrupt as err:
            raise PromptInterrupted from err
