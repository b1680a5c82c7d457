"""Y/n popup shown before overwriting a saved config."""

from collections.abc import Callable
from pathlib import Path

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label

from tmucks.constants import UPDATE_KEYS


class ConfirmUpdateScreen(ModalScreen[bool]):
    """Modal asking whether to overwrite ``target`` with the live config.

    Dismisses with True on y/Y and False on n/N/Escape.  Other keys are
    swallowed so the browsing bindings stay inactive while it is open; each
    of them still triggers ``on_input`` so the session keeps ticking.
    """

    def __init__(
        self, target: str, live_config_path: Path, on_input: Callable[[], None]
    ) -> None:
        super().__init__()
        self._on_input = on_input
        self._target = target
        self._live_config_path = live_config_path

    def compose(self) -> ComposeResult:
        with Vertical(id="update-container"):
            yield Label("confirm update", id="update-title")
            yield Label(Text.assemble(("config: ", "dim"), (self._target, "bold")))
            yield Label("this will overwrite the saved config with:")
            yield Label(Text(str(self._live_config_path), style="green"))
            yield Label(UPDATE_KEYS, id="update-hint")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if event.character in ("y", "Y"):
            self.dismiss(True)
        elif event.character in ("n", "N") or event.key == "escape":
            self.dismiss(False)
        else:
            self._on_input()
