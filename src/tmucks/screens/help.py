"""Help overlay screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from tmucks.constants import APP_TITLE, HELP_TEXT


class HelpScreen(ModalScreen[None]):
    """Key reference for the browsing view. Any of escape, ? or q closes it."""

    BINDINGS = [
        Binding("escape", "dismiss", show=False),
        Binding("?", "dismiss", show=False),
        Binding("q", "dismiss", show=False),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="help-container"):
            yield Label(f"{APP_TITLE} keys", id="help-title")
            yield Static(HELP_TEXT, id="help-text", markup=False)

    def on_click(self) -> None:
        self.dismiss()
