"""Modal prompt for the new snapshot's name."""

from collections.abc import Callable

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, Static

from tmucks.constants import SAVE_KEYS
from tmucks.session import Session


class SaveNameScreen(ModalScreen[bool]):
    """Modal that collects a snapshot name into the session's name buffer.

    Every key is consumed here so browsing bindings (``q``, ``j``, ``d``…)
    type characters instead of firing.  Dismisses with True on Enter and
    False on Escape; the caller confirms or cancels the save on the session.
    ``on_input`` runs after every other key so the app keeps ticking the
    session while the prompt is open.
    """

    def __init__(self, session: Session, on_input: Callable[[], None]) -> None:
        super().__init__()
        self._session = session
        self._on_input = on_input

    def compose(self) -> ComposeResult:
        with Vertical(id="save-container"):
            yield Label("save as:", id="save-title")
            yield Static(id="save-buffer")
            yield Label(SAVE_KEYS, id="save-hint")

    def on_mount(self) -> None:
        self._show_buffer()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if event.key == "enter":
            self.dismiss(True)
            return
        if event.key == "escape":
            self.dismiss(False)
            return
        if event.key == "backspace":
            self._session.backspace()
        elif event.is_printable and event.character:
            self._session.type_char(event.character)
        self._on_input()
        self._show_buffer()

    def _show_buffer(self) -> None:
        text = Text(self._session.name_buffer)
        text.append("_", style="blink")
        self.query_one("#save-buffer", Static).update(text)
