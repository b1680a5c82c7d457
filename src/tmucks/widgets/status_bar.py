"""Status bar showing the session notification."""

from rich.text import Text
from textual.widgets import Static

from tmucks.models import Notification


class StatusBar(Static):
    """One-line status area.

    Success messages (``+ ...``) are tinted green and errors (``- ...``)
    red via the ``-success`` / ``-error`` classes.  The text is rendered
    literally, since it carries user-typed names and OS error messages.
    """

    can_focus = False
    shown: Text = Text()

    def on_mount(self) -> None:
        self.border_title = "status"

    def show(self, notification: Notification) -> None:
        self.shown = Text(notification.text)
        self.update(self.shown)
        self.set_class(notification.is_success, "-success")
        self.set_class(notification.is_error, "-error")
