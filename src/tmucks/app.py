"""Interactive TUI over a snapshot session."""

from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from tmucks.config import load_theme, save_theme
from tmucks.constants import APP_SUBTITLE, APP_TITLE
from tmucks.models import Browsing
from tmucks.screens.confirm_update import ConfirmUpdateScreen
from tmucks.screens.help import HelpScreen
from tmucks.screens.save_name import SaveNameScreen
from tmucks.session import Session
from tmucks.widgets.main_view import MainView
from tmucks.widgets.snapshot_list import SnapshotList, StatsPanel
from tmucks.widgets.status_bar import StatusBar


class TmucksApp(App):
    """tmucks: tmux config snapshot manager.

    All state lives in the ``Session``; the app only maps keys to session
    operations and re-renders afterwards.  Each handled key counts as one
    loop iteration: the session's notification is ticked, then the widgets
    are redrawn.
    """

    CSS_PATH = "app.tcss"
    TITLE = APP_TITLE
    SUB_TITLE = APP_SUBTITLE

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("j", "select_next", show=False),
        Binding("down", "select_next", "Next"),
        Binding("k", "select_previous", show=False),
        Binding("up", "select_previous", "Prev"),
        Binding("enter", "apply", "Apply"),
        Binding("s", "save", "Save"),
        Binding("u", "update", "Update"),
        Binding("d", "delete", "Delete"),
        Binding("?", "toggle_help", "Help"),
    ]

    def __init__(self, session: Session, settings_path: Path | None = None) -> None:
        super().__init__()
        self.session = session
        self._settings_path = settings_path

    def compose(self) -> ComposeResult:
        yield Header()
        yield MainView(id="main")
        yield StatusBar(id="status")
        yield Footer()

    def on_mount(self) -> None:
        if self._settings_path is not None:
            saved_theme = load_theme(self._settings_path)
            if saved_theme:
                self.theme = saved_theme
        self._sync()

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes whenever the theme is changed."""
        if self._settings_path is not None:
            save_theme(self._settings_path, theme)

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        """Disable browsing bindings while a sub-mode is active."""
        if action == "quit":
            return isinstance(self.session.mode, Browsing)
        return True

    def on_key(self, event: events.Key) -> None:
        # Unbound keys still advance the loop and may expire the notification.
        self._sync()

    def _sync(self) -> None:
        """Tick the notification and redraw from the session."""
        session = self.session
        session.tick()
        # Query the base screen; a modal may still be on top during callbacks.
        base = self.screen_stack[0]
        base.query_one("#stats", StatsPanel).show(len(session.snapshots), session.selection)
        base.query_one("#snapshots", SnapshotList).show(session.snapshots, session.selection)
        base.query_one("#status", StatusBar).show(session.notification)

    def action_select_next(self) -> None:
        self.session.select_next()
        self._sync()

    def action_select_previous(self) -> None:
        self.session.select_previous()
        self._sync()

    def action_apply(self) -> None:
        self.session.apply_selected()
        self._sync()

    def action_delete(self) -> None:
        self.session.delete_selected()
        self._sync()

    def action_save(self) -> None:
        """Prompt for a name and save the live config under it."""
        self.session.begin_save()
        self._sync()

        def on_done(confirmed: bool | None) -> None:
            if confirmed:
                self.session.confirm_save()
            else:
                self.session.cancel_save()
            self._sync()

        self.push_screen(SaveNameScreen(self.session, self._sync), on_done)

    def action_update(self) -> None:
        """Confirm, then overwrite the selected config with the live config."""
        self.session.begin_update()
        self._sync()
        target = self.session.pending_update_target
        if target is None:
            return

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self.session.confirm_update()
            else:
                self.session.cancel_update()
            self._sync()

        self.push_screen(
            ConfirmUpdateScreen(target, self.session.store.live_config_path, self._sync),
            on_confirm,
        )

    def action_toggle_help(self) -> None:
        self.push_screen(HelpScreen())
