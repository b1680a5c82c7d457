"""Snapshot list and stats widgets.

Both are plain renderers: the session owns the selection, so the widgets
hold no cursor of their own and never take focus.
"""

from rich.text import Text
from textual.widgets import Static

from tmucks.constants import EMPTY_HINT, SNAPSHOT_SUFFIX

_MARKER = "▶"


class SnapshotList(Static):
    """The list of saved configs with a marker on the selected entry.

    Names without the ``.conf`` suffix are shown in yellow so stray files
    in the snapshot directory stand out.
    """

    can_focus = False

    def on_mount(self) -> None:
        self.border_title = "configurations"

    def show(self, names: list[str], selection: int | None) -> None:
        """Replace the rendered list."""
        if not names:
            self.update(Text(EMPTY_HINT, style="dim"))
            return
        text = Text()
        for i, name in enumerate(names):
            if i:
                text.append("\n")
            if i == selection:
                text.append(f" {_MARKER} ", style="bold green")
                text.append(name, style="bold reverse")
            else:
                style = "" if name.endswith(SNAPSHOT_SUFFIX) else "yellow"
                text.append("   ")
                text.append(name, style=style)
        self.update(text)


class StatsPanel(Static):
    """Count of saved configs and the position of the selection."""

    can_focus = False

    def on_mount(self) -> None:
        self.border_title = "stats"

    def show(self, count: int, selection: int | None) -> None:
        if count == 0:
            self.update(Text("no configs", style="red"))
            return
        position = "-" if selection is None else str(selection + 1)
        text = Text()
        text.append("configs: ", style="dim")
        text.append(str(count), style="bold cyan")
        text.append("\n")
        text.append("selected: ", style="dim")
        text.append(f"{position}/{count}", style="bold cyan")
        self.update(text)
