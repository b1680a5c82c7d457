"""Main view: stats panel stacked above the snapshot list."""

from textual.app import ComposeResult
from textual.containers import Vertical

from tmucks.widgets.snapshot_list import SnapshotList, StatsPanel


class MainView(Vertical):
    """Composes the stats panel and the snapshot list into a single panel."""

    def compose(self) -> ComposeResult:
        yield StatsPanel(id="stats")
        yield SnapshotList(id="snapshots")
