"""Directory-backed store of tmux config snapshots.

Each snapshot is a regular file directly inside the snapshot directory; its
file name is the snapshot name.  The listing is read once when the store is
opened and cached.  Callers that write through the store re-derive the
listing with ``reopen()`` rather than patching it.

``save`` only ever creates and ``update`` only ever overwrites, so a typo in
either direction cannot destroy an existing snapshot.
"""

import contextlib
import logging
import os
import shutil
from pathlib import Path

from tmucks.reload import Reloader, reload_tmux

logger = logging.getLogger(__name__)

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)


class StoreError(Exception):
    """Base class for snapshot store failures."""


class SnapshotNotFoundError(StoreError):
    """Raised when a snapshot or the live config file does not exist."""


class SnapshotExistsError(StoreError):
    """Raised when saving under a name that is already taken."""


class StoreIOError(StoreError):
    """Raised when the filesystem rejects a read, copy, or remove."""


class InvalidNameError(StoreError):
    """Raised when a name would resolve outside the snapshot directory."""


class SnapshotStore:
    """Named snapshots of a live config file.

    Args:
        snapshot_dir: Directory holding one file per snapshot.
        live_config_path: The config file snapshots are taken from and
            applied to.
        snapshots: Sorted snapshot names, as listed at open time.
        reloader: Called with ``live_config_path`` after a successful apply.
    """

    def __init__(
        self,
        snapshot_dir: Path,
        live_config_path: Path,
        snapshots: list[str],
        reloader: Reloader = reload_tmux,
    ) -> None:
        self.snapshot_dir = snapshot_dir
        self.live_config_path = live_config_path
        self._snapshots = snapshots
        self._reloader = reloader

    @classmethod
    def open(
        cls,
        snapshot_dir: Path,
        live_config_path: Path,
        reloader: Reloader = reload_tmux,
    ) -> "SnapshotStore":
        """Create ``snapshot_dir`` if needed and read the snapshot listing."""
        try:
            snapshot_dir.mkdir(parents=True, exist_ok=True)
            names = sorted(entry.name for entry in snapshot_dir.iterdir() if entry.is_file())
        except OSError as exc:
            raise StoreIOError(f"Cannot read snapshot directory {snapshot_dir}: {exc}") from exc
        return cls(snapshot_dir, live_config_path, names, reloader)

    def reopen(self) -> "SnapshotStore":
        """Return a fresh store over the same paths with a re-read listing."""
        return SnapshotStore.open(self.snapshot_dir, self.live_config_path, self._reloader)

    @property
    def snapshots(self) -> list[str]:
        return list(self._snapshots)

    def list(self) -> list[str]:
        """Return the cached listing. Does not touch the filesystem."""
        return self.snapshots

    def __len__(self) -> int:
        return len(self._snapshots)

    def path_for(self, name: str) -> Path:
        """Return the file backing snapshot ``name``.

        Names are plain file names: path separators and the
        ``.``/``..`` entries are rejected with ``InvalidNameError``.
        """
        if not name or name in (".", "..") or any(sep in name for sep in _SEPARATORS):
            raise InvalidNameError(f"Invalid config name: {name}")
        return self.snapshot_dir / name

    def apply(self, name: str) -> None:
        """Copy snapshot ``name`` over the live config, then reload tmux."""
        source = self.path_for(name)
        if not source.is_file():
            raise SnapshotNotFoundError(f"Config file not found: {name}")
        try:
            shutil.copyfile(source, self.live_config_path)
        except OSError as exc:
            raise StoreIOError(f"Cannot apply {name}: {exc}") from exc
        logger.info("applied %s to %s", name, self.live_config_path)
        self._reloader(self.live_config_path)

    def save(self, name: str) -> None:
        """Copy the live config into a new snapshot ``name``.

        The destination is opened exclusively so an existing snapshot is
        never overwritten, even if it appeared after the existence check.
        """
        self._require_live()
        dest = self.path_for(name)
        if dest.exists():
            raise SnapshotExistsError(f"Config already exists: {name}")
        try:
            with self.live_config_path.open("rb") as src, dest.open("xb") as dst:
                shutil.copyfileobj(src, dst)
        except FileExistsError as exc:
            raise SnapshotExistsError(f"Config already exists: {name}") from exc
        except OSError as exc:
            # Drop a partial copy so the name stays free for a retry.
            with contextlib.suppress(OSError):
                dest.unlink(missing_ok=True)
            raise StoreIOError(f"Cannot save {name}: {exc}") from exc
        logger.info("saved %s as %s", self.live_config_path, name)

    def update(self, name: str) -> None:
        """Overwrite the existing snapshot ``name`` with the live config."""
        self._require_live()
        dest = self.path_for(name)
        if not dest.is_file():
            raise SnapshotNotFoundError(f"Config not found, save it first: {name}")
        try:
            shutil.copyfile(self.live_config_path, dest)
        except OSError as exc:
            raise StoreIOError(f"Cannot update {name}: {exc}") from exc
        logger.info("updated %s from %s", name, self.live_config_path)

    def delete(self, name: str) -> None:
        """Remove snapshot ``name``."""
        path = self.path_for(name)
        if not path.is_file():
            raise SnapshotNotFoundError(f"Config file not found: {name}")
        try:
            path.unlink()
        except OSError as exc:
            raise StoreIOError(f"Cannot delete {name}: {exc}") from exc
        logger.info("deleted %s", name)

    def _require_live(self) -> None:
        if not self.live_config_path.is_file():
            raise SnapshotNotFoundError(f"No tmux config file found at {self.live_config_path}")
