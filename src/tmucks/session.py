"""Interactive session state over a snapshot store.

The session owns the store, the current selection, the input mode, and the
status notification.  Every operation is safe to call in any mode: calls
that do not apply to the current mode, or that need a selection when there
is none, leave the state untouched.

Store errors never escape a session operation.  They are reported through
the notification as ``- error: <message>`` and the session returns to (or
stays in) ``Browsing``.

After any write that can change the listing the store is reopened and the
selection reconciled against the fresh listing; the cached list is never
patched in place.

Notifications expire lazily: ``tick()`` compares the stored timestamp with
the clock and is meant to be called once per input event.  There is no
timer, so an expired message stays on screen until the next event.
"""

import logging
import time
from collections.abc import Callable

from tmucks.constants import (
    DEFAULT_STATUS,
    ERROR_PREFIX,
    NOTIFICATION_TIMEOUT,
    SAVE_PROMPT,
    SUCCESS_PREFIX,
)
from tmucks.domain.names import ensure_conf_extension
from tmucks.models import Browsing, ConfirmingUpdate, EnteringSaveName, Mode, Notification
from tmucks.store import SnapshotStore, StoreError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Session:
    """State machine driving the interactive snapshot browser."""

    def __init__(
        self,
        store: SnapshotStore,
        clock: Clock = time.monotonic,
        notification_timeout: float = NOTIFICATION_TIMEOUT,
        default_message: str = DEFAULT_STATUS,
    ) -> None:
        self.store = store
        self._clock = clock
        self._timeout = notification_timeout
        self._default_message = default_message
        self.mode: Mode = Browsing()
        self.selection: int | None = 0 if len(store) else None
        self.notification = Notification(default_message)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def snapshots(self) -> list[str]:
        return self.store.snapshots

    @property
    def selected_name(self) -> str | None:
        if self.selection is None:
            return None
        return self.store.snapshots[self.selection]

    @property
    def name_buffer(self) -> str:
        return self.mode.buffer if isinstance(self.mode, EnteringSaveName) else ""

    @property
    def pending_update_target(self) -> str | None:
        return self.mode.target if isinstance(self.mode, ConfirmingUpdate) else None

    @property
    def default_message(self) -> str:
        return self._default_message

    @property
    def status(self) -> str:
        return self.notification.text

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def set_notification(self, text: str) -> None:
        """Show ``text`` until it expires."""
        self.notification = Notification(text, self._clock())

    def reset_notification(self) -> None:
        """Restore the default message immediately."""
        self.notification = Notification(self._default_message)

    def tick(self) -> None:
        """Expire the current notification once its timeout has elapsed."""
        set_at = self.notification.set_at
        if set_at is not None and self._clock() - set_at >= self._timeout:
            self.reset_notification()

    def _succeed(self, message: str) -> None:
        self.set_notification(f"{SUCCESS_PREFIX}{message}")

    def _fail(self, message: object) -> None:
        self.set_notification(f"{ERROR_PREFIX}{message}")

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def select_next(self) -> None:
        """Move the selection down one entry, wrapping to the top."""
        count = len(self.store)
        if not isinstance(self.mode, Browsing) or count == 0:
            return
        self.selection = 0 if self.selection is None else (self.selection + 1) % count

    def select_previous(self) -> None:
        """Move the selection up one entry, wrapping to the bottom."""
        count = len(self.store)
        if not isinstance(self.mode, Browsing) or count == 0:
            return
        self.selection = 0 if self.selection is None else (self.selection - 1 + count) % count

    def apply_selected(self) -> None:
        """Copy the selected snapshot over the live config."""
        name = self.selected_name
        if not isinstance(self.mode, Browsing) or name is None:
            return
        try:
            self.store.apply(name)
        except StoreError as exc:
            self._fail(exc)
            return
        self._succeed(f"applied config: {name}")

    def delete_selected(self) -> None:
        """Delete the selected snapshot and reconcile the selection.

        The selection keeps its index when that is still valid, otherwise
        moves to the new last entry, or clears when the list is empty.
        """
        name = self.selected_name
        if not isinstance(self.mode, Browsing) or name is None:
            return
        try:
            self.store.delete(name)
        except StoreError as exc:
            self._fail(exc)
            return
        self._succeed(f"deleted config: {name}")
        self._reload()

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def begin_save(self) -> None:
        if not isinstance(self.mode, Browsing):
            return
        self.mode = EnteringSaveName()
        self.set_notification(SAVE_PROMPT)

    def type_char(self, char: str) -> None:
        if isinstance(self.mode, EnteringSaveName):
            self.mode = EnteringSaveName(self.mode.buffer + char)

    def backspace(self) -> None:
        if isinstance(self.mode, EnteringSaveName):
            self.mode = EnteringSaveName(self.mode.buffer[:-1])

    def confirm_save(self) -> None:
        """Save the live config under the typed name.

        The name is stripped and given the ``.conf`` suffix if missing.  On
        success the listing is reloaded and the first entry selected.
        """
        if not isinstance(self.mode, EnteringSaveName):
            return
        raw = self.mode.buffer.strip()
        self.mode = Browsing()
        if not raw:
            self._fail("name cannot be empty")
            return

        name = ensure_conf_extension(raw)
        try:
            self.store.save(name)
        except StoreError as exc:
            self._fail(exc)
            return
        self._succeed(f"saved current config as: {name}")
        if self._reload() and len(self.store):
            self.selection = 0

    def cancel_save(self) -> None:
        if not isinstance(self.mode, EnteringSaveName):
            return
        self.mode = Browsing()
        self.reset_notification()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def begin_update(self) -> None:
        """Ask for confirmation before overwriting the selected snapshot."""
        if not isinstance(self.mode, Browsing):
            return
        name = self.selected_name
        if name is None:
            self._fail("no config selected for update")
            return
        self.mode = ConfirmingUpdate(name)

    def confirm_update(self) -> None:
        if not isinstance(self.mode, ConfirmingUpdate):
            return
        target = self.mode.target
        self.mode = Browsing()
        try:
            self.store.update(target)
        except StoreError as exc:
            self._fail(exc)
            return
        self._succeed(f"updated config: {target}")

    def cancel_update(self) -> None:
        if not isinstance(self.mode, ConfirmingUpdate):
            return
        self.mode = Browsing()
        self.reset_notification()

    # ------------------------------------------------------------------
    # Re-derivation
    # ------------------------------------------------------------------

    def _reload(self) -> bool:
        """Reopen the store and clamp the selection to the new listing.

        Returns False, keeping the previous store, if the directory could
        not be re-read.
        """
        try:
            self.store = self.store.reopen()
        except StoreError as exc:
            logger.warning("snapshot list reload failed: %s", exc)
            self._fail(exc)
            return False
        count = len(self.store)
        if count == 0:
            self.selection = None
        elif self.selection is None:
            self.selection = 0
        else:
            self.selection = min(self.selection, count - 1)
        return True
