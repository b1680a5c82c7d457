"""Session domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Browsing:
    """Default mode: navigating the snapshot list."""


@dataclass(frozen=True)
class EnteringSaveName:
    """Typing the name for a new snapshot of the live config."""

    buffer: str = ""


@dataclass(frozen=True)
class ConfirmingUpdate:
    """Waiting for y/n before overwriting ``target`` with the live config."""

    target: str


# Each mode carries only its own payload, so a pending update target can
# never coexist with a name buffer or with browsing.
Mode = Browsing | EnteringSaveName | ConfirmingUpdate


@dataclass
class Notification:
    """Status text shown to the user.

    ``set_at`` is the monotonic time the text was set, or None for the
    default message, which never expires.
    """

    text: str
    set_at: float | None = None

    @property
    def is_error(self) -> bool:
        return self.text.startswith("-")

    @property
    def is_success(self) -> bool:
        return self.text.startswith("+")
