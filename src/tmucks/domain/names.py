"""Pure helpers for snapshot names."""

from tmucks.constants import SNAPSHOT_SUFFIX


def ensure_conf_extension(name: str) -> str:
    """Return ``name`` with the snapshot suffix appended if it is missing.

    ``work`` becomes ``work.conf``; ``work.conf`` is returned unchanged.
    """
    if name.endswith(SNAPSHOT_SUFFIX):
        return name
    return f"{name}{SNAPSHOT_SUFFIX}"

