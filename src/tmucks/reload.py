"""Best-effort reload of a running tmux server.

Shells out to ``tmux source-file <live config>``.  The reload is advisory:
the snapshot copy having succeeded is what makes an apply succeed, so every
failure here (tmux not installed, no server running, bad config) is logged
and dropped.
"""

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from tmucks.constants import RELOAD_COMMAND

logger = logging.getLogger(__name__)

Reloader = Callable[[Path], None]


def reload_tmux(config_path: Path, command: Sequence[str] = RELOAD_COMMAND) -> None:
    """Ask tmux to re-read ``config_path``. Never raises."""
    cmd = [*command, str(config_path)]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("reload skipped: %s", exc)
        return
    if result.returncode != 0:
        logger.debug(
            "reload failed (exit %s): %s: %s",
            result.returncode,
            " ".join(cmd),
            result.stderr.strip(),
        )


def make_reloader(command: Sequence[str] = RELOAD_COMMAND) -> Reloader:
    """Bind a reload command, e.g. one taken from the settings file."""
    bound = list(command)

    def _reload(config_path: Path) -> None:
        reload_tmux(config_path, bound)

    return _reload
