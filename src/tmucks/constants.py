"""Application-wide constants."""

APP_TITLE = "tmucks"
APP_SUBTITLE = "tmux config manager"

SNAPSHOT_SUFFIX = ".conf"

# Seconds a status notification stays visible before reverting to the default.
NOTIFICATION_TIMEOUT: float = 5.0

RELOAD_COMMAND: list[str] = ["tmux", "source-file"]

DEFAULT_STATUS = "j/k navigate · enter apply · s save · u update · d delete · q quit"
SAVE_PROMPT = f"enter config name (without {SNAPSHOT_SUFFIX}): "

SUCCESS_PREFIX = "+ "
ERROR_PREFIX = "- error: "

SAVE_KEYS = "enter save  esc cancel"
UPDATE_KEYS = "y confirm  n/esc cancel"

EMPTY_HINT = """\
 no configuration files found

 add your first config:
   $ cp ~/.tmux.conf ~/.config/tmucks/default.conf

 press s to save current config\
"""

HELP_TEXT = """\
 Navigation
 ──────────────────────────────
 j / ↓        Move down
 k / ↑        Move up

 Snapshots
 ──────────────────────────────
 Enter        Apply selected config
 s            Save current config as…
 u            Update selected config
 d            Delete selected config

 General
 ──────────────────────────────
 ?            Toggle this help
 q            Quit\
"""
