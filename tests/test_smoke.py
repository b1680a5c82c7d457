"""Headless TUI smoke tests covering the interactive journeys."""

from pathlib import Path
from typing import cast

from tmucks.app import TmucksApp
from tmucks.constants import DEFAULT_STATUS, NOTIFICATION_TIMEOUT, SAVE_PROMPT
from tmucks.models import Browsing, ConfirmingUpdate, EnteringSaveName
from tmucks.screens.confirm_update import ConfirmUpdateScreen
from tmucks.screens.help import HelpScreen
from tmucks.screens.save_name import SaveNameScreen
from tmucks.session import Session
from tmucks.store import SnapshotStore
from tmucks.widgets.status_bar import StatusBar

LIVE_CONTENT = b"set -g mouse on\n"


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_app(tmp_path: Path, *names: str, clock: FakeClock | None = None) -> TmucksApp:
    snapshot_dir = tmp_path / "tmucks"
    snapshot_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (snapshot_dir / name).write_bytes(f"# {name}\n".encode())
    live = tmp_path / ".tmux.conf"
    live.write_bytes(LIVE_CONTENT)
    store = SnapshotStore.open(snapshot_dir, live, reloader=lambda path: None)
    if clock is None:
        return TmucksApp(Session(store))
    return TmucksApp(Session(store, clock=clock))


async def _type(pilot, text: str) -> None:
    for ch in text:
        await pilot.press(ch)


class TestMount:
    async def test_first_entry_selected_on_mount(self, tmp_path: Path):
        """
        Given three snapshots on disk
        When the UI mounts
        Then the session lists them with the first selected
        """
        async with _make_app(tmp_path, "a.conf", "b.conf", "c.conf").run_test() as pilot:
            app = cast(TmucksApp, pilot.app)
            assert app.session.snapshots == ["a.conf", "b.conf", "c.conf"]
            assert app.session.selection == 0

    async def test_empty_store_mounts(self, tmp_path: Path):
        """
        Given an empty snapshot directory
        When the UI mounts and navigation keys are pressed
        Then nothing is selected and the app keeps running
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("j", "k", "enter", "d")
            app = cast(TmucksApp, pilot.app)
            assert app.session.selection is None
            assert app.is_running


class TestNavigation:
    async def test_j_and_down_move_down(self, tmp_path: Path):
        """
        Given the first of three entries is selected
        When j and then down are pressed
        Then the third entry is selected
        """
        async with _make_app(tmp_path, "a.conf", "b.conf", "c.conf").run_test() as pilot:
            await pilot.press("j", "down")
            assert cast(TmucksApp, pilot.app).session.selection == 2

    async def test_k_wraps_to_bottom(self, tmp_path: Path):
        """
        Given the first entry is selected
        When k is pressed
        Then the selection wraps to the last entry
        """
        async with _make_app(tmp_path, "a.conf", "b.conf", "c.conf").run_test() as pilot:
            await pilot.press("k")
            assert cast(TmucksApp, pilot.app).session.selection == 2

    async def test_up_moves_up(self, tmp_path: Path):
        """
        Given the second entry is selected
        When up is pressed
        Then the first entry is selected
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("j", "up")
            assert cast(TmucksApp, pilot.app).session.selection == 0


class TestApplyAndDelete:
    async def test_enter_applies_selected(self, tmp_path: Path):
        """
        Given b.conf is selected
        When enter is pressed
        Then the live config holds b.conf's content
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("j", "enter")
            app = cast(TmucksApp, pilot.app)
            assert app.session.store.live_config_path.read_bytes() == b"# b.conf\n"
            assert app.session.status == "+ applied config: b.conf"

    async def test_d_deletes_selected(self, tmp_path: Path):
        """
        Given a.conf is selected
        When d is pressed
        Then a.conf is removed and b.conf takes its place
        """
        async with _make_app(tmp_path, "a.conf", "b.conf", "c.conf").run_test() as pilot:
            await pilot.press("d")
            app = cast(TmucksApp, pilot.app)
            assert app.session.snapshots == ["b.conf", "c.conf"]
            assert app.session.selected_name == "b.conf"
            assert not (tmp_path / "tmucks" / "a.conf").exists()


class TestSaveFlow:
    async def test_s_opens_name_prompt(self, tmp_path: Path):
        """
        Given the browsing view
        When s is pressed
        Then the name prompt is shown and the session is entering a name
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s")
            app = cast(TmucksApp, pilot.app)
            assert isinstance(app.screen, SaveNameScreen)
            assert app.session.mode == EnteringSaveName("")

    async def test_type_and_enter_saves(self, tmp_path: Path):
        """
        Given an empty directory
        When the user presses s, types "work", and presses enter
        Then work.conf exists and is selected
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s")
            await _type(pilot, "work")
            await pilot.press("enter")
            await pilot.pause()
            app = cast(TmucksApp, pilot.app)
            assert app.session.snapshots == ["work.conf"]
            assert app.session.selection == 0
            assert app.session.mode == Browsing()
            assert (tmp_path / "tmucks" / "work.conf").read_bytes() == LIVE_CONTENT
            assert not isinstance(app.screen, SaveNameScreen)

    async def test_browse_keys_type_while_naming(self, tmp_path: Path):
        """
        Given the name prompt is open
        When q, j and d are typed
        Then they land in the buffer instead of quitting, moving or deleting
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("s")
            await _type(pilot, "qjd")
            app = cast(TmucksApp, pilot.app)
            assert app.is_running
            assert app.session.name_buffer == "qjd"
            assert app.session.selection == 0
            assert (tmp_path / "tmucks" / "a.conf").exists()

    async def test_backspace_edits_buffer(self, tmp_path: Path):
        """
        Given "works" has been typed
        When backspace is pressed
        Then the buffer reads "work"
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s")
            await _type(pilot, "works")
            await pilot.press("backspace")
            assert cast(TmucksApp, pilot.app).session.name_buffer == "work"

    async def test_escape_cancels(self, tmp_path: Path):
        """
        Given a partially typed name
        When escape is pressed
        Then nothing is saved and the default status returns
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s")
            await _type(pilot, "work")
            await pilot.press("escape")
            await pilot.pause()
            app = cast(TmucksApp, pilot.app)
            assert app.session.mode == Browsing()
            assert app.session.status == DEFAULT_STATUS
            assert app.session.snapshots == []
            assert app.check_action("quit", ()) is True

    async def test_quit_disabled_while_naming(self, tmp_path: Path):
        """
        Given the name prompt is open
        When the app checks whether quit is allowed
        Then it is not
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s")
            assert pilot.app.check_action("quit", ()) is False


class TestUpdateFlow:
    async def test_u_opens_confirmation(self, tmp_path: Path):
        """
        Given b.conf is selected
        When u is pressed
        Then the confirmation popup is shown for b.conf
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("j", "u")
            app = cast(TmucksApp, pilot.app)
            assert isinstance(app.screen, ConfirmUpdateScreen)
            assert app.session.mode == ConfirmingUpdate("b.conf")

    async def test_y_overwrites(self, tmp_path: Path):
        """
        Given the update popup for b.conf
        When y is pressed
        Then b.conf holds the live content
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("j", "u", "y")
            await pilot.pause()
            app = cast(TmucksApp, pilot.app)
            assert (tmp_path / "tmucks" / "b.conf").read_bytes() == LIVE_CONTENT
            assert app.session.mode == Browsing()
            assert app.session.status == "+ updated config: b.conf"

    async def test_n_leaves_store_unchanged(self, tmp_path: Path):
        """
        Given the update popup for b.conf
        When n is pressed
        Then b.conf is unchanged and the default status is shown
        """
        async with _make_app(tmp_path, "a.conf", "b.conf").run_test() as pilot:
            await pilot.press("j", "u", "n")
            await pilot.pause()
            app = cast(TmucksApp, pilot.app)
            assert (tmp_path / "tmucks" / "b.conf").read_bytes() == b"# b.conf\n"
            assert app.session.mode == Browsing()
            assert app.session.status == DEFAULT_STATUS

    async def test_u_without_selection_stays_browsing(self, tmp_path: Path):
        """
        Given an empty directory
        When u is pressed
        Then no popup opens and an error status is shown
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("u")
            app = cast(TmucksApp, pilot.app)
            assert not isinstance(app.screen, ConfirmUpdateScreen)
            assert app.session.status.startswith("- error: ")


class TestHelp:
    async def test_question_mark_opens_and_escape_closes(self, tmp_path: Path):
        """
        Given the browsing view
        When ? is pressed and then escape
        Then the help overlay opens and closes again
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("question_mark")
            assert isinstance(pilot.app.screen, HelpScreen)
            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(pilot.app.screen, HelpScreen)


class TestExpiryInsidePopups:
    async def test_prompt_expires_while_typing(self, tmp_path: Path):
        """
        Given the name prompt has been open past the notification timeout
        When another character is typed
        Then the status reverts to the default while the prompt stays open
        """
        clock = FakeClock()
        async with _make_app(tmp_path, clock=clock).run_test() as pilot:
            await pilot.press("s")
            app = cast(TmucksApp, pilot.app)
            assert app.session.status == SAVE_PROMPT

            clock.advance(NOTIFICATION_TIMEOUT + 1)
            await pilot.press("w")

            assert app.session.status == DEFAULT_STATUS
            assert app.session.mode == EnteringSaveName("w")
            status_bar = app.screen_stack[0].query_one("#status", StatusBar)
            assert status_bar.shown.plain == DEFAULT_STATUS

    async def test_result_expires_inside_update_popup(self, tmp_path: Path):
        """
        Given an apply result is showing and the update popup is open
        When an unrelated key is pressed after the timeout
        Then the result is cleared and the popup is still waiting for y/n
        """
        clock = FakeClock()
        async with _make_app(tmp_path, "a.conf", clock=clock).run_test() as pilot:
            await pilot.press("enter", "u")
            app = cast(TmucksApp, pilot.app)
            assert app.session.status == "+ applied config: a.conf"

            clock.advance(NOTIFICATION_TIMEOUT + 1)
            await pilot.press("x")

            assert app.session.status == DEFAULT_STATUS
            assert app.session.mode == ConfirmingUpdate("a.conf")


class TestLiteralStatusText:
    async def test_markup_in_typed_name_does_not_crash(self, tmp_path: Path):
        """
        Given the name prompt
        When "[/]" is typed and enter is pressed
        Then the app keeps running and the error shows the name verbatim
        """
        async with _make_app(tmp_path).run_test() as pilot:
            await pilot.press("s", "left_square_bracket", "slash", "right_square_bracket")
            await pilot.press("enter")
            await pilot.pause()
            app = cast(TmucksApp, pilot.app)
            assert app.is_running
            assert app.session.status.startswith("- error: ")
            assert "[/].conf" in app.session.status
            assert app.query_one("#status", StatusBar).shown.plain == app.session.status

    async def test_markup_in_file_name_is_not_interpreted(self, tmp_path: Path):
        """
        Given a snapshot file named "[bold]x.conf"
        When it is applied
        Then the status bar shows the tag as typed
        """
        async with _make_app(tmp_path, "[bold]x.conf").run_test() as pilot:
            await pilot.press("enter")
            app = cast(TmucksApp, pilot.app)
            expected = "+ applied config: [bold]x.conf"
            assert app.session.status == expected
            assert app.query_one("#status", StatusBar).shown.plain == expected
