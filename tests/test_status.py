import io
import time

from pluginsdk.terminal.status import (
    EMOJI_STATUS,
    ENV_FORCE_EMOJI,
    SPINNER_FRAMES,
    STATUS_OK,
    STATUS_WARN,
    TEXT_STATUS,
    SpinnerStatus,
    status_icons,
)


class _TtyBuffer(io.StringIO):
    def isatty(self):
        return True


def test_status_icons_emoji_for_utf8_lang():
    assert status_icons({"LANG": "en_US.UTF-8"}) == EMOJI_STATUS


def test_status_icons_forced_emoji():
    assert status_icons({ENV_FORCE_EMOJI: "1"}) == EMOJI_STATUS


def test_status_icons_text_otherwise():
    assert status_icons({"LANG": "C"}) == TEXT_STATUS
    assert status_icons({}) == TEXT_STATUS


def test_step_ok_writes_icon_and_message():
    buf = io.StringIO()
    status = SpinnerStatus(writer=buf)
    status.update("working")
    status.step(STATUS_OK, "done")
    status.close()
    assert buf.getvalue() == f"{EMOJI_STATUS[STATUS_OK]} done\n"


def test_step_warn_is_padded():
    buf = io.StringIO()
    status = SpinnerStatus(writer=buf)
    status.step(STATUS_WARN, "careful")
    assert buf.getvalue() == f"{EMOJI_STATUS[STATUS_WARN]}  careful\n"


def test_step_custom_status_written_verbatim():
    buf = io.StringIO()
    status = SpinnerStatus(writer=buf)
    status.step("deployed", "thing")
    assert buf.getvalue() == "deployed thing\n"


def test_pause_and_start():
    status = SpinnerStatus(writer=io.StringIO())
    status.update("working")
    assert status.pause() is True
    assert status.pause() is False
    status.start()
    assert status.pause() is True
    status.close()


def test_close_stops_running():
    status = SpinnerStatus(writer=io.StringIO())
    status.update("working")
    status.close()
    assert status.pause() is False


def test_context_manager_closes():
    with SpinnerStatus(writer=io.StringIO()) as status:
        status.update("working")
    assert status.pause() is False


def test_spinner_draws_on_terminal():
    buf = _TtyBuffer()
    status = SpinnerStatus(writer=buf, interval=0.01)
    status.update("working")
    deadline = time.monotonic() + 2
    while "working" not in buf.getvalue() and time.monotonic() < deadline:
        time.sleep(0.01)
    status.close()
    value = buf.getvalue()
    assert SPINNER_FRAMES[0] in value
    assert " working" in value
    assert value.endswith("\r\x1b[K")