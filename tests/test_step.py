import io
import threading
import time

import pytest

from pluginsdk.terminal.display import Display
from pluginsdk.terminal.status import STATUS_ERROR, STATUS_ICONS, STATUS_OK, STATUS_WARN
from pluginsdk.terminal.step import TERM_ROWS, FancyStepGroup


@pytest.fixture
def group():
    buf = io.StringIO()
    sg = FancyStepGroup(display=Display(buf, interval=60))
    yield sg, buf
    sg.display.close()


def test_add_shows_message_with_spinner(group):
    sg, buf = group
    step = sg.add("building %s", "web")
    assert step.entry.text == "building web"
    assert step.entry.spinner
    assert "building web" in buf.getvalue()


def test_done_sets_ok_status(group):
    sg, buf = group
    step = sg.add("work")
    step.done()
    assert step.entry.status == STATUS_OK
    assert not step.entry.spinner
    assert step.is_done
    assert STATUS_ICONS[STATUS_OK] + " work" in buf.getvalue()
    sg.wait()
    assert sg.display.closed


def test_custom_status_kept_on_done(group):
    sg, _ = group
    step = sg.add("work")
    step.status(STATUS_WARN)
    step.done()
    assert step.entry.status == STATUS_WARN


def test_abort_sets_error_and_done_is_ignored_after(group):
    sg, _ = group
    step = sg.add("work")
    step.abort()
    assert step.entry.status == STATUS_ERROR
    step.done()
    assert step.entry.status == STATUS_ERROR
    sg.wait()
    assert sg.display.closed


def test_done_twice_counts_once(group):
    sg, _ = group
    first = sg.add("one")
    second = sg.add("two")
    first.done()
    first.done()
    assert sg._finished == 1
    second.done()
    sg.wait()
    assert sg._finished == 2


def test_wait_blocks_until_all_steps_done_from_threads(group):
    sg, _ = group
    steps = [sg.add("step %d", i) for i in range(3)]

    def finish(step):
        time.sleep(0.05)
        step.done()

    threads = [threading.Thread(target=finish, args=(s,)) for s in steps]
    for t in threads:
        t.start()
    sg.wait()
    for t in threads:
        t.join()
    assert all(s.is_done for s in steps)
    assert all(s.entry.status == STATUS_OK for s in steps)


def test_wait_without_steps_returns():
    sg = FancyStepGroup(display=Display(io.StringIO(), interval=60))
    sg.wait()
    assert sg.display.closed


def test_context_manager_waits():
    with FancyStepGroup(display=Display(io.StringIO(), interval=60)) as sg:
        step = sg.add("task")
        step.done()
    assert sg.display.closed


def test_term_output_is_cached_and_fills_body(group):
    sg, buf = group
    step = sg.add("run")
    term = step.term_output()
    assert step.term_output() is term
    term.write("hello\nworld")
    body = step.entry.body
    assert len(body) == 2
    assert body[0].startswith(" │ ")
    assert "hello" in body[0]
    assert "world" in body[1]
    assert "world" in buf.getvalue()


def test_term_output_accepts_bytes_and_strips_escapes(group):
    sg, _ = group
    step = sg.add("run")
    step.term_output().write(b"\x1b[31mred\x1b[0m text")
    assert "red text" in step.entry.body[0]


def test_term_output_scrolls(group):
    sg, _ = group
    step = sg.add("run")
    lines = [f"row{i}" for i in range(TERM_ROWS + 2)]
    step.term_output().write("\n".join(lines))
    body = step.entry.body
    assert len(body) == TERM_ROWS
    assert lines[2] in body[0]
    assert lines[-1] in body[TERM_ROWS - 1]


def test_closed_term_rejects_writes(group):
    sg, _ = group
    term = sg.add("run").term_output()
    term.close()
    with pytest.raises(ValueError):
        term.write("late")