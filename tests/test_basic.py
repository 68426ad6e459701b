import io

import pytest

from pluginsdk.terminal.basic import BasicUI
from pluginsdk.terminal.step import FancyStepGroup
from pluginsdk.terminal.table import Table, render_table
from pluginsdk.terminal.ui import (
    Input,
    NamedValue,
    with_error_style,
    with_header_style,
    with_info_style,
    with_writer,
)


def test_named_values():
    buf = io.StringIO()
    ui = BasicUI()
    ui.named_values(
        [
            NamedValue("hello", "a"),
            NamedValue("this", "is"),
            NamedValue("a", "test"),
            NamedValue("of", "foo"),
            NamedValue("the_key_value", "style"),
        ],
        with_writer(buf),
    )

    expected = """
          hello: a
           this: is
              a: test
             of: foo
  the_key_value: style

"""
    assert buf.getvalue() == expected.lstrip("\n")


def test_named_values_server():
    buf = io.StringIO()
    ui = BasicUI()
    ui.output("Server configuration:", with_header_style(), with_writer(buf))
    ui.named_values(
        [
            NamedValue("DB Path", "data.db"),
            NamedValue("gRPC Address", "127.0.0.1:1234"),
            NamedValue("HTTP Address", "127.0.0.1:1235"),
            NamedValue("URL Service", "api.alpha.waypoint.run:443 (account: token)"),
        ],
        with_writer(buf),
    )

    expected = """
==> Server configuration:
       DB Path: data.db
  gRPC Address: 127.0.0.1:1234
  HTTP Address: 127.0.0.1:1235
   URL Service: api.alpha.waypoint.run:443 (account: token)

"""
    assert buf.getvalue() == expected


def test_status_style():
    buf = io.StringIO()
    ui = BasicUI()
    ui.output("one\ntwo\n  three".strip(), with_writer(buf), with_info_style())
    assert buf.getvalue() == "    one\n    two\n      three\n"


def test_plain_output_uses_default_writer():
    out = io.StringIO()
    ui = BasicUI(out)
    ui.output("count %d", 3)
    assert out.getvalue() == "count 3\n"


def test_error_output_not_coloured_without_tty():
    out = io.StringIO()
    BasicUI(out).output("failure", with_error_style())
    assert out.getvalue() == "failure\n"


def test_input_reads_line_and_writes_prompt():
    out = io.StringIO()
    ui = BasicUI(out, stdin=io.StringIO("bob\n"))
    assert ui.input(Input(prompt="Name?")) == "bob"
    assert out.getvalue() == "Name? "


def test_input_at_end_of_stream_raises():
    ui = BasicUI(io.StringIO(), stdin=io.StringIO(""))
    with pytest.raises(EOFError):
        ui.input(Input(prompt="Name?"))


def test_not_interactive_without_tty():
    ui = BasicUI(io.StringIO(), stdin=io.StringIO("x\n"))
    assert ui.interactive() is False


def test_status_is_reused():
    ui = BasicUI(io.StringIO())
    first = ui.status()
    assert ui.status() is first
    first.close()


def test_table_matches_renderer():
    out = io.StringIO()
    tbl = Table(headers=["name"])
    tbl.rich(["api"], ["red"])
    BasicUI(out).table(tbl)
    expected = io.StringIO()
    render_table(tbl, expected, "")
    assert out.getvalue() == expected.getvalue()


def test_step_group_renders_steps():
    out = io.StringIO()
    sg = BasicUI(out).step_group()
    assert isinstance(sg, FancyStepGroup)
    step = sg.add("deploying %s", "app")
    step.done()
    sg.wait()
    assert "deploying app" in out.getvalue()
    assert sg.display.closed is True