# pluginsdk

Building blocks for plugins that report progress to a user: terminal UIs
with styled output, live statuses, step groups and tables, plus small
helpers for component results, template data and reattach configuration.
There are no third-party dependencies.

## Install

```
pip install pluginsdk
```

## Terminal output

`pluginsdk.terminal.ui` defines the abstract `UI`, `StepGroup` and `Step`
interfaces, the `NamedValue` and `Input` records, `NonInteractiveError` and
the output options. Two implementations share that interface:

- `BasicUI(writer=None, stdin=None)` in `pluginsdk.terminal.basic` writes
  coloured output (colour only when standard output is a terminal and
  `NO_COLOR` is unset), shows a spinner for statuses, draws live step groups
  and reads input from standard input (secret input through `getpass` when
  standard input is a terminal).
- `NonInteractiveUI(writer=None)` in `pluginsdk.terminal.noninteractive`
  writes plain text suitable for logs and CI; `input` raises
  `NonInteractiveError` and `interactive()` returns `False`.

```python
import io
from pluginsdk.terminal.basic import BasicUI
from pluginsdk.terminal.ui import NamedValue, with_header_style, with_writer

buf = io.StringIO()
ui = BasicUI()
ui.output("Server configuration:", with_header_style(), with_writer(buf))
ui.named_values(
    [NamedValue("DB Path", "data.db"), NamedValue("HTTP Address", "127.0.0.1:1235")],
    with_writer(buf),
)
print(buf.getvalue())
```

Messages are `%`-style format strings; the extra positional arguments fill
them in, and option values such as `with_info_style()`, `with_error_style()`,
`with_warning_style()`, `with_success_style()`, `with_style(name)` and
`with_writer(stream)` control how and where the text is written.
`interpret(msg, *args)` performs that split and returns the message, style
and writer; `format_named_values(rows)` returns the right-aligned
`name: value` text, skipping rows whose value is an empty string.

### Statuses and step groups

```python
status = ui.status()
status.update("Building image...")
status.step("ok", "Image built")
status.close()

group = ui.step_group()
step = group.add("Deploying %s", "web")
step.update("Deployed %s", "web")
step.done()
group.wait()
```

A step that ends early should call `abort()`, which marks it failed.
Statuses and step groups can also be used with `with`, which closes or
waits on them at the end of the block.

`pluginsdk.terminal.status` holds the status names (`STATUS_OK`,
`STATUS_ERROR`, `STATUS_WARN`, `STATUS_TIMEOUT`, `STATUS_ABORT`),
`SpinnerStatus` and `status_icons(environ)`, which picks emoji icons when
`WAYPOINT_FORCE_EMOJI` is set or `LANG` contains `UTF-8`, and text icons
otherwise. `pluginsdk.terminal.display` provides `Display` and
`DisplayEntry`, the in-place redrawn lines behind `FancyStepGroup` and
`FancyStep` in `pluginsdk.terminal.step`. A step's `term_output()` returns
a writer whose text is shown beneath the step (in the non-interactive UI it
is passed on with ANSI escapes removed, see `strip_ansi` and
`StripAnsiWriter`).

### Tables

```python
from pluginsdk.terminal.table import Table

tbl = Table(["Name", "State"])
tbl.rich(["web", "running"], ["green"])
ui.table(tbl)
```

`render_table(tbl, writer, style)` draws a table directly; the style
`"Simple"` drops separators and joins columns with tabs. Cell colours
`"green"`, `"yellow"` and `"red"` are recognised.

## Component helpers

- `pluginsdk.template`: `to_snake` converts field names such as
  `ImageName` to `image_name`; `template_data_from_config` turns an
  object's public fields into a snake_case dictionary (skipping names that
  start with `_` or `XXX_`); `template_data` encodes a result's data as
  JSON bytes, using its own `template_data()` method when it has one, and
  returns `None` when there is nothing to encode.
- `pluginsdk.pluginargs`: `Cleanup` collects functions to run when a call
  completes, most recently registered first; `Internal` bundles a broker,
  mappers and a `Cleanup`.
- `pluginsdk.components`: `Artifact`, `Deployment`, `Release`,
  `RunningTask` and `AccessInfo` wrap values returned from a plugin.
- `pluginsdk.reattach`: `ReattachConfig`, `ReattachConfigAddr`,
  `reattach_json` and `attach_instructions` build the text a user needs to
  set `WP_REATTACH_PLUGINS` and point the host at a running plugin.

## What this package does not do

It does not serve plugins, speak any RPC protocol, or start a plugin
process: `pluginsdk.reattach` only formats the attach information. It
does not choose a UI on its own; pick `BasicUI` or `NonInteractiveUI`
yourself. It installs no commands.

## Tests

```
pip install -e ".[test]"
pytest
```