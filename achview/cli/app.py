"""Cyclopts application and command routing for the achview CLI.

The CLI provides the following commands:
- parse: Decode a NACHA file into JSON or YAML
- entries: Print or export the ordinal-numbered entry list
- inspect: Display file header and file control summary
- list-writers: List available output formats and writers
- check-config: Validate configuration files
"""

from cyclopts import App

from achview.cli import commands

app = App(
    name="achview",
    help="Decode and browse ACH/NACHA files",
    version="0.1.0",
)

app.command(commands.parse)
app.command(commands.entries)
app.command(commands.inspect)
app.command(commands.list_writers, name="list-writers")
app.command(commands.check_config, name="check-config")
