"""Main CLI application using Cyclopts.

Operator tooling: runs the API server and manages the database directly.
"""

import cyclopts

from ht6.cli.commands import db, server

app = cyclopts.App(
    name="ht6",
    help="HT6 hackathon backend - CLI",
)

app.command(server.app, name="server")
app.command(db.app, name="db")
