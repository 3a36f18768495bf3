"""Main CLI application using Cyclopts."""

import cyclopts

from examcell.cli.commands import db, seed, server, token

app = cyclopts.App(
    name="examcell",
    help="Exam cell question paper workflow - CLI",
)

app.command(server.app, name="server")
app.command(db.app, name="db")
app.command(seed.app, name="seed")
app.command(token.app, name="token")


def main() -> None:
    app()
