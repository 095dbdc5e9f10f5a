from __future__ import annotations

import typer

from gno_converter.cli.commands.convert import ged_to_gno_command, gno_to_ged_command
from gno_converter.cli.commands.stats import stats_command

app = typer.Typer(
    name="gno",
    help="GEDCOM <-> GNO XML converter",
    add_completion=False,
)

app.command("ged-to-gno")(ged_to_gno_command)
app.command("gno-to-ged")(gno_to_ged_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
