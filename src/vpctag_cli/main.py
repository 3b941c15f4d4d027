import logging
import sys

import typer  # microframework de CLI = Command Line Interface
import typer_di

from .commands import apply, current, plan, whoami
from .version import version_callback

app = typer_di.TyperDI(help="Crawl a VPC resource graph, plan and apply tags.")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="VPCTAG_LOG_LEVEL",
        help="Nível de log no stderr (DEBUG, INFO, WARNING, ERROR).",
    ),
):
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


app.command("current")(current)
app.command("plan")(plan)
app.command("apply")(apply)
app.command("whoami")(whoami)


if __name__ == "__main__":
    app()
