import json
from typing import Any, Tuple

import typer
import yaml

from vpctag.config import ServiceClients, build_session
from vpctag.engine.identity_engine import get_current_aws_identity
from vpctag.models import AwsIdentity

from ..params import AwsOptions

# ANSI colors
RESET   = "\033[0m"
BOLD    = "\033[1m"

CYAN    = "\033[36m"
GREEN   = "\033[32m"
YELLOW  = "\033[33m"
MAGENTA = "\033[35m"
RED     = "\033[31m"
GREY    = "\033[90m"

RULE = GREY + "─────────────────────────────────────────────" + RESET


def emit(document: Any, output: str) -> bool:
    """
    Escreve o documento em json/yaml no stdout. Devolve False se o formato
    for "text" (quem chamou imprime a versão bonita).
    """
    if output == "json":
        typer.echo(json.dumps(document, indent=2, ensure_ascii=False))
        return True
    if output == "yaml":
        typer.echo(yaml.safe_dump(document, sort_keys=False, allow_unicode=True))
        return True
    return False


def fail(title: str, error: BaseException) -> None:
    """
    Erro fatal: imprime no stderr e encerra com código 1.
    """
    typer.echo("", err=True)
    typer.echo(RULE, err=True)
    typer.echo(f"{RED}{BOLD}{title}{RESET}", err=True)
    typer.echo(RULE, err=True)
    typer.echo(f"  {error}", err=True)
    typer.echo("", err=True)
    raise typer.Exit(code=1)


def resolve_aws(options: AwsOptions) -> Tuple[AwsIdentity, ServiceClients]:
    """
    Monta a sessão uma vez, resolve identidade/região e cria os clients.
    """
    session = build_session(profile=options.profile, region=options.region)
    identity = get_current_aws_identity(profile=options.profile, session=session)
    return identity, ServiceClients.from_session(session)
