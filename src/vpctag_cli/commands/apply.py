from pathlib import Path

import typer
import typer_di

from vpctag.config import ServiceClients, build_session
from vpctag.engine.tag_engine import apply_tag_plan
from vpctag.errors import VpcTagError
from vpctag.models import FAIL, SUCCESS, ApplyResult
from vpctag.tag_spec import load_tag_plan

from ..params import AwsOptions, aws_params, output_params
from .console import BOLD, CYAN, GREEN, GREY, MAGENTA, RED, RESET, RULE, YELLOW, emit, fail


def _print_apply(result: ApplyResult) -> None:
    mode = "DRY RUN" if result.dry_run else "APPLY"

    print()
    print(RULE)
    print(f"{YELLOW}{BOLD}MODE:   {mode}{RESET}")
    print(RULE)
    print()

    for r in result.results:
        if r.status == SUCCESS:
            status = f"{GREEN}[ok]{RESET}"
        elif r.status == FAIL:
            status = f"{RED}[x]{RESET}"
        else:
            status = f"{YELLOW}[?]{RESET}"
        suffix = f"  {GREY}{r.error}{RESET}" if r.error else ""
        print(f"  {status} {r.resource_id} {r.key} = {r.value}{suffix}")

    print()
    print(f"{CYAN}{BOLD}Summary:{RESET} " + ", ".join(f"{k}={v}" for k, v in result.summary.items()))
    if result.dry_run:
        print(f"{MAGENTA}{BOLD}DRY RUN ONLY. No changes were applied.{RESET}")
    print(RULE)
    print()


def apply(
    tag_plan: Path = typer.Option(
        ...,
        "--tag-plan",
        help="Path to a JSON tag plan (typically generated by `vpctag plan --out`).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Ask AWS to validate without changing anything (only where the service supports it).",
    ),
    aws: AwsOptions = typer_di.Depends(aws_params),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Aplica um plano de tags gerado pelo `plan`.
    """
    try:
        plans = load_tag_plan(tag_plan)
        clients = ServiceClients.from_session(build_session(profile=aws.profile, region=aws.region))
        result = apply_tag_plan(plans, clients, dry_run=dry_run)
    except VpcTagError as e:
        fail("APPLY ABORTED", e)

    if not emit(result.to_dict(), output):
        _print_apply(result)

    if result.summary.get(FAIL):
        raise typer.Exit(code=2)
