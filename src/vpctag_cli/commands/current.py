from typing import List

import typer
import typer_di

from vpctag.engine.tag_engine import collect_current_tags
from vpctag.errors import VpcTagError
from vpctag.models import AwsIdentityError, Resource, VisitResult

from ..params import AwsOptions, aws_params, output_params
from .console import BOLD, CYAN, GREEN, GREY, RED, RESET, RULE, emit, fail, resolve_aws


def _print_current(vpc_id: str, resources: List[Resource], visits: List[VisitResult]) -> None:
    max_type_len = max((len(r.type) for r in resources), default=0)

    print()
    print(RULE)
    print(f"{CYAN}{BOLD}VPC:{RESET} {vpc_id}  {GREY}({len(resources)} resources){RESET}")
    print(RULE)
    print()

    for r in resources:
        tags = ", ".join(f"{t.key}={t.value}" for t in r.tags) or GREY + "(no tags)" + RESET
        print(f"  {GREEN}•{RESET} {r.type:<{max_type_len}} {r.resource_id}  {tags}")

    print()
    print(f"{CYAN}{BOLD}Handlers:{RESET}")
    for v in visits:
        status = f"{RED}[!] {v.error}{RESET}" if v.error else f"{GREEN}[ok]{RESET}"
        print(f"  {v.handler_name:<40} {v.duration_ms:8.1f}ms {status}")
    print()


def current(
    vpc_id: str = typer.Option(..., "--vpc-id", help="VPC id to start the crawl with."),
    aws: AwsOptions = typer_di.Depends(aws_params),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Lista os recursos da VPC com as tags atuais.
    """
    try:
        identity, clients = resolve_aws(aws)
        resources, visits = collect_current_tags(vpc_id, clients, identity)
    except AwsIdentityError as e:
        fail("FAILED TO RESOLVE AWS IDENTITY", e)
    except VpcTagError as e:
        fail("CRAWL ABORTED", e)

    document = {
        "vpcId": vpc_id,
        "resources": [r.to_dict() for r in resources],
        "visits": [v.to_dict() for v in visits],
    }
    if not emit(document, output):
        _print_current(vpc_id, resources, visits)
