import json
from pathlib import Path
from typing import List, Optional

import typer
import typer_di

from vpctag.engine.tag_engine import plan_vpc_tags
from vpctag.errors import VpcTagError
from vpctag.models import AwsIdentityError, TagPlan, TagSpecification
from vpctag.tag_spec import dump_tag_plan, load_tag_specification, parse_tag_arguments

from ..params import AwsOptions, aws_params, output_params
from .console import BOLD, CYAN, GREEN, GREY, RESET, RULE, YELLOW, emit, fail, resolve_aws


def _load_json_str(json_str: Optional[str]) -> dict:
    if json_str is None:
        return {}
    try:
        data = json.loads(json_str)
    except ValueError as e:
        raise typer.BadParameter(f"--overrides não é um JSON válido: {e}")
    if not isinstance(data, dict):
        raise typer.BadParameter("--overrides precisa ser um objeto JSON ({\"chave\": \"valor\"}).")
    return data


def _print_plan(vpc_id: str, plans: List[TagPlan]) -> None:
    print()
    print(RULE)
    print(f"{CYAN}{BOLD}VPC:  {RESET} {vpc_id}")
    print(f"{YELLOW}{BOLD}PLAN: {len(plans)} resource(s) to change{RESET}")
    print(RULE)
    print()

    if not plans:
        print(GREY + "  (nothing to do, all resources converged)" + RESET)
        print()
        return

    for p in plans:
        print(f"{CYAN}{BOLD}{p.type}{RESET} {p.resource_id}")
        max_key_len = max((len(c.key) for c in p.changes), default=0)
        for c in p.changes:
            print(f"  {GREEN}[+]{RESET} {c.key:<{max_key_len}} = {c.value}")
        print()


def plan(
    vpc_id: str = typer.Option(..., "--vpc-id", help="VPC id to start the crawl with."),
    tag_spec: Optional[Path] = typer.Option(
        None,
        "--tag-spec",
        help="Path to a YAML tag specification file.",
    ),
    tags: List[str] = typer.Option(
        None,
        "--tag",
        help=(
            "Desired tag as KEY=VALUE. Can be passed multiple times (added after --tag-spec). "
            "Values are Jinja2 templates like the tag-spec ones: use {{ '{{' }} for a literal {{."
        ),
    ),
    json_str: Optional[str] = typer.Option(
        None,
        "--overrides",
        help="Inline JSON with extra template variables for tag values.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        help="Write the tag plan (JSON) to this file, ready for `vpctag apply`.",
    ),
    aws: AwsOptions = typer_di.Depends(aws_params),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Gera o plano de tags: o que falta aplicar em cada recurso da VPC
    para chegar nas tags desejadas.
    """
    if tag_spec is None and not tags:
        raise typer.BadParameter("Você precisa passar --tag-spec e/ou pelo menos um --tag.")

    try:
        spec = load_tag_specification(tag_spec) if tag_spec else TagSpecification()
        spec.tags.extend(parse_tag_arguments(tags or []))
        identity, clients = resolve_aws(aws)
        plans = plan_vpc_tags(vpc_id, spec, clients, identity, overrides=_load_json_str(json_str))
    except AwsIdentityError as e:
        fail("FAILED TO RESOLVE AWS IDENTITY", e)
    except VpcTagError as e:
        fail("PLAN ABORTED", e)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(dump_tag_plan(plans), encoding="utf-8")
        typer.echo(
            f"\n"
            f"{RULE}\n"
            f"{GREEN}{BOLD}Plano salvo com sucesso.{RESET}\n"
            f"{CYAN}{out}{RESET}\n"
            f"{RULE}\n",
            err=True,
        )

    if not emit([p.to_dict() for p in plans], output):
        _print_plan(vpc_id, plans)
