from dataclasses import asdict

import typer_di

from vpctag.models import AwsIdentity, AwsIdentityError

from ..params import AwsOptions, aws_params, output_params
from .console import BOLD, CYAN, GREEN, RESET, RULE, emit, fail, resolve_aws


def _print_identity(identity: AwsIdentity) -> None:
    profile = identity.profile or "(no profile / env creds)"
    region = identity.region or "(no default region)"

    print()
    print(RULE)
    print(f"{CYAN}{BOLD}VPCTAG :: AWS Identity Context{RESET}")
    print(RULE)
    print(f"{CYAN}{BOLD}ACCOUNT:{RESET} {identity.account}")
    print(f"{CYAN}{BOLD}ARN:    {RESET} {identity.arn}")
    print(f"{CYAN}{BOLD}PROFILE:{RESET} {profile}")
    print(f"{CYAN}{BOLD}REGION: {RESET} {region}")
    print(RULE)
    print(f"{GREEN}{BOLD}Identity OK.{RESET}")
    print(RULE)
    print()


def whoami(
    aws: AwsOptions = typer_di.Depends(aws_params),
    output: str = typer_di.Depends(output_params),
) -> None:
    """
    Mostra a identidade AWS atual (conta, ARN, região efetiva).
    """
    try:
        identity, _ = resolve_aws(aws)
    except AwsIdentityError as e:
        fail("FAILED TO RESOLVE AWS IDENTITY", e)

    if not emit(asdict(identity), output):
        _print_identity(identity)
