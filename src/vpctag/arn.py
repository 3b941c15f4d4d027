import re
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Pattern, Tuple

from .errors import ServiceResolutionError


@dataclass(frozen=True)
class Arn:
    raw: str
    partition: str
    service: str
    region: str | None
    account_id: str | None
    resource: str

    @classmethod
    def parse(cls, arn: str) -> "Arn":
        parts = arn.split(":", 5)
        if len(parts) < 6 or parts[0] != "arn":
            raise ValueError(f"Invalid ARN: {arn}")

        _, partition, service, region, account_id, resource = parts

        region = region or None
        account_id = account_id or None

        return cls(
            raw=arn,
            partition=partition,
            service=service,
            region=region,
            account_id=account_id,
            resource=resource,
        )


def build_arn(
    service: str,
    region: str,
    account: str,
    resource_type: str,
    get_resource_id: Callable[[Any], str],
) -> Callable[[Any], str]:
    """
    Devolve uma função que monta o ARN de um recurso a partir do dict cru da AWS.

    O separador entre tipo e id é "/" a não ser que o próprio tipo já termine
    em "/" ou ":" (ex.: ElastiCache usa "cluster:<id>").
    """
    delim = "" if resource_type.endswith(("/", ":")) else "/"

    def _to_arn(subject: Any) -> str:
        resource_id = get_resource_id(subject)
        return f"arn:aws:{service}:{region}:{account}:{resource_type}{delim}{resource_id}"

    return _to_arn


def no_arn(subject: Any = None) -> None:
    return None


# Ordem importa: a primeira regra que casar ganha.
TYPE_SERVICE_RULES: List[Tuple[Pattern[str], str]] = [
    (
        re.compile(
            r"^(Address|EgressOnlyInternetGateway|Instance|InternetGateway|NatGateway"
            r"|NetworkAcl|NetworkInterface|RouteTable|SecurityGroup|Snapshot|Subnet"
            r"|Volume|Vpc|VpcEndpoint|VpcPeeringConnection)$"
        ),
        "ec2",
    ),
    (re.compile(r"^Rds"), "rds"),
    (re.compile(r"^ElastiCache"), "elasticache"),
    (re.compile(r"^ClassicLoadBalancer$"), "elasticloadbalancing"),
    (re.compile(r"^Lambda"), "lambda"),
    (re.compile(r"^s3"), "s3"),
    (re.compile(r"^iam"), "iam"),
    (re.compile(r"^ssm"), "ssm"),
    (re.compile(r"^sqs"), "sqs"),
    (re.compile(r"^sns"), "sns"),
]


def resolve_service(plan_item: Any) -> str:
    """
    Descobre qual serviço AWS é dono de um item do plano.

    Se houver ARN, o serviço vem dele. Senão, cai na tabela de regras por tipo.
    Sem regra que case é erro fatal: melhor parar do que pular uma escrita de tag.
    """
    resource_arn: Optional[str] = getattr(plan_item, "resource_arn", None)
    resource_type = getattr(plan_item, "type", "") or ""

    if resource_arn:
        try:
            return Arn.parse(resource_arn).service.lower()
        except ValueError as e:
            raise ServiceResolutionError(
                f"unable to resolve service from plan '{plan_item.resource_id}' of type "
                f"'{resource_type}': invalid ARN '{resource_arn}'"
            ) from e

    for pattern, service in TYPE_SERVICE_RULES:
        if pattern.search(resource_type):
            return service

    raise ServiceResolutionError(
        f"unable to resolve service from plan '{plan_item.resource_id}' of type '{resource_type}'"
    )
