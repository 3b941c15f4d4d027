import logging
from dataclasses import dataclass
from typing import Any, Optional

from boto3.session import Session

logger = logging.getLogger(__name__)

DEFAULT_REGION = "eu-west-1"
ENV_PREFIX = "VPCTAG_"


def resolve_region(region: Optional[str], session: Optional[Session] = None) -> str:
    """
    Único ponto de decisão da região: explícita > default da sessão/perfil > DEFAULT_REGION.
    """
    if region:
        return region
    if session is not None and session.region_name:
        return session.region_name
    logger.debug("Nenhuma região informada, usando %s", DEFAULT_REGION)
    return DEFAULT_REGION


def build_session(profile: Optional[str] = None, region: Optional[str] = None) -> Session:
    session = Session(profile_name=profile, region_name=region)
    if not session.region_name:
        session = Session(profile_name=profile, region_name=resolve_region(region, session))
    return session


@dataclass
class ServiceClients:
    """
    Clients boto3 criados uma vez por execução e injetados no crawler/applier.
    Nos testes, qualquer objeto com os mesmos métodos serve.
    """

    ec2: Any
    rds: Any
    elasticache: Any
    elb: Any
    lambda_: Any

    @classmethod
    def from_session(cls, session: Session) -> "ServiceClients":
        return cls(
            ec2=session.client("ec2"),
            rds=session.client("rds"),
            elasticache=session.client("elasticache"),
            elb=session.client("elb"),
            lambda_=session.client("lambda"),
        )
