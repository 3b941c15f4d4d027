import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config import ServiceClients
from ..models import ApplyResult, AwsIdentity, Resource, TagPlan, TagSpecification, VisitResult
from ..tag_spec import render_tag_specification
from ..visitor.crawler import ResourceGraphCrawler
from .applier import TagApplier
from .collector import TagCollector
from .planner import plan

logger = logging.getLogger(__name__)


def collect_current_tags(
    vpc_id: str,
    clients: ServiceClients,
    identity: AwsIdentity,
) -> Tuple[List[Resource], List[VisitResult]]:
    """
    Faz o crawl da VPC e devolve os recursos canônicos + o resultado de cada handler.
    """
    collector = TagCollector(region=identity.region or "", account=identity.account)
    visits = ResourceGraphCrawler(clients, identity).crawl(vpc_id, collector)

    failed = [v for v in visits if v.error]
    if failed:
        logger.warning("%d handler(s) falharam durante o crawl de %s", len(failed), vpc_id)

    return collector.result, visits


def plan_vpc_tags(
    vpc_id: str,
    spec: TagSpecification,
    clients: ServiceClients,
    identity: AwsIdentity,
    overrides: Optional[Dict[str, Any]] = None,
) -> List[TagPlan]:
    ctx: Dict[str, Any] = {**identity.template_context(), "vpc_id": vpc_id, **(overrides or {})}
    desired = render_tag_specification(spec, ctx)

    resources, _ = collect_current_tags(vpc_id, clients, identity)
    plans = plan(desired.tags, resources)

    logger.info(
        "Plano para %s: %d de %d recurso(s) precisam de mudança",
        vpc_id,
        len(plans),
        len(resources),
    )
    return plans


def apply_tag_plan(
    plans: Optional[List[TagPlan]],
    clients: ServiceClients,
    dry_run: bool = False,
) -> ApplyResult:
    return TagApplier(clients).apply(plans, dry_run=dry_run)
