import logging
import re
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from botocore.exceptions import ClientError

from ..arn import resolve_service
from ..config import ServiceClients
from ..errors import UnsupportedServiceError
from ..models import FAIL, SUCCESS, UNKNOWN, ApplyResult, TagPlan, TagPlanResult

logger = logging.getLogger(__name__)

ApplyFn = Callable[[TagPlan, bool], List[TagPlanResult]]

DEFAULT_MAX_WORKERS = 16

_WOULD_HAVE_SUCCEEDED = re.compile(r"would\shave\ssucceeded", re.IGNORECASE)


def to_tag_plan_results(
    plan: TagPlan,
    status: str,
    error: Optional[BaseException] = None,
) -> List[TagPlanResult]:
    return [
        TagPlanResult(
            resource_id=plan.resource_id,
            resource_arn=plan.resource_arn,
            key=change.key,
            value=change.value,
            action=change.action,
            status=status,
            error=error,
        )
        for change in plan.changes
    ]


def is_dry_run_success(error: BaseException) -> bool:
    """
    Com DryRun=True o EC2 responde com erro "DryRunOperation ... would have succeeded"
    quando a chamada teria dado certo.
    """
    if not isinstance(error, ClientError):
        return False
    err = error.response.get("Error", {}) or {}
    return err.get("Code") == "DryRunOperation" and bool(_WOULD_HAVE_SUCCEEDED.search(err.get("Message", "") or ""))


def group_by_service(plans: List[TagPlan]) -> Dict[str, List[TagPlan]]:
    groups: Dict[str, List[TagPlan]] = {}
    for plan in plans:
        groups.setdefault(resolve_service(plan), []).append(plan)
    return groups


def summarize(results: List[TagPlanResult]) -> Dict[str, int]:
    return dict(Counter(r.status for r in results))


class TagApplier:
    """
    Executa um plano de tags, agrupando por serviço dono do recurso.

    Falha de escrita é isolada por mudança: o apply nunca aborta porque um
    recurso falhou. Abortam só: serviço não resolvido ou sem função registrada.
    """

    def __init__(self, clients: ServiceClients, max_workers: int = DEFAULT_MAX_WORKERS) -> None:
        self.clients = clients
        self.max_workers = max_workers
        self.apply_functions: Dict[str, ApplyFn] = {
            "ec2": self._apply_ec2,
            "rds": self._apply_rds,
            "lambda": self._apply_lambda,
            "elasticache": self._apply_elasticache,
            "elasticloadbalancing": self._apply_elb,
        }

    def apply(self, plan: Optional[List[TagPlan]], dry_run: bool = False) -> ApplyResult:
        if not plan:
            return ApplyResult(dry_run=dry_run)

        groups = group_by_service(plan)
        for service in groups:
            if service not in self.apply_functions:
                raise UnsupportedServiceError(f"no apply function registered for service '{service}'")

        # TODO: agrupar as mudanças iguais num único create_tags/add_tags (a API aceita lote).
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self.apply_functions[service], entry, dry_run)
                for service, entries in groups.items()
                for entry in entries
            ]
            results = [r for future in futures for r in future.result()]

        summary = summarize(results)
        logger.info("Apply concluído (dry_run=%s): %s", dry_run, summary)
        return ApplyResult(results=results, summary=summary, dry_run=dry_run)

    def _write(self, plan: TagPlan, call: Callable[[], object]) -> List[TagPlanResult]:
        try:
            call()
        except Exception as exc:
            logger.warning("Falha ao aplicar tags em %s: %s", plan.resource_id, exc)
            return to_tag_plan_results(plan, FAIL, exc)
        return to_tag_plan_results(plan, SUCCESS)

    @staticmethod
    def _dry_run_unsupported(plan: TagPlan, service_label: str) -> List[TagPlanResult]:
        return to_tag_plan_results(
            plan,
            UNKNOWN,
            NotImplementedError(f"dry-run not supported in {service_label}"),
        )

    def _apply_ec2(self, plan: TagPlan, dry_run: bool) -> List[TagPlanResult]:
        try:
            self.clients.ec2.create_tags(
                Resources=[plan.resource_id],
                Tags=[c.to_aws() for c in plan.changes],
                DryRun=dry_run,
            )
        except Exception as exc:
            if dry_run and is_dry_run_success(exc):
                return to_tag_plan_results(plan, SUCCESS)
            logger.warning("Falha ao aplicar tags em %s: %s", plan.resource_id, exc)
            return to_tag_plan_results(plan, FAIL, exc)
        return to_tag_plan_results(plan, SUCCESS)

    def _apply_rds(self, plan: TagPlan, dry_run: bool) -> List[TagPlanResult]:
        if dry_run:
            return self._dry_run_unsupported(plan, "RDS")
        return self._write(
            plan,
            lambda: self.clients.rds.add_tags_to_resource(
                ResourceName=plan.resource_arn,
                Tags=[c.to_aws() for c in plan.changes],
            ),
        )

    def _apply_elasticache(self, plan: TagPlan, dry_run: bool) -> List[TagPlanResult]:
        if dry_run:
            return self._dry_run_unsupported(plan, "ElastiCache")
        return self._write(
            plan,
            lambda: self.clients.elasticache.add_tags_to_resource(
                ResourceName=plan.resource_arn,
                Tags=[c.to_aws() for c in plan.changes],
            ),
        )

    def _apply_elb(self, plan: TagPlan, dry_run: bool) -> List[TagPlanResult]:
        if dry_run:
            return self._dry_run_unsupported(plan, "ELB")
        return self._write(
            plan,
            lambda: self.clients.elb.add_tags(
                LoadBalancerNames=[plan.resource_id],
                Tags=[c.to_aws() for c in plan.changes],
            ),
        )

    def _apply_lambda(self, plan: TagPlan, dry_run: bool) -> List[TagPlanResult]:
        if dry_run:
            return self._dry_run_unsupported(plan, "Lambda")
        return self._write(
            plan,
            lambda: self.clients.lambda_.tag_resource(
                Resource=plan.resource_arn,
                Tags={c.key: c.value for c in plan.changes},
            ),
        )


def apply(
    plan: Optional[List[TagPlan]],
    clients: ServiceClients,
    dry_run: bool = False,
) -> ApplyResult:
    return TagApplier(clients).apply(plan, dry_run=dry_run)
