from typing import FrozenSet, Iterable, List

from ..models import Resource, Tag, TagChange, TagPlan
from ..models.Tag import unique_tags

# Associações de Elastic IP pertencem (transitivamente) à instância: fora da convergência.
EXCLUDED_TYPES: FrozenSet[str] = frozenset({"Address"})


def plan(desired_tags: Iterable[Tag], resources: Iterable[Resource]) -> List[TagPlan]:
    """
    Compara as tags desejadas com as atuais de cada recurso.

    A diferença é por par exato (key, value): mesma chave com valor diferente
    conta como "faltando" e gera mudança. Recursos já convergidos não entram
    no plano. Ordem dos recursos = ordem de entrada; ordem das mudanças =
    ordem da especificação.
    """
    desired = unique_tags(desired_tags)
    plans: List[TagPlan] = []

    for resource in resources:
        if resource.type in EXCLUDED_TYPES:
            continue

        current = {(t.key, t.value) for t in resource.tags}
        changes = [
            TagChange(key=t.key, value=t.value)
            for t in desired
            if (t.key, t.value) not in current
        ]
        if not changes:
            continue

        plans.append(
            TagPlan(
                resource_id=resource.resource_id,
                resource_arn=resource.resource_arn,
                type=resource.type,
                changes=changes,
            )
        )

    return plans
