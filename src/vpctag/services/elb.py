from typing import Any, Dict, List

from ..pagination import with_all_pages
from .filters import Filter, apply_post_filters

# describe_tags aceita no máximo 20 nomes por chamada
DESCRIBE_TAGS_BATCH = 20


def get_elb_classic_load_balancers(elb, filters: List[Filter]) -> List[Dict[str, Any]]:
    return apply_post_filters(
        lambda _remote: with_all_pages(
            elb.describe_load_balancers,
            {},
            "NextMarker",
            "Marker",
            lambda resp: resp.get("LoadBalancerDescriptions", []),
        ),
        filters,
        ("vpc-id", lambda values, lb: (lb.get("VPCId") or "") in values),
    )


def with_elb_classic_load_balancer_tags(elb, resources: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    names = [r.get("LoadBalancerName", "") for r in resources if r.get("LoadBalancerName")]
    tags_by_name: Dict[str, List[Dict[str, str]]] = {}

    for start in range(0, len(names), DESCRIBE_TAGS_BATCH):
        batch = names[start:start + DESCRIBE_TAGS_BATCH]
        resp = elb.describe_tags(LoadBalancerNames=batch)
        for description in resp.get("TagDescriptions", []) or []:
            tags_by_name[description.get("LoadBalancerName", "")] = description.get("Tags", []) or []

    return [
        {**res, "tags": tags_by_name.get(res.get("LoadBalancerName", ""), [])}
        for res in resources
    ]
