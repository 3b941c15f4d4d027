from typing import Any, Callable, Dict, List

from ..arn import build_arn
from ..pagination import with_all_pages
from .filters import Filter, apply_post_filters


def cluster_arn_getter(region: str, account: str) -> Callable[[Dict[str, Any]], str]:
    """
    ElastiCache recente já devolve "ARN"; para respostas antigas montamos
    arn:aws:elasticache:<region>:<account>:cluster:<id>.
    """
    build = build_arn("elasticache", region, account, "cluster:", lambda c: c.get("CacheClusterId", ""))

    def _get(cluster: Dict[str, Any]) -> str:
        return cluster.get("ARN") or build(cluster)

    return _get


def get_elasticache_subnet_groups(elasticache, filters: List[Filter]) -> List[Dict[str, Any]]:
    return apply_post_filters(
        lambda _remote: with_all_pages(
            elasticache.describe_cache_subnet_groups,
            {},
            "Marker",
            "Marker",
            lambda resp: resp.get("CacheSubnetGroups", []),
        ),
        filters,
        ("vpc-id", lambda values, group: (group.get("VpcId") or "") in values),
    )


def get_elasticache_clusters(elasticache, filters: List[Filter]) -> List[Dict[str, Any]]:
    return apply_post_filters(
        lambda _remote: with_all_pages(
            elasticache.describe_cache_clusters,
            {"ShowCacheNodeInfo": False},
            "Marker",
            "Marker",
            lambda resp: resp.get("CacheClusters", []),
        ),
        filters,
        (
            "subnet-group-name",
            lambda values, cluster: (cluster.get("CacheSubnetGroupName") or "") in values,
        ),
    )


def with_elasticache_tags(
    elasticache,
    resources: List[Dict[str, Any]],
    get_resource_arn: Callable[[Dict[str, Any]], str],
) -> List[Dict[str, Any]]:
    tagged = []
    for res in resources:
        resp = elasticache.list_tags_for_resource(ResourceName=get_resource_arn(res))
        tagged.append({**res, "tags": resp.get("TagList", []) or []})
    return tagged
