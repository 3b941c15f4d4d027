from typing import Any, Dict, List

from ..pagination import with_all_pages
from .filters import Filter, apply_post_filters


def get_rds_db_instances(rds, filters: List[Filter]) -> List[Dict[str, Any]]:
    """
    O RDS não aceita vpc-id como filtro: a VPC vem de DBSubnetGroup.VpcId.
    """
    return apply_post_filters(
        lambda remote: with_all_pages(
            rds.describe_db_instances,
            {"Filters": remote} if remote else {},
            "Marker",
            "Marker",
            lambda resp: resp.get("DBInstances", []),
        ),
        filters,
        (
            "vpc-id",
            lambda values, dbi: ((dbi.get("DBSubnetGroup") or {}).get("VpcId") or "") in values,
        ),
    )


def get_rds_db_clusters(rds, filters: List[Filter]) -> List[Dict[str, Any]]:
    return with_all_pages(
        rds.describe_db_clusters,
        {"Filters": filters} if filters else {},
        "Marker",
        "Marker",
        lambda resp: resp.get("DBClusters", []),
    )


def db_cluster_ids(db_instances: List[Dict[str, Any]]) -> List[str]:
    ids: List[str] = []
    for dbi in db_instances:
        cluster_id = dbi.get("DBClusterIdentifier")
        if cluster_id and cluster_id not in ids:
            ids.append(cluster_id)
    return ids


def with_rds_tags(rds, resources: List[Dict[str, Any]], arn_field: str) -> List[Dict[str, Any]]:
    """
    Anexa `tags` ([{Key, Value}]) em cada recurso via list_tags_for_resource.
    """
    tagged = []
    for res in resources:
        arn = res.get(arn_field)
        tags = []
        if arn:
            tags = rds.list_tags_for_resource(ResourceName=arn).get("TagList", []) or []
        tagged.append({**res, "tags": tags})
    return tagged
