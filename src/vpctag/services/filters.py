from typing import Any, Callable, Dict, List, Optional, Tuple

Filter = Dict[str, Any]


def filter_by(name: str, values: List[str]) -> List[Filter]:
    return [{"Name": name, "Values": list(values)}]


def filter_by_vpc(values: List[str]) -> List[Filter]:
    return filter_by("vpc-id", values)


def filter_by_vpc_attachment(values: List[str]) -> List[Filter]:
    return filter_by("attachment.vpc-id", values)


def filter_by_instance_id(values: List[str]) -> List[Filter]:
    return filter_by("instance-id", values)


def filter_by_volume_id(values: List[str]) -> List[Filter]:
    return filter_by("volume-id", values)


def filter_by_rds_cluster_id(values: List[str]) -> List[Filter]:
    return filter_by("db-cluster-id", values)


def filter_by_cache_subnet_group_name(values: List[str]) -> List[Filter]:
    return filter_by("subnet-group-name", values)


def find_filter(filters: List[Filter], name: str) -> Optional[Filter]:
    return next((f for f in filters if f.get("Name") == name), None)


def apply_post_filters(
    query: Callable[[List[Filter]], List[Dict[str, Any]]],
    filters: List[Filter],
    post_filter: Tuple[str, Callable[[List[str], Dict[str, Any]], bool]],
) -> List[Dict[str, Any]]:
    """
    Para APIs que não aceitam um filtro no servidor (ex.: vpc-id no RDS):
    separa o filtro `post_filter[0]`, manda o resto pra API e aplica
    o predicado localmente no resultado.

    Sem o filtro na lista, nada é filtrado localmente.
    """
    name, predicate = post_filter
    local = find_filter(filters, name)
    remote = [f for f in filters if f.get("Name") != name]

    results = query(remote)
    if local is None:
        return results

    values = list(local.get("Values") or [])
    return [item for item in results if predicate(values, item)]
