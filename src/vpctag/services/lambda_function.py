from typing import Any, Dict, List

from ..pagination import with_all_pages
from .filters import Filter, apply_post_filters


def get_lambda_functions(lambda_, filters: List[Filter]) -> List[Dict[str, Any]]:
    return apply_post_filters(
        lambda _remote: with_all_pages(
            lambda_.list_functions,
            {},
            "NextMarker",
            "Marker",
            lambda resp: resp.get("Functions", []),
        ),
        filters,
        ("vpc-id", lambda values, fn: ((fn.get("VpcConfig") or {}).get("VpcId") or "") in values),
    )


def with_lambda_tags(lambda_, resources: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Lambda devolve tags como dict {key: value}; convertemos para [{Key, Value}].
    """
    tagged = []
    for res in resources:
        raw = lambda_.list_tags(Resource=res["FunctionArn"]).get("Tags", {}) or {}
        tagged.append({**res, "tags": [{"Key": k, "Value": v} for k, v in raw.items()]})
    return tagged
