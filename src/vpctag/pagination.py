import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def with_all_pages(
    operation: Callable[..., Dict[str, Any]],
    options: Optional[Dict[str, Any]],
    get_token: str,
    set_token: str,
    extract: Callable[[Dict[str, Any]], List[Any]],
) -> List[Any]:
    """
    Esgota uma operação paginada por cursor (describe_*/list_* do boto3).

    - get_token: campo da resposta que traz o próximo cursor (ex.: "NextToken", "NextMarker")
    - set_token: parâmetro da requisição que recebe o cursor (ex.: "NextToken", "Marker")
    - extract: tira a lista de itens de cada página

    Só termina quando a API para de devolver cursor.
    """
    request = dict(options or {})
    items: List[Any] = []
    pages = 0

    while True:
        response = operation(**request)
        pages += 1
        items.extend(extract(response) or [])

        token = response.get(get_token)
        if not token:
            break
        request[set_token] = token

    logger.debug("%s: %d item(s) em %d página(s)", getattr(operation, "__name__", operation), len(items), pages)
    return items
