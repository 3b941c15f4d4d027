import logging
import time
from typing import Any, Optional

from ..models import VisitResult
from .base import Handler

logger = logging.getLogger(__name__)


def safe_visit(subject: Any, handler: Optional[Handler], label: str) -> VisitResult:
    """
    Chama um handler isolando erro e medindo tempo.

    Sem handler → VisitResult sem handler_name (o crawler descarta depois).
    Exceção do handler fica no resultado, nunca sobe.
    """
    result = VisitResult()
    start = time.perf_counter()

    try:
        if handler is None:
            return result

        result.handler_name = label
        handler(subject)
    except Exception as exc:
        logger.warning("Handler %s falhou: %s", label, exc)
        result.error = exc
    finally:
        result.duration_ms = (time.perf_counter() - start) * 1000.0

    logger.debug("Handler %s levou %.1fms", label, result.duration_ms)
    return result
