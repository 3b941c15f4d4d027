from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class VisitResult:
    handler_name: Optional[str] = None
    duration_ms: float = 0.0
    error: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "handler": self.handler_name,
            "durationMs": round(self.duration_ms, 3),
            **({"error": str(self.error)} if self.error else {}),
        }
