from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

SUCCESS = "success"
FAIL = "fail"
UNKNOWN = "unknown"


@dataclass
class TagPlanResult:
    """
    Resultado de UMA mudança de tag (não do recurso inteiro):
    um recurso pode ter sucesso parcial.
    """

    resource_id: str
    key: str
    value: str
    status: str
    resource_arn: Optional[str] = None
    action: str = "apply"
    error: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceId": self.resource_id,
            **({"resourceArn": self.resource_arn} if self.resource_arn else {}),
            "key": self.key,
            "value": self.value,
            "action": self.action,
            "status": self.status,
            **({"error": str(self.error)} if self.error else {}),
        }


@dataclass
class ApplyResult:
    results: List[TagPlanResult] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)
    dry_run: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": dict(self.summary),
            "dryRun": self.dry_run,
        }
