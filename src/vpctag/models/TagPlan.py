from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TagChange:
    key: str
    value: str
    action: str = "apply"

    def to_aws(self) -> Dict[str, str]:
        return {"Key": self.key, "Value": self.value}


APPLY = "apply"


def _change_from_dict(data: Dict[str, Any]) -> TagChange:
    # Só existe "apply": remover tag não faz parte do plano.
    action = str(data.get("action", APPLY))
    if action != APPLY:
        raise ValueError(f"unsupported action '{action}' for tag '{data['key']}'")
    return TagChange(
        key=str(data["key"]),
        value="" if data.get("value") is None else str(data["value"]),
        action=action,
    )


@dataclass
class TagPlan:
    """
    Diferença declarativa para um recurso: o que falta aplicar para
    chegar nas tags desejadas. Esse é o único artefato que vai para arquivo
    (gerado pelo `plan`, consumido depois pelo `apply`).
    """

    resource_id: str
    type: str
    resource_arn: Optional[str] = None
    changes: List[TagChange] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "resourceId": self.resource_id,
            **({"resourceArn": self.resource_arn} if self.resource_arn else {}),
            "type": self.type,
            "changes": [
                {"key": c.key, "value": c.value, "action": c.action}
                for c in self.changes
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TagPlan":
        return cls(
            resource_id=str(data["resourceId"]),
            resource_arn=data.get("resourceArn") or None,
            type=str(data["type"]),
            changes=[_change_from_dict(c) for c in data.get("changes", []) or []],
        )
