from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from .Tag import Tag, unique_tags


@dataclass(frozen=True)
class Resource:
    """
    Registro canônico de um recurso descoberto no crawl.
    As tags já chegam normalizadas (nada de Tags/TagSet/TagList daqui pra frente).
    """

    type: str
    resource_id: str
    resource_arn: Optional[str] = None
    tags: Tuple[Tag, ...] = field(default_factory=tuple)

    @classmethod
    def build(
        cls,
        type: str,
        resource_id: str,
        resource_arn: Optional[str],
        tags: Iterable[Tag],
    ) -> "Resource":
        return cls(
            type=type,
            resource_id=resource_id,
            resource_arn=resource_arn,
            tags=unique_tags(tags),
        )

    def tags_dict(self) -> Dict[str, str]:
        return {t.key: t.value for t in self.tags}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "resourceId": self.resource_id,
            **({"resourceArn": self.resource_arn} if self.resource_arn else {}),
            "tags": [{"key": t.key, "value": t.value} for t in self.tags],
        }
