from dataclasses import dataclass, field
from typing import Any, Dict, List

from .Tag import Tag


@dataclass
class TagSpecification:
    """
    Tags desejadas, na ordem em que vieram do arquivo.
    Valor ausente vira string vazia.
    """

    tags: List[Tag] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TagSpecification":
        entries = (data or {}).get("tags") or []
        return cls(
            [
                Tag(key=str(e["key"]), value="" if e.get("value") is None else str(e["value"]))
                for e in entries
            ]
        )

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {"tags": [{"key": t.key, "value": t.value} for t in self.tags]}
