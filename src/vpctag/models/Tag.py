from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class Tag:
    key: str
    value: str

    @classmethod
    def from_aws(cls, raw: Dict[str, Any]) -> "Tag":
        key = raw.get("Key", raw.get("key", ""))
        value = raw.get("Value", raw.get("value"))
        return cls(key=str(key), value="" if value is None else str(value))

    def to_aws(self) -> Dict[str, str]:
        return {"Key": self.key, "Value": self.value}


def unique_tags(tags: Iterable[Tag]) -> Tuple[Tag, ...]:
    """
    Remove chaves repetidas: a última ocorrência ganha o valor,
    mas a posição continua sendo a da primeira.
    """
    by_key: Dict[str, Tag] = {}
    for tag in tags:
        by_key[tag.key] = tag
    return tuple(by_key.values())
