from .applier import TagApplier, apply
from .collector import TagCollector
from .planner import EXCLUDED_TYPES, plan

__all__ = ["EXCLUDED_TYPES", "TagApplier", "TagCollector", "apply", "plan"]
