from .AwsIdentity import AwsIdentity, AwsIdentityError
from .Resource import Resource
from .Tag import Tag
from .TagPlan import TagChange, TagPlan
from .TagPlanResult import FAIL, SUCCESS, UNKNOWN, ApplyResult, TagPlanResult
from .TagSpecification import TagSpecification
from .VisitResult import VisitResult

__all__ = [
    "ApplyResult",
    "AwsIdentity",
    "AwsIdentityError",
    "FAIL",
    "Resource",
    "SUCCESS",
    "Tag",
    "TagChange",
    "TagPlan",
    "TagPlanResult",
    "TagSpecification",
    "UNKNOWN",
    "VisitResult",
]
