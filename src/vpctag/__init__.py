from .errors import (
    ResourceNotFoundError,
    ServiceResolutionError,
    TagPlanFileError,
    TagSpecificationError,
    UnsupportedServiceError,
    VpcTagError,
)

__all__ = [
    "ResourceNotFoundError",
    "ServiceResolutionError",
    "TagPlanFileError",
    "TagSpecificationError",
    "UnsupportedServiceError",
    "VpcTagError",
]
