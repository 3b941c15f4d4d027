from .base import COLLECTION_NAMES, COLLECTIONS, Visitor
from .crawler import ResourceGraphCrawler, visit_by_vpc
from .guard import safe_visit

__all__ = [
    "COLLECTIONS",
    "COLLECTION_NAMES",
    "ResourceGraphCrawler",
    "Visitor",
    "safe_visit",
    "visit_by_vpc",
]
