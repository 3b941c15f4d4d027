from .filters import (
    apply_post_filters,
    filter_by,
    filter_by_cache_subnet_group_name,
    filter_by_instance_id,
    filter_by_rds_cluster_id,
    filter_by_volume_id,
    filter_by_vpc,
    filter_by_vpc_attachment,
)

__all__ = [
    "apply_post_filters",
    "filter_by",
    "filter_by_cache_subnet_group_name",
    "filter_by_instance_id",
    "filter_by_rds_cluster_id",
    "filter_by_volume_id",
    "filter_by_vpc",
    "filter_by_vpc_attachment",
]
