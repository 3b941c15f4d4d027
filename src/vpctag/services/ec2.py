from typing import Any, Dict, List

from ..pagination import with_all_pages
from .filters import Filter, apply_post_filters


def _describe(operation, filters: List[Filter], result_key: str, filter_param: str = "Filters") -> List[Dict[str, Any]]:
    options = {filter_param: filters} if filters else {}
    return with_all_pages(
        operation,
        options,
        "NextToken",
        "NextToken",
        lambda resp: resp.get(result_key, []),
    )


def get_vpcs(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_vpcs, filters, "Vpcs")


def get_subnets(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_subnets, filters, "Subnets")


def get_route_tables(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_route_tables, filters, "RouteTables")


def get_internet_gateways(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_internet_gateways, filters, "InternetGateways")


def get_egress_only_internet_gateways(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    # A API não filtra por attachment.vpc-id: filtramos localmente pelos Attachments.
    return apply_post_filters(
        lambda remote: _describe(
            ec2.describe_egress_only_internet_gateways,
            remote,
            "EgressOnlyInternetGateways",
        ),
        filters,
        (
            "attachment.vpc-id",
            lambda values, gw: any(
                a.get("VpcId", "") in values for a in gw.get("Attachments", []) or []
            ),
        ),
    )


def get_vpc_endpoints(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_vpc_endpoints, filters, "VpcEndpoints")


def get_nat_gateways(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    # describe_nat_gateways usa "Filter" (singular)
    return _describe(ec2.describe_nat_gateways, filters, "NatGateways", filter_param="Filter")


def get_vpc_peering_connections(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_vpc_peering_connections, filters, "VpcPeeringConnections")


def get_network_acls(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_network_acls, filters, "NetworkAcls")


def get_security_groups(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_security_groups, filters, "SecurityGroups")


def get_instances(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    reservations = _describe(ec2.describe_instances, filters, "Reservations")
    return [i for r in reservations for i in r.get("Instances", []) or []]


def get_volumes(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_volumes, filters, "Volumes")


def get_snapshots(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    # Só snapshots da própria conta: os públicos não podem ser taggeados por nós.
    return with_all_pages(
        ec2.describe_snapshots,
        {"Filters": filters, "OwnerIds": ["self"]},
        "NextToken",
        "NextToken",
        lambda resp: resp.get("Snapshots", []),
    )


def get_network_interfaces(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    return _describe(ec2.describe_network_interfaces, filters, "NetworkInterfaces")


def get_addresses(ec2, filters: List[Filter]) -> List[Dict[str, Any]]:
    # describe_addresses não é paginado
    resp = ec2.describe_addresses(**({"Filters": filters} if filters else {}))
    return resp.get("Addresses", []) or []


def attached_volume_ids(instances: List[Dict[str, Any]]) -> List[str]:
    volume_ids = []
    for instance in instances:
        for mapping in instance.get("BlockDeviceMappings", []) or []:
            volume_id = (mapping.get("Ebs") or {}).get("VolumeId")
            if volume_id:
                volume_ids.append(volume_id)
    return volume_ids
