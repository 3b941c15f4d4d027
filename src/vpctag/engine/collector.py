from typing import Any, Callable, Dict, List, Optional

from ..arn import build_arn, no_arn
from ..models import Resource, Tag
from ..services.elasticache import cluster_arn_getter
from ..visitor.base import COLLECTION_NAMES, Handler, Visitor

# Campos de tag que aparecem nos payloads crus, em ordem de preferência.
# "tags" é o formato que os enrichers (rds/elasticache/elb/lambda) anexam.
TAG_FIELDS = ("tags", "Tags", "TagSet", "TagList")


def _prop(name: str) -> Callable[[Dict[str, Any]], str]:
    return lambda subject: (subject or {}).get(name) or ""


def _raw_tags(subject: Dict[str, Any]) -> List[Dict[str, Any]]:
    for field in TAG_FIELDS:
        value = subject.get(field)
        if value:
            return list(value)
    return []


def to_resource(
    type: str,
    get_resource_id: Callable[[Dict[str, Any]], str],
    get_resource_arn: Callable[[Dict[str, Any]], Optional[str]],
    subject: Dict[str, Any],
) -> Resource:
    subject = subject or {}
    return Resource.build(
        type=type,
        resource_id=get_resource_id(subject),
        resource_arn=get_resource_arn(subject),
        tags=[Tag.from_aws(t) for t in _raw_tags(subject)],
    )


class TagCollector(Visitor):
    """
    Visitor que transforma cada recurso cru da AWS num `Resource` canônico
    (tipo, id, arn opcional, tags).

    Cada coleção escreve no seu próprio slot; `result` junta tudo na ordem
    fixa das coleções, independente da ordem em que os handlers terminaram.
    """

    def __init__(self, region: str, account: str) -> None:
        self.region = region
        self.account = account
        self._collected: Dict[str, List[Resource]] = {name: [] for name in COLLECTION_NAMES}

    @property
    def result(self) -> List[Resource]:
        return [r for name in COLLECTION_NAMES for r in self._collected[name]]

    def handlers(self) -> Dict[str, Optional[Handler]]:
        return {
            "Vpc": self.visit_vpc,
            "Subnets": self.visit_subnets,
            "RouteTables": self.visit_route_tables,
            "InternetGateways": self.visit_internet_gateways,
            "EgressOnlyInternetGateways": self.visit_egress_only_internet_gateways,
            "VpcEndpoints": self.visit_vpc_endpoints,
            "NatGateways": self.visit_nat_gateways,
            "VpcPeeringConnections": self.visit_vpc_peering_connections,
            "NetworkAcls": self.visit_network_acls,
            "SecurityGroups": self.visit_security_groups,
            "Instances": self.visit_instances,
            "Volumes": self.visit_volumes,
            "Snapshots": self.visit_snapshots,
            "NetworkInterfaces": self.visit_network_interfaces,
            "Addresses": self.visit_addresses,
            "RdsDBInstances": self.visit_rds_db_instances,
            "RdsDBClusters": self.visit_rds_db_clusters,
            "ElastiCacheClusters": self.visit_elasticache_clusters,
            "ClassicLoadBalancers": self.visit_classic_load_balancers,
            "LambdaFunctions": self.visit_lambda_functions,
        }

    def _collect(
        self,
        collection: str,
        type: str,
        get_resource_id: Callable[[Dict[str, Any]], str],
        get_resource_arn: Callable[[Dict[str, Any]], Optional[str]],
        subjects: List[Dict[str, Any]],
    ) -> None:
        self._collected[collection] = [
            to_resource(type, get_resource_id, get_resource_arn, s) for s in subjects or []
        ]

    def visit_vpc(self, vpc: Dict[str, Any]) -> None:
        if not vpc or not vpc.get("VpcId"):
            return
        owner = vpc.get("OwnerId") or self.account
        vpc_arn = build_arn("ec2", self.region, owner, "vpc", _prop("VpcId"))
        self._collected["Vpc"] = [to_resource("Vpc", _prop("VpcId"), vpc_arn, vpc)]

    def visit_subnets(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("Subnets", "Subnet", _prop("SubnetId"), no_arn, subjects)

    def visit_route_tables(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("RouteTables", "RouteTable", _prop("RouteTableId"), no_arn, subjects)

    def visit_internet_gateways(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("InternetGateways", "InternetGateway", _prop("InternetGatewayId"), no_arn, subjects)

    def visit_egress_only_internet_gateways(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "EgressOnlyInternetGateways",
            "EgressOnlyInternetGateway",
            _prop("EgressOnlyInternetGatewayId"),
            no_arn,
            subjects,
        )

    def visit_vpc_endpoints(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("VpcEndpoints", "VpcEndpoint", _prop("VpcEndpointId"), no_arn, subjects)

    def visit_nat_gateways(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("NatGateways", "NatGateway", _prop("NatGatewayId"), no_arn, subjects)

    def visit_vpc_peering_connections(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "VpcPeeringConnections",
            "VpcPeeringConnection",
            _prop("VpcPeeringConnectionId"),
            no_arn,
            subjects,
        )

    def visit_network_acls(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("NetworkAcls", "NetworkAcl", _prop("NetworkAclId"), no_arn, subjects)

    def visit_security_groups(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("SecurityGroups", "SecurityGroup", _prop("GroupId"), no_arn, subjects)

    def visit_instances(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("Instances", "Instance", _prop("InstanceId"), no_arn, subjects)

    def visit_volumes(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("Volumes", "Volume", _prop("VolumeId"), no_arn, subjects)

    def visit_snapshots(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("Snapshots", "Snapshot", _prop("SnapshotId"), no_arn, subjects)

    def visit_network_interfaces(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("NetworkInterfaces", "NetworkInterface", _prop("NetworkInterfaceId"), no_arn, subjects)

    def visit_addresses(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect("Addresses", "Address", _prop("AssociationId"), no_arn, subjects)

    def visit_rds_db_instances(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "RdsDBInstances",
            "RdsDBInstance",
            _prop("DBInstanceIdentifier"),
            lambda s: s.get("DBInstanceArn") or None,
            subjects,
        )

    def visit_rds_db_clusters(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "RdsDBClusters",
            "RdsDBCluster",
            _prop("DBClusterIdentifier"),
            lambda s: s.get("DBClusterArn") or None,
            subjects,
        )

    def visit_elasticache_clusters(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "ElastiCacheClusters",
            "ElastiCacheCluster",
            _prop("CacheClusterId"),
            cluster_arn_getter(self.region, self.account),
            subjects,
        )

    def visit_classic_load_balancers(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "ClassicLoadBalancers",
            "ClassicLoadBalancer",
            _prop("LoadBalancerName"),
            build_arn(
                "elasticloadbalancing",
                self.region,
                self.account,
                "loadbalancer",
                _prop("LoadBalancerName"),
            ),
            subjects,
        )

    def visit_lambda_functions(self, subjects: List[Dict[str, Any]]) -> None:
        self._collect(
            "LambdaFunctions",
            "LambdaFunction",
            _prop("FunctionName"),
            lambda s: s.get("FunctionArn") or None,
            subjects,
        )
