from typing import Any, Callable, Dict, Optional, Tuple

Handler = Callable[[Any], Any]

# (coleção, label do handler). A ordem é a ordem de dispatch do crawler.
COLLECTIONS: Tuple[Tuple[str, str], ...] = (
    ("Vpc", "visit_vpc"),
    ("Subnets", "visit_subnets"),
    ("RouteTables", "visit_route_tables"),
    ("InternetGateways", "visit_internet_gateways"),
    ("EgressOnlyInternetGateways", "visit_egress_only_internet_gateways"),
    ("VpcEndpoints", "visit_vpc_endpoints"),
    ("NatGateways", "visit_nat_gateways"),
    ("VpcPeeringConnections", "visit_vpc_peering_connections"),
    ("NetworkAcls", "visit_network_acls"),
    ("SecurityGroups", "visit_security_groups"),
    ("Instances", "visit_instances"),
    ("Volumes", "visit_volumes"),
    ("Snapshots", "visit_snapshots"),
    ("NetworkInterfaces", "visit_network_interfaces"),
    ("Addresses", "visit_addresses"),
    ("RdsDBInstances", "visit_rds_db_instances"),
    ("RdsDBClusters", "visit_rds_db_clusters"),
    ("ElastiCacheClusters", "visit_elasticache_clusters"),
    ("ClassicLoadBalancers", "visit_classic_load_balancers"),
    ("LambdaFunctions", "visit_lambda_functions"),
)

COLLECTION_NAMES = tuple(name for name, _ in COLLECTIONS)


class Visitor:
    """
    Contrato de visita: cada visitor declara, numa tabela explícita,
    quais coleções quer receber.

    `Vpc` recebe um único dict; todas as outras coleções recebem uma lista.
    Coleção sem handler não é erro, só quer dizer que o visitor não liga pra ela.
    """

    def handlers(self) -> Dict[str, Optional[Handler]]:
        return {}
