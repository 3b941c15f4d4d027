import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, List

from ..config import ServiceClients
from ..errors import ResourceNotFoundError
from ..models import AwsIdentity, VisitResult
from ..services import ec2, elasticache, elb, lambda_function, rds
from ..services.filters import (
    filter_by,
    filter_by_cache_subnet_group_name,
    filter_by_instance_id,
    filter_by_rds_cluster_id,
    filter_by_volume_id,
    filter_by_vpc,
    filter_by_vpc_attachment,
)
from .base import COLLECTIONS, Visitor
from .guard import safe_visit

logger = logging.getLogger(__name__)

Query = Callable[[], List[Dict[str, Any]]]

DEFAULT_MAX_WORKERS = 16


def _nothing() -> List[Dict[str, Any]]:
    return []


def _when(inputs: List[Any], query: Query) -> Query:
    """Consulta dependente só roda se houver ids de entrada."""
    return query if inputs else _nothing


class ResourceGraphCrawler:
    """
    Descobre tudo que está pendurado numa VPC e entrega para um Visitor.

    Passo único, sem retry:
    1. resolve a VPC (não achou → ResourceNotFoundError, nenhum dispatch acontece)
    2. wave 1: tudo que filtra direto por vpc-id / attachment, em paralelo
    3. wave 2: o que depende da wave 1 (ids de instância, volumes, clusters, tags)
    4. dispatch de todas as coleções para o visitor, em paralelo

    Falha em qualquer consulta aborta o crawl inteiro. Falha em handler
    fica isolada no VisitResult.
    """

    def __init__(
        self,
        clients: ServiceClients,
        identity: AwsIdentity,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.clients = clients
        self.identity = identity
        self.max_workers = max_workers

    def crawl(self, vpc_id: str, visitor: Visitor) -> List[VisitResult]:
        vpc = self._resolve_vpc(vpc_id)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            first = self._run_wave(executor, self._first_wave(vpc_id))
            logger.info(
                "VPC %s: wave 1 concluída (%d recursos)",
                vpc_id,
                sum(len(v) for v in first.values()),
            )

            second = self._run_wave(executor, self._second_wave(first))
            logger.info(
                "VPC %s: wave 2 concluída (%d recursos)",
                vpc_id,
                sum(len(v) for v in second.values()),
            )

            collections: Dict[str, Any] = {
                "Vpc": vpc,
                "Subnets": first["Subnets"],
                "RouteTables": first["RouteTables"],
                "InternetGateways": first["InternetGateways"],
                "EgressOnlyInternetGateways": first["EgressOnlyInternetGateways"],
                "VpcEndpoints": first["VpcEndpoints"],
                "NatGateways": first["NatGateways"],
                "VpcPeeringConnections": first["VpcPeeringConnections"],
                "NetworkAcls": first["NetworkAcls"],
                "SecurityGroups": first["SecurityGroups"],
                "Instances": first["Instances"],
                **second,
            }

            return self._dispatch(executor, collections, visitor)

    def _resolve_vpc(self, vpc_id: str) -> Dict[str, Any]:
        vpcs = ec2.get_vpcs(self.clients.ec2, filter_by_vpc([vpc_id]))
        if not vpcs:
            raise ResourceNotFoundError(f"unable to locate Vpc '{vpc_id}'")
        return vpcs[0]

    def _first_wave(self, vpc_id: str) -> Dict[str, Query]:
        by_vpc = filter_by_vpc([vpc_id])
        by_attachment = filter_by_vpc_attachment([vpc_id])
        c = self.clients

        return {
            "Subnets": partial(ec2.get_subnets, c.ec2, by_vpc),
            "RouteTables": partial(ec2.get_route_tables, c.ec2, by_vpc),
            "InternetGateways": partial(ec2.get_internet_gateways, c.ec2, by_attachment),
            "EgressOnlyInternetGateways": partial(
                ec2.get_egress_only_internet_gateways, c.ec2, by_attachment
            ),
            "VpcEndpoints": partial(ec2.get_vpc_endpoints, c.ec2, by_vpc),
            "NatGateways": partial(ec2.get_nat_gateways, c.ec2, by_vpc),
            "VpcPeeringConnections": partial(
                ec2.get_vpc_peering_connections,
                c.ec2,
                filter_by("requester-vpc-info.vpc-id", [vpc_id]),
            ),
            "NetworkAcls": partial(ec2.get_network_acls, c.ec2, by_vpc),
            "SecurityGroups": partial(ec2.get_security_groups, c.ec2, by_vpc),
            "Instances": partial(ec2.get_instances, c.ec2, by_vpc),
            "RdsDBInstances": partial(rds.get_rds_db_instances, c.rds, by_vpc),
            "ElastiCacheSubnetGroups": partial(
                elasticache.get_elasticache_subnet_groups, c.elasticache, by_vpc
            ),
            "ClassicLoadBalancers": partial(elb.get_elb_classic_load_balancers, c.elb, by_vpc),
            "LambdaFunctions": partial(lambda_function.get_lambda_functions, c.lambda_, by_vpc),
        }

    def _second_wave(self, first: Dict[str, List[Dict[str, Any]]]) -> Dict[str, Query]:
        c = self.clients

        instance_ids = [i["InstanceId"] for i in first["Instances"] if i.get("InstanceId")]
        volume_ids = ec2.attached_volume_ids(first["Instances"])
        cluster_ids = rds.db_cluster_ids(first["RdsDBInstances"])
        subnet_group_names = [
            g["CacheSubnetGroupName"]
            for g in first["ElastiCacheSubnetGroups"]
            if g.get("CacheSubnetGroupName")
        ]
        cluster_arn = elasticache.cluster_arn_getter(self.identity.region or "", self.identity.account)

        def rds_clusters() -> List[Dict[str, Any]]:
            clusters = rds.get_rds_db_clusters(c.rds, filter_by_rds_cluster_id(cluster_ids))
            return rds.with_rds_tags(c.rds, clusters, "DBClusterArn")

        def cache_clusters() -> List[Dict[str, Any]]:
            clusters = elasticache.get_elasticache_clusters(
                c.elasticache, filter_by_cache_subnet_group_name(subnet_group_names)
            )
            return elasticache.with_elasticache_tags(c.elasticache, clusters, cluster_arn)

        return {
            "Volumes": _when(
                volume_ids, partial(ec2.get_volumes, c.ec2, filter_by_volume_id(volume_ids))
            ),
            "Snapshots": _when(
                volume_ids, partial(ec2.get_snapshots, c.ec2, filter_by_volume_id(volume_ids))
            ),
            "NetworkInterfaces": _when(
                instance_ids,
                partial(
                    ec2.get_network_interfaces,
                    c.ec2,
                    filter_by("attachment.instance-id", instance_ids),
                ),
            ),
            "Addresses": _when(
                instance_ids,
                partial(ec2.get_addresses, c.ec2, filter_by_instance_id(instance_ids)),
            ),
            "RdsDBInstances": _when(
                first["RdsDBInstances"],
                partial(rds.with_rds_tags, c.rds, first["RdsDBInstances"], "DBInstanceArn"),
            ),
            "RdsDBClusters": _when(cluster_ids, rds_clusters),
            "ElastiCacheClusters": _when(subnet_group_names, cache_clusters),
            "ClassicLoadBalancers": _when(
                first["ClassicLoadBalancers"],
                partial(elb.with_elb_classic_load_balancer_tags, c.elb, first["ClassicLoadBalancers"]),
            ),
            "LambdaFunctions": _when(
                first["LambdaFunctions"],
                partial(lambda_function.with_lambda_tags, c.lambda_, first["LambdaFunctions"]),
            ),
        }

    @staticmethod
    def _run_wave(executor: Executor, queries: Dict[str, Query]) -> Dict[str, List[Dict[str, Any]]]:
        """
        Dispara todas as consultas e espera todas. A ordem do resultado é a ordem de envio.
        A primeira exceção (na ordem de envio) sobe; o executor ainda espera as demais terminarem.
        """
        futures = {name: executor.submit(query) for name, query in queries.items()}
        results = {name: future.result() for name, future in futures.items()}

        for name, items in results.items():
            logger.debug("%s: %d encontrado(s)", name, len(items))
        return results

    @staticmethod
    def _dispatch(executor: Executor, collections: Dict[str, Any], visitor: Visitor) -> List[VisitResult]:
        handlers = visitor.handlers()
        futures = [
            executor.submit(safe_visit, collections.get(name, []), handlers.get(name), label)
            for name, label in COLLECTIONS
        ]
        results = [future.result() for future in futures]
        return [r for r in results if r.handler_name]


def visit_by_vpc(
    vpc_id: str,
    visitor: Visitor,
    clients: ServiceClients,
    identity: AwsIdentity,
) -> List[VisitResult]:
    return ResourceGraphCrawler(clients, identity).crawl(vpc_id, visitor)
