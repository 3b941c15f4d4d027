from vpctag.engine.collector import TagCollector, to_resource
from vpctag.visitor.base import COLLECTION_NAMES


def test_to_resource_normalizes_every_tag_field_shape():
    get_id = lambda s: s["Id"]
    no_arn = lambda s: None

    for field in ("Tags", "TagSet", "TagList", "tags"):
        res = to_resource("Thing", get_id, no_arn, {"Id": "x", field: [{"Key": "Env", "Value": "dev"}]})
        assert res.tags_dict() == {"Env": "dev"}


def test_to_resource_missing_tags_is_empty():
    res = to_resource("Thing", lambda s: s["Id"], lambda s: None, {"Id": "x"})

    assert res.tags == ()


def test_collector_declares_every_collection():
    handlers = TagCollector(region="eu-west-1", account="111").handlers()

    assert set(handlers) == set(COLLECTION_NAMES)
    assert all(callable(h) for h in handlers.values())


def test_collector_builds_vpc_arn_from_owner():
    collector = TagCollector(region="eu-west-1", account="111")

    collector.visit_vpc({"VpcId": "vpc-1", "OwnerId": "222", "Tags": [{"Key": "Env", "Value": "dev"}]})

    [vpc] = collector.result
    assert vpc.type == "Vpc"
    assert vpc.resource_arn == "arn:aws:ec2:eu-west-1:222:vpc/vpc-1"
    assert vpc.tags_dict() == {"Env": "dev"}


def test_collector_result_follows_collection_order_not_visit_order():
    collector = TagCollector(region="eu-west-1", account="111")

    collector.visit_lambda_functions([
        {"FunctionName": "fn", "FunctionArn": "arn:aws:lambda:eu-west-1:111:function:fn", "tags": []}
    ])
    collector.visit_subnets([{"SubnetId": "subnet-1"}])
    collector.visit_vpc({"VpcId": "vpc-1"})

    assert [r.type for r in collector.result] == ["Vpc", "Subnet", "LambdaFunction"]


def test_collector_identifiers_per_type():
    collector = TagCollector(region="eu-west-1", account="111")

    collector.visit_security_groups([{"GroupId": "sg-1"}])
    collector.visit_addresses([{"AssociationId": "eipassoc-1", "AllocationId": "eipalloc-1"}])
    collector.visit_rds_db_instances([
        {"DBInstanceIdentifier": "db-1", "DBInstanceArn": "arn:aws:rds:eu-west-1:111:db:db-1"}
    ])
    collector.visit_elasticache_clusters([{"CacheClusterId": "cc-1"}])
    collector.visit_classic_load_balancers([{"LoadBalancerName": "lb-1"}])

    by_type = {r.type: r for r in collector.result}
    assert by_type["SecurityGroup"].resource_id == "sg-1"
    assert by_type["Address"].resource_id == "eipassoc-1"
    assert by_type["RdsDBInstance"].resource_arn == "arn:aws:rds:eu-west-1:111:db:db-1"
    assert by_type["ElastiCacheCluster"].resource_arn == "arn:aws:elasticache:eu-west-1:111:cluster:cc-1"
    assert by_type["ClassicLoadBalancer"].resource_arn == (
        "arn:aws:elasticloadbalancing:eu-west-1:111:loadbalancer/lb-1"
    )
    assert by_type["SecurityGroup"].resource_arn is None
