import pytest

from vpctag.config import ServiceClients
from vpctag.engine import apply
from vpctag.engine import tag_engine
from vpctag.errors import TagSpecificationError
from vpctag.models import SUCCESS, AwsIdentity, Tag, TagChange, TagSpecification
from vpctag.visitor import Visitor, visit_by_vpc


class _FakeAws:
    def __init__(self, responses=None):
        self.responses = responses or {}
        self.writes = []

    def __getattr__(self, name):
        if name.startswith("_") or name in ("responses", "writes"):
            raise AttributeError(name)

        def _operation(**kwargs):
            if name.startswith(("create_", "add_", "tag_")):
                self.writes.append((name, kwargs))
            return self.responses.get(name, {})

        _operation.__name__ = name
        return _operation


IDENTITY = AwsIdentity(account="111", arn="arn:aws:iam::111:user/u", user_id="U", region="eu-west-1", profile=None)


def _vpc_with_one_instance():
    ec2 = _FakeAws({
        "describe_vpcs": {"Vpcs": [{"VpcId": "vpc-1", "OwnerId": "111", "Tags": [{"Key": "Env", "Value": "prod"}, {"Key": "Owner", "Value": "team-a"}]}]},
        "describe_instances": {
            "Reservations": [{"Instances": [{"InstanceId": "i-1", "Tags": [{"Key": "Env", "Value": "dev"}]}]}]
        },
    })
    return ServiceClients(ec2=ec2, rds=_FakeAws(), elasticache=_FakeAws(), elb=_FakeAws(), lambda_=_FakeAws())


def test_plan_vpc_tags_end_to_end():
    clients = _vpc_with_one_instance()
    spec = TagSpecification([Tag("Env", "prod"), Tag("Owner", "team-a")])

    plans = tag_engine.plan_vpc_tags("vpc-1", spec, clients, IDENTITY)

    assert len(plans) == 1
    assert plans[0].resource_id == "i-1"
    assert plans[0].changes == [TagChange("Env", "prod", "apply"), TagChange("Owner", "team-a", "apply")]


def test_plan_vpc_tags_renders_values_with_context_and_overrides():
    clients = _vpc_with_one_instance()
    spec = TagSpecification([Tag("Name", "{{ vpc_id }}-{{ region }}-{{ team }}")])

    plans = tag_engine.plan_vpc_tags("vpc-1", spec, clients, IDENTITY, overrides={"team": "a"})

    assert {p.changes[0].value for p in plans} == {"vpc-1-eu-west-1-a"}


def test_plan_vpc_tags_unknown_template_variable_is_fatal():
    spec = TagSpecification([Tag("Name", "{{ missing }}")])

    with pytest.raises(TagSpecificationError):
        tag_engine.plan_vpc_tags("vpc-1", spec, _vpc_with_one_instance(), IDENTITY)


def test_collect_current_tags_returns_resources_and_visits():
    resources, visits = tag_engine.collect_current_tags("vpc-1", _vpc_with_one_instance(), IDENTITY)

    assert [(r.type, r.resource_id) for r in resources] == [("Vpc", "vpc-1"), ("Instance", "i-1")]
    assert len(visits) == 20
    assert all(v.error is None for v in visits)


def test_plan_then_apply_writes_through_ec2():
    clients = _vpc_with_one_instance()
    plans = tag_engine.plan_vpc_tags("vpc-1", TagSpecification([Tag("Env", "prod")]), clients, IDENTITY)

    result = apply(plans, clients)

    assert result.summary == {SUCCESS: 1}
    assert clients.ec2.writes == [
        ("create_tags", {"Resources": ["i-1"], "Tags": [{"Key": "Env", "Value": "prod"}], "DryRun": False})
    ]


def test_visit_by_vpc_drives_any_visitor():
    seen = []

    class _OnlyVpc(Visitor):
        def handlers(self):
            return {"Vpc": seen.append}

    visits = visit_by_vpc("vpc-1", _OnlyVpc(), _vpc_with_one_instance(), IDENTITY)

    assert [v.handler_name for v in visits] == ["visit_vpc"]
    assert seen[0]["VpcId"] == "vpc-1"
