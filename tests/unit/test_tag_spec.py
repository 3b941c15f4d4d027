import json
from pathlib import Path

import pytest

from vpctag.errors import TagPlanFileError, TagSpecificationError
from vpctag.models import Tag, TagChange, TagPlan, TagSpecification
from vpctag.tag_spec import (
    dump_tag_plan,
    load_tag_plan,
    load_tag_specification,
    parse_tag_arguments,
    render_tag_specification,
)


def test_load_tag_specification_yaml(tmp_path: Path):
    p = tmp_path / "tags.yaml"
    p.write_text(
        "tags:\n"
        "  - key: Owner\n"
        "    value: team-a\n"
        "  - key: Empty\n",
        encoding="utf-8",
    )

    spec = load_tag_specification(p)

    assert spec.tags == [Tag("Owner", "team-a"), Tag("Empty", "")]


def test_load_tag_specification_rejects_other_extensions(tmp_path: Path):
    p = tmp_path / "tags.json"
    p.write_text("{}", encoding="utf-8")

    with pytest.raises(TagSpecificationError):
        load_tag_specification(p)


def test_load_tag_specification_requires_tags_list(tmp_path: Path):
    p = tmp_path / "tags.yml"
    p.write_text("tags: nope\n", encoding="utf-8")

    with pytest.raises(TagSpecificationError):
        load_tag_specification(p)


def test_render_tag_specification_uses_context():
    spec = TagSpecification([Tag("Name", "{{ vpc_id }}-{{ environment }}"), Tag("Static", "x")])

    out = render_tag_specification(spec, {"vpc_id": "vpc-1", "environment": "prd"})

    assert out.tags == [Tag("Name", "vpc-1-prd"), Tag("Static", "x")]


def test_render_tag_specification_missing_variable_is_error():
    spec = TagSpecification([Tag("Name", "{{ nope }}")])

    with pytest.raises(TagSpecificationError):
        render_tag_specification(spec, {})


def test_parse_tag_arguments_strips_quotes():
    assert parse_tag_arguments(["Owner=team-a", "Env='dev'", 'Note="a=b"']) == [
        Tag("Owner", "team-a"),
        Tag("Env", "dev"),
        Tag("Note", "a=b"),
    ]


@pytest.mark.parametrize("bad", ["novalue", "=x"])
def test_parse_tag_arguments_rejects_malformed(bad):
    with pytest.raises(TagSpecificationError):
        parse_tag_arguments([bad])


def test_tag_plan_file_roundtrip(tmp_path: Path):
    plans = [
        TagPlan(
            resource_id="db-1",
            type="RdsDBInstance",
            resource_arn="arn:aws:rds:eu-west-1:1:db:db-1",
            changes=[TagChange("Env", "prod")],
        ),
        TagPlan(resource_id="subnet-1", type="Subnet", changes=[TagChange("Owner", "team-a")]),
    ]
    p = tmp_path / "plan.json"
    p.write_text(dump_tag_plan(plans), encoding="utf-8")

    assert json.loads(p.read_text(encoding="utf-8"))[1] == {
        "resourceId": "subnet-1",
        "type": "Subnet",
        "changes": [{"key": "Owner", "value": "team-a", "action": "apply"}],
    }
    assert load_tag_plan(p) == plans


def test_load_tag_plan_invalid_content(tmp_path: Path):
    p = tmp_path / "plan.json"
    p.write_text('[{"type": "Subnet"}]', encoding="utf-8")

    with pytest.raises(TagPlanFileError):
        load_tag_plan(p)


def test_load_tag_plan_requires_json_extension(tmp_path: Path):
    p = tmp_path / "plan.yaml"
    p.write_text("[]", encoding="utf-8")

    with pytest.raises(TagPlanFileError):
        load_tag_plan(p)


def test_load_tag_plan_rejects_actions_other_than_apply(tmp_path: Path):
    p = tmp_path / "plan.json"
    p.write_text(
        json.dumps([{"resourceId": "i-1", "type": "Instance", "changes": [{"key": "Env", "value": "prod", "action": "remove"}]}]),
        encoding="utf-8",
    )

    with pytest.raises(TagPlanFileError, match="remove"):
        load_tag_plan(p)


def test_load_tag_plan_non_mapping_change_is_invalid(tmp_path: Path):
    p = tmp_path / "plan.json"
    p.write_text(json.dumps([{"resourceId": "i-1", "type": "Instance", "changes": ["Env=prod"]}]), encoding="utf-8")

    with pytest.raises(TagPlanFileError):
        load_tag_plan(p)


@pytest.mark.parametrize(
    "content",
    [
        "tags:\n  - value: prod\n",
        "tags:\n  - Env=prod\n",
        "tags: [\n",
    ],
)
def test_load_tag_specification_invalid_content_is_spec_error(tmp_path: Path, content):
    p = tmp_path / "tags.yaml"
    p.write_text(content, encoding="utf-8")

    with pytest.raises(TagSpecificationError):
        load_tag_specification(p)


def test_render_tag_specification_escaped_braces_stay_literal():
    spec = TagSpecification([Tag("Note", "{{ '{{' }}raw")])

    assert render_tag_specification(spec, {}).tags == [Tag("Note", "{{raw")]
