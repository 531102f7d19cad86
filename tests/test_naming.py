import pytest

from cmdbkit.models import Model, ModelGroup, ModelRelation, RelationshipModel
from cmdbkit.naming import (
    ValidationError,
    add_model_group,
    count_relationship_usage,
    validate_relationship_label,
    validate_uid_name,
)


def test_valid_uid_and_name_are_returned_stripped():
    assert validate_uid_name("  host_01 ", " 主机 ") == ("host_01", "主机")


@pytest.mark.parametrize("uid", ["a", "a" * 30, "z_9_x", "server"])
def test_uid_accepted(uid):
    assert validate_uid_name(uid, "name")[0] == uid


def test_name_limit_counts_characters_not_bytes():
    name = "名" * 30
    assert validate_uid_name("uid", name)[1] == name
    with pytest.raises(ValidationError, match="名称"):
        validate_uid_name("uid", name + "名")


@pytest.mark.parametrize("name", ["", "   "])
def test_empty_name_rejected(name):
    with pytest.raises(ValidationError, match="名称"):
        validate_uid_name("uid", name)


def test_uid_checked_before_name():
    with pytest.raises(ValidationError, match="唯一标识"):
        validate_uid_name("Bad", "")


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_uid_name("", "x")


@pytest.mark.parametrize("label", ["属于", "a", "运行于主机", " 包含 "])
def test_relationship_label_accepted(label):
    assert validate_relationship_label(label) == label.strip()


@pytest.mark.parametrize("label", ["", "  ", "abcdef", "一二三四五六"])
def test_relationship_label_rejected(label):
    with pytest.raises(ValidationError, match="不满足位数限制"):
        validate_relationship_label(label)


def test_add_model_group_appends_new_group():
    groups = [ModelGroup(uid="host")]
    target = ModelGroup(uid="network", models=[Model(uid="switch")])
    add_model_group(groups, target)
    assert [g.uid for g in groups] == ["host", "network"]
    assert groups[1] is target


def test_add_model_group_merges_models_without_duplicates():
    existing = ModelGroup(uid="host", models=[Model(uid="vm")])
    groups = [existing]
    add_model_group(
        groups, ModelGroup(uid="host", models=[Model(uid="vm"), Model(uid="server")])
    )
    assert len(groups) == 1
    assert [m.uid for m in existing.models] == ["vm", "server"]


def test_count_relationship_usage():
    belongs = RelationshipModel(uid="belong")
    runs = RelationshipModel(uid="run")
    unused = RelationshipModel(uid="connect")
    relations = [
        ModelRelation(relationship_uid="belong"),
        ModelRelation(relationship_uid="run"),
        ModelRelation(relationship_uid="belong"),
        ModelRelation(relationship_uid="other"),
    ]
    result = count_relationship_usage([belongs, runs, unused], relations)
    assert result == [belongs, runs, unused]
    assert belongs.current_usage == sum(r.relationship_uid == "belong" for r in relations)
    assert runs.current_usage == sum(r.relationship_uid == "run" for r in relations)
    assert unused.current_usage == 0


def test_count_relationship_usage_adds_to_existing_count():
    model = RelationshipModel(uid="belong", current_usage=4)
    count_relationship_usage([model], [ModelRelation(relationship_uid="belong")])
    assert model.current_usage == 5