"""Graph node types stored in the configuration database."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

JSON_KEY = "json"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _json(name: str, **kwargs: Any) -> Any:
    return field(metadata={JSON_KEY: name}, **kwargs)


def _backref() -> Any:
    """A link to a parent node; it is not serialised, compared or shown."""
    return field(default=None, repr=False, compare=False, metadata={JSON_KEY: None})


@dataclass
class _BaseNode:
    id: int = 0
    uuid: str = ""


@dataclass
class CommonObj:
    """Audit fields shared by every node."""

    creator: str = ""
    editor: str = ""
    create_time: int = 0
    update_time: int = 0

    def stamp(self, creator: str) -> None:
        """Mark the node as created and last edited by ``creator`` now."""
        now = _now_ms()
        self.create_time = now
        self.update_time = now
        self.creator = creator
        self.editor = creator


@dataclass
class AttributeCommon:
    """Definition of an attribute, shared by templates and instances."""

    uid: str = ""
    name: str = ""
    value_type: str = ""
    editable: bool = False
    required: bool = False
    unique: bool = False
    default_value: Any = None
    unit: str = ""
    maximum: str = ""
    minimum: str = ""
    enums: Any = None
    list_values: Any = None
    tips: str = ""
    regular: str = ""
    comment: str = ""
    visible: bool = False
    model_uid: str = ""


@dataclass
class Attribute(AttributeCommon, CommonObj, _BaseNode):
    """An attribute of a model, held in an attribute group."""

    attribute_group: AttributeGroup | None = _backref()


@dataclass
class AttributeGroup(CommonObj, _BaseNode):
    """A named group of attributes inside a model."""

    uid: str = ""
    name: str = ""
    model_uid: str = ""
    model: Model | None = _backref()
    attributes: list[Attribute] = field(default_factory=list)

    def add_attribute(self, target: Attribute | None) -> None:
        """Append ``target`` unless an attribute with its uid is present."""
        if target is None:
            return
        if any(attribute.uid == target.uid for attribute in self.attributes):
            return
        self.attributes.append(target)

    def get_attribute_by_uid(self, uid: str) -> Attribute | None:
        return next((a for a in self.attributes if a.uid == uid), None)


@dataclass
class AttributeIns(AttributeCommon, CommonObj, _BaseNode):
    """The value of an attribute on one resource."""

    attribute_group_ins: AttributeGroupIns | None = _backref()
    attribute_ins_value: str = ""


@dataclass
class AttributeGroupIns(CommonObj, _BaseNode):
    """An attribute group as filled in on one resource."""

    uid: str = ""
    name: str = ""
    model_uid: str = ""
    resource: Resource | None = _backref()
    attribute_ins: list[AttributeIns] = field(default_factory=list)

    def add_attribute_ins(self, target: AttributeIns | None) -> None:
        """Append ``target`` unless a value with its uid is present."""
        if target is None:
            return
        if any(ins.uid == target.uid for ins in self.attribute_ins):
            return
        self.attribute_ins.append(target)


@dataclass
class RelationshipModel(CommonObj, _BaseNode):
    """A kind of relationship that models may be linked by."""

    uid: str = ""
    name: str = ""
    source_to_target: str = _json("source2Target", default="")
    target_to_source: str = _json("target2Source", default="")
    direction: str = ""
    current_usage: int = 0


@dataclass
class ModelRelation(CommonObj, _BaseNode):
    """A relationship between two models."""

    uid: str = ""
    relationship_uid: str = ""
    constraint: str = ""
    source_uid: str = ""
    target_uid: str = ""
    comment: Any = None


@dataclass
class Model(CommonObj, _BaseNode):
    """A resource model: the template that resources are created from."""

    uid: str = ""
    name: str = ""
    icon_url: str = ""
    model: Model | None = _backref()
    model_group: ModelGroup | None = _backref()
    attribute_groups: list[AttributeGroup] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)

    def add_attribute_group(self, target: AttributeGroup | None) -> None:
        """Append ``target`` unless a group with its uid is present."""
        if target is None:
            return
        if any(group.uid == target.uid for group in self.attribute_groups):
            return
        self.attribute_groups.append(target)

    def get_attribute_group_by_uid(self, uid: str) -> AttributeGroup | None:
        return next((g for g in self.attribute_groups if g.uid == uid), None)


@dataclass
class ModelGroup(CommonObj, _BaseNode):
    """A named collection of models."""

    uid: str = ""
    name: str = ""
    models: list[Model] = _json("model", default_factory=list)

    def add_model(self, model: Model) -> None:
        """Append ``model`` unless a model with its uid is present."""
        if any(existing.uid == model.uid for existing in self.models):
            return
        self.models.append(model)


@dataclass
class Resource(CommonObj, _BaseNode):
    """An instance of a model."""

    model_uid: str = ""
    model_name: str = ""
    models: Model | None = _backref()
    resource: Resource | None = _backref()
    attribute_group_ins: list[AttributeGroupIns] = field(default_factory=list)

    def add_attribute_group_ins(self, target: AttributeGroupIns | None) -> None:
        """Append ``target``, or merge its values into the group with its uid."""
        if target is None:
            return
        for group in self.attribute_group_ins:
            if group.uid == target.uid:
                for ins in list(target.attribute_ins):
                    group.add_attribute_ins(ins)
                return
        self.attribute_group_ins.append(target)