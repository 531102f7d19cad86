"""Naming rules for models, groups and relationships, and group bookkeeping."""

from __future__ import annotations

import json
import re
from collections import Counter
from collections.abc import Iterable, MutableSequence
from typing import Any

from cmdbkit.models import ModelGroup, RelationshipModel

_UID_PATTERN = re.compile(r"[a-z][_a-z0-9]{0,29}")
_NAME_MAX = 30
_LABEL_MIN = 1
_LABEL_MAX = 5


class ValidationError(ValueError):
    """A value does not meet the naming rules."""


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def validate_uid_name(uid: str, name: str) -> tuple[str, str]:
    """Check a unique identifier and a display name; return both stripped.

    The uid must start with a lower-case letter and hold only lower-case
    letters, digits and underscores, 30 characters at most. The name must
    hold between 1 and 30 characters.
    """
    uid = uid.strip()
    if not _UID_PATTERN.fullmatch(uid):
        raise ValidationError(
            f"唯一标识{_quote(uid)}不符合规范: 小写英文开头，下划线，数字，小写英文的组合，且长度不超过30位"
        )
    name = name.strip()
    if not name or len(name) > _NAME_MAX:
        raise ValidationError(f"名称{_quote(name)}不符合规范：长度不超过30位")
    return uid, name


def validate_relationship_label(label: str) -> str:
    """Check a relationship direction label (1 to 5 characters); return it stripped."""
    label = label.strip()
    if not _LABEL_MIN <= len(label) <= _LABEL_MAX:
        raise ValidationError(f"{_quote(label)}不满足位数限制")
    return label


def add_model_group(groups: MutableSequence[ModelGroup], target: ModelGroup) -> None:
    """Add ``target`` to ``groups``, merging its models into a group with the same uid."""
    for group in groups:
        if group.uid == target.uid:
            for model in target.models:
                group.add_model(model)
            return
    groups.append(target)


def count_relationship_usage(
    relationships: Iterable[RelationshipModel], relations: Iterable[Any]
) -> list[RelationshipModel]:
    """Add to each relationship model the number of model relations that use it."""
    usage = Counter(relation.relationship_uid for relation in relations)
    result = list(relationships)
    for relationship in result:
        relationship.current_usage += usage[relationship.uid]
    return result