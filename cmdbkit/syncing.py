"""Bookkeeping for synchronising domain resources from external sources."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from cmdbkit.models import Resource

_SYNC_LOCKS = {
    "built_domain": "built_domain",
    "built_domain_parsing": "built_domain",
    "ali_domain": "ali_domain",
    "ali_domain_log": "ali_domain",
    "ali_parsing_records": "ali_domain",
}

_RECORD_FIELDS = {
    "parsing_records": "parsing_records",
    "record_type": "record_type",
    "record_value": "record_value",
}


@dataclass
class Idc:
    """A machine room resource: its uuid and data-centre name."""

    uuid: str = ""
    idc: str = ""


@dataclass
class SelfDomain:
    """A self-hosted domain and the machine room it belongs to."""

    domain_uuid: str = ""
    idc_uuid: str = ""
    domain: str = ""
    idc: str = ""


@dataclass
class SelfDomainParsingRecord:
    """A DNS record of a self-hosted domain."""

    domain_uuid: str = ""
    idc_uuid: str = ""
    idc: str = ""
    domain: str = ""
    uuid: str = ""
    parsing_records: str = ""
    record_type: str = ""
    record_value: str = ""


def _attribute_values(resource: Resource) -> dict[str, str]:
    return {
        ins.uid: ins.attribute_ins_value
        for group in resource.attribute_group_ins
        for ins in group.attribute_ins
    }


def domain_uuid(resources: Iterable[Resource], domain_name: str) -> str:
    """Return the uuid of the resource whose ``domain_name`` is ``domain_name``, or ''."""
    for resource in resources:
        for group in resource.attribute_group_ins:
            for ins in group.attribute_ins:
                if ins.uid == "domain_name" and ins.attribute_ins_value == domain_name:
                    return resource.uuid
    return ""


def resource_by_attributes(
    resources: Iterable[Resource], attributes: Mapping[str, str] | None
) -> Resource | None:
    """Return the first resource holding every given attribute value, or None.

    An empty set of attributes matches nothing.
    """
    if not attributes:
        return None
    for resource in resources:
        values = _attribute_values(resource)
        if all(key in values and values[key] == value for key, value in attributes.items()):
            return resource
    return None


def parsing_rows_to_records(rows: Iterable[Sequence[Any]]) -> list[SelfDomainParsingRecord]:
    """Merge query rows into one parsing record per resource uuid.

    Each row holds the record uuid, an attribute uid and its value, then the
    domain uuid, domain name, room uuid and room name. Records keep the order
    in which their uuids first appear.
    """
    by_uuid: dict[str, SelfDomainParsingRecord] = {}
    for row in rows:
        uuid, attribute, value = row[0], row[1], row[2]
        record = by_uuid.get(uuid)
        if record is None:
            record = SelfDomainParsingRecord(
                uuid=uuid,
                domain_uuid=row[3],
                domain=row[4],
                idc_uuid=row[5],
                idc=row[6],
            )
            by_uuid[uuid] = record
        field_name = _RECORD_FIELDS.get(attribute)
        if field_name is not None:
            setattr(record, field_name, value)
    return list(by_uuid.values())


def find_self_domain(idc: str, name: str, domains: Iterable[SelfDomain]) -> SelfDomain | None:
    """Return the domain called ``name`` in room ``idc``, or None."""
    return next((d for d in domains if d.idc == idc and d.domain == name), None)


def find_idc(name: str, idcs: Iterable[Idc]) -> Idc | None:
    """Return the machine room called ``name``, or None."""
    return next((idc for idc in idcs if idc.idc == name), None)


def sync_lock_key(model_uid: str) -> str | None:
    """Return the lock shared by the sync job of ``model_uid``, or None if it has none."""
    return _SYNC_LOCKS.get(model_uid)