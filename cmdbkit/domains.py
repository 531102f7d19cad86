"""Flatten DNS provider records into attribute values for domain resources."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

SECONDS_PER_DAY = 86400

_RECORD_TYPES = {
    "A": "0",
    "CNAME": "1",
    "AAAA": "2",
    "NS": "3",
    "MX": "4",
    "SRV": "5",
    "TXT": "6",
    "CAA": "7",
    "显性URL": "8",
    "隐性URL": "9",
}

_END_TIME_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2})Z")


def record_type_code(record_type: str) -> str:
    """Return the code stored for a DNS record type, or '' if it is unknown."""
    return _RECORD_TYPES.get(record_type, "")


def format_time(source: str) -> str:
    """Turn a provider timestamp such as ``2021-01-02T03:04Z`` into ``2021-01-02 03:04:00``.

    Strings shorter than ten characters are returned unchanged.
    """
    if len(source) >= 10:
        return source.replace("T", " ").replace("Z", "") + ":00"
    return source


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _number(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return str(int(value)) if value is not None else "0"


def _flag(data: Mapping[str, Any], key: str) -> str:
    return "true" if data.get(key) else "false"


def _unix_seconds(now: datetime | float | None) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
    if isinstance(now, datetime):
        now = now.timestamp()
    return math.floor(now)


def _parse_end_time(text: str) -> datetime | None:
    match = _END_TIME_PATTERN.fullmatch(text)
    if match is None:
        return None
    try:
        return datetime(*(int(g) for g in match.groups()), tzinfo=timezone.utc)
    except ValueError:
        return None


def _days_between(start: int, end: int) -> int:
    """Whole days from ``start`` to ``end``, truncated toward zero."""
    diff = end - start
    days = abs(diff) // SECONDS_PER_DAY
    return days if diff >= 0 else -days


def peel_domain(domain: Mapping[str, Any], now: datetime | float | None = None) -> dict[str, str]:
    """Map a provider domain entry to the attribute values of a domain resource.

    ``now`` is a datetime or a Unix time in seconds; it defaults to the
    current time. The days left count the day of expiry itself.
    """
    date_left = 0
    status = 1
    if domain.get("InstanceExpired"):
        status = 2

    raw_end = _text(domain, "InstanceEndTime")
    end_text = format_time(raw_end)
    if len(end_text) >= 10:
        end = _parse_end_time(raw_end)
        if end is not None:
            day = _days_between(_unix_seconds(now), math.floor(end.timestamp()))
            if day >= 0:
                date_left = day + 1

    return {
        "domain_name": _text(domain, "DomainName"),
        "domain_holder": "",
        "domain_type": "",
        "domain_audit_status": "",
        "domain_group_id": _text(domain, "GroupId"),
        "domain_group_name": _text(domain, "GroupName"),
        "domain_curr_date_diff": str(date_left),
        "domain_status": "",
        "domain_registrant_type": "",
        "domain_expiration_Status": str(status),
        "domain_instance_id": _text(domain, "DomainId"),
        "domain_remark": _text(domain, "Remark"),
        "domain_premium": "",
        "domain_product_id": _text(domain, "InstanceId"),
        "domain_registration_date": "",
        "domain_expiration_date": end_text,
    }


def peel_domain_log(domain_log: Mapping[str, Any]) -> dict[str, str]:
    """Map a provider domain log entry to the attribute values of a log resource."""
    return {
        "details": _text(domain_log, "Message"),
        "domain_name": _text(domain_log, "DomainName"),
        "operation": _text(domain_log, "Action"),
        "operation_ip_address": _text(domain_log, "ClientIp"),
        "result": "",
        "time": format_time(_text(domain_log, "ActionTime")),
    }


def peel_parsing_record(record: Mapping[str, Any]) -> dict[str, str]:
    """Map a provider DNS record to the attribute values of a parsing-record resource."""
    return {
        "domain_id": "",
        "domain_name": _text(record, "DomainName"),
        "group_id": "",
        "group_name": "",
        "line": _text(record, "Line"),
        "locked": _flag(record, "Locked"),
        "priority": _number(record, "Priority"),
        "puny_code": "",
        "rr": _text(record, "RR"),
        "record_id": _text(record, "RecordId"),
        "status": _text(record, "Status"),
        "ttl": _number(record, "TTL"),
        "type": _text(record, "Type"),
        "value": _text(record, "Value"),
    }