from datetime import datetime, timedelta, timezone

import pytest

from cmdbkit.domains import (
    format_time,
    peel_domain,
    peel_domain_log,
    peel_parsing_record,
    record_type_code,
)

END = "2030-06-15T08:30Z"
END_DT = datetime(2030, 6, 15, 8, 30, tzinfo=timezone.utc)

DOMAIN_KEYS = {
    "domain_name",
    "domain_holder",
    "domain_type",
    "domain_audit_status",
    "domain_group_id",
    "domain_group_name",
    "domain_curr_date_diff",
    "domain_status",
    "domain_registrant_type",
    "domain_expiration_Status",
    "domain_instance_id",
    "domain_remark",
    "domain_premium",
    "domain_product_id",
    "domain_registration_date",
    "domain_expiration_date",
}


def _domain(**extra):
    data = {
        "DomainName": "example.com",
        "GroupId": "g-1",
        "GroupName": "default",
        "DomainId": "d-1",
        "Remark": "main site",
        "InstanceId": "i-1",
        "InstanceEndTime": END,
        "InstanceExpired": False,
    }
    data.update(extra)
    return data


@pytest.mark.parametrize(
    "kind, code",
    [("A", "0"), ("CNAME", "1"), ("AAAA", "2"), ("MX", "4"), ("TXT", "6"), ("显性URL", "8"), ("隐性URL", "9")],
)
def test_record_type_code_known(kind, code):
    assert record_type_code(kind) == code


def test_record_type_code_unknown_is_empty():
    assert record_type_code("PTR") == ""
    assert record_type_code("") == ""


def test_format_time_full_timestamp():
    assert format_time(END) == "2030-06-15 08:30:00"


@pytest.mark.parametrize("short", ["", "2030", "2030-06-1"])
def test_format_time_short_unchanged(short):
    assert format_time(short) == short


def test_peel_domain_keys_and_copied_fields():
    result = peel_domain(_domain(), now=END_DT - timedelta(days=3))
    assert set(result) == DOMAIN_KEYS
    assert result["domain_name"] == "example.com"
    assert result["domain_group_id"] == "g-1"
    assert result["domain_instance_id"] == "d-1"
    assert result["domain_product_id"] == "i-1"
    assert result["domain_remark"] == "main site"
    assert result["domain_expiration_date"] == format_time(END)
    assert result["domain_expiration_Status"] == "1"
    assert result["domain_holder"] == ""


def test_peel_domain_days_left_decreases_by_day():
    earlier = peel_domain(_domain(), now=END_DT - timedelta(days=10))
    later = peel_domain(_domain(), now=END_DT - timedelta(days=9))
    assert int(earlier["domain_curr_date_diff"]) - int(later["domain_curr_date_diff"]) == 1


def test_peel_domain_accepts_unix_seconds():
    now = END_DT - timedelta(days=4, hours=2)
    assert peel_domain(_domain(), now=now) == peel_domain(_domain(), now=now.timestamp())


def test_peel_domain_partial_day_past_end_still_counts():
    result = peel_domain(_domain(), now=END_DT + timedelta(seconds=1000))
    assert result["domain_curr_date_diff"] == "1"


def test_peel_domain_long_past_end_is_zero():
    result = peel_domain(_domain(), now=END_DT + timedelta(days=30))
    assert result["domain_curr_date_diff"] == "0"


def test_peel_domain_expired_status():
    result = peel_domain(_domain(InstanceExpired=True), now=END_DT + timedelta(days=30))
    assert result["domain_expiration_Status"] == "2"
    assert result["domain_curr_date_diff"] == "0"


def test_peel_domain_unparsable_end_time():
    result = peel_domain(_domain(InstanceEndTime="2030-06-15 08:30"), now=END_DT - timedelta(days=5))
    assert result["domain_curr_date_diff"] == "0"
    assert result["domain_expiration_date"] == format_time("2030-06-15 08:30")


def test_peel_domain_missing_end_time():
    data = _domain()
    del data["InstanceEndTime"]
    result = peel_domain(data, now=END_DT)
    assert result["domain_expiration_date"] == ""
    assert result["domain_curr_date_diff"] == "0"


def test_peel_domain_log():
    log = {
        "Message": "added record",
        "DomainName": "example.com",
        "Action": "ADD",
        "ClientIp": "192.0.2.10",
        "ActionTime": END,
    }
    result = peel_domain_log(log)
    assert result == {
        "details": "added record",
        "domain_name": "example.com",
        "operation": "ADD",
        "operation_ip_address": "192.0.2.10",
        "result": "",
        "time": format_time(END),
    }


def test_peel_parsing_record():
    record = {
        "DomainName": "example.com",
        "Line": "default",
        "Locked": True,
        "Priority": 10,
        "RR": "www",
        "RecordId": "r-42",
        "Status": "ENABLE",
        "TTL": 600,
        "Type": "A",
        "Value": "192.0.2.1",
    }
    result = peel_parsing_record(record)
    assert result["locked"] == "true"
    assert result["priority"] == "10"
    assert result["ttl"] == "600"
    assert result["rr"] == "www"
    assert result["record_id"] == "r-42"
    assert result["type"] == "A"
    assert result["value"] == "192.0.2.1"
    assert result["domain_id"] == ""
    assert result["puny_code"] == ""


def test_peel_parsing_record_unlocked_flag():
    result = peel_parsing_record({"Locked": False, "TTL": 300, "Priority": 0})
    assert result["locked"] == "false"
    assert result["ttl"] == "300"
    assert result["domain_name"] == ""