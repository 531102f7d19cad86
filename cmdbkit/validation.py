"""Checks applied to attribute values before a resource is saved."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any

from cmdbkit.models import AttributeCommon
from cmdbkit.naming import ValidationError

SHORT_TEXT = "短字符"
LONG_TEXT = "长字符"
INTEGER = "数字"
FLOAT = "浮点数"
ENUM = "枚举"
DATE = "日期"
TIME = "时间"
USER = "用户"
BOOLEAN = "布尔"
LIST = "列表"

SHORT_TEXT_MAX_BYTES = 256
LONG_TEXT_MAX_BYTES = 2000

# The first character is deliberately never escaped.
_SPECIAL = "~`!@#$%^&*()_-+={}[]:;\"'|\\,.<>/?"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"(-?[0-9]+)(\.[0-9]+)?")
_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2}) ([0-9]{1,2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?"
)
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_WIDTH = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = set("0123456789abcdefABCDEF")


def _quote(text: Any) -> str:
    return json.dumps(str(text), ensure_ascii=False)


def escape_query_value(target: str) -> str:
    """Strip ``target`` and put a backslash before each regex-special character."""
    return "".join(
        "\\" + c if c in _SPECIAL[1:] else c for c in target.strip()
    )


def _unquote(body: str) -> str | None:
    """Interpret escape sequences as in a double-quoted string literal.

    Returns None when ``body`` is not a valid literal body.
    """
    if "\n" in body:
        return None
    out = bytearray()
    i = 0
    while i < len(body):
        c = body[i]
        if c == '"':
            return None
        if c != "\\":
            out += c.encode("utf-8")
            i += 1
            continue
        i += 1
        if i >= len(body):
            return None
        c = body[i]
        if c in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[c].encode("utf-8")
            i += 1
        elif c in _HEX_WIDTH:
            width = _HEX_WIDTH[c]
            digits = body[i + 1 : i + 1 + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                return None
            code = int(digits, 16)
            if c == "x":
                out.append(code)
            else:
                if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                    return None
                out += chr(code).encode("utf-8")
            i += 1 + width
        elif c in "01234567":
            digits = body[i : i + 3]
            if len(digits) != 3 or not set(digits) <= set("01234567"):
                return None
            code = int(digits, 8)
            if code > 0xFF:
                return None
            out.append(code)
            i += 3
        else:
            return None
    return out.decode("utf-8", errors="replace")


def _check_regular(attribute: AttributeCommon, value: str) -> None:
    pattern = _unquote(attribute.regular)
    if pattern is None:
        pattern = ""
    try:
        matched = re.search(pattern, value) is not None
    except re.error as exc:
        raise ValidationError(str(exc)) from exc
    if not matched:
        raise ValidationError(
            f"字段{_quote(attribute.name)}内容{_quote(value)}"
            f"不符合正则规范{_quote(attribute.regular)}"
        )


def _parse_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number


def _check_integer(attribute: AttributeCommon, value: str) -> None:
    number = _parse_int(value)
    if number is None:
        raise ValidationError(
            f"字段{_quote(attribute.name)}内容{_quote(value)}不符合{_quote(INTEGER)}规范"
        )
    if attribute.maximum:
        maximum = _parse_int(attribute.maximum)
        if maximum is not None and number > maximum:
            raise ValidationError(
                f"字段{_quote(attribute.name)}内容{_quote(value)}大于最大值{_quote(maximum)}"
            )
    if attribute.minimum:
        minimum = _parse_int(attribute.minimum)
        if minimum is not None and number < minimum:
            raise ValidationError(
                f"字段{_quote(attribute.name)}内容{_quote(value)}小于最小值{_quote(minimum)}"
            )


def _load_items(raw: Any) -> list[dict[str, Any]]:
    if isinstance(raw, str):
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValidationError(str(exc)) from exc
    else:
        items = raw
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ValidationError("expected a JSON array of objects")
    return [{key.lower(): v for key, v in item.items()} for item in items]


def _check_choice(raw: Any, key: str, value: str) -> bool:
    return any(
        isinstance(item.get(key), str) and item[key] == value for item in _load_items(raw)
    )


def _valid_datetime(match: re.Match[str] | None) -> bool:
    if match is None:
        return False
    parts = [int(g) for g in match.groups()[:6] if g is not None]
    try:
        datetime(*parts)
    except ValueError:
        return False
    return True


def validate_attribute_value(attribute: AttributeCommon, value: str) -> str:
    """Check ``value`` against the definition of ``attribute``.

    Returns the stripped value; raises ValidationError when it breaks a rule.
    """
    value = value.strip()
    name = _quote(attribute.name)
    if attribute.required and not value:
        raise ValidationError(f"字段{name}必填")
    if not value:
        return value

    if attribute.regular:
        _check_regular(attribute, value)

    kind = attribute.value_type
    size = len(value.encode("utf-8"))
    if kind == SHORT_TEXT and size > SHORT_TEXT_MAX_BYTES:
        raise ValidationError(
            f"字段{name}内容{_quote(value)}不符合规范，短字符：长度 256 个英文字符或 85 个中文字符"
        )
    if kind == LONG_TEXT and size > LONG_TEXT_MAX_BYTES:
        raise ValidationError(f"字段{name}内容不符合规范，长字符：长度 2000 英文或 666 个中文字符")
    if kind == INTEGER:
        _check_integer(attribute, value)
    elif kind == FLOAT:
        if not _FLOAT_PATTERN.fullmatch(value):
            raise ValidationError(f"字段{name}内容{_quote(value)}不符合{_quote(FLOAT)}规范")
    elif kind == ENUM:
        if attribute.enums is not None and not _check_choice(attribute.enums, "id", value):
            raise ValidationError(f"字段{name}内容{_quote(value)}不在枚举值里面")
    elif kind == LIST:
        if attribute.list_values is not None and not _check_choice(
            attribute.list_values, "value", value
        ):
            raise ValidationError(f"字段{name}内容{_quote(value)}不在列表值里面")
    elif kind == BOOLEAN:
        if value not in ("true", "false"):
            raise ValidationError(f"字段{name}内容{_quote(value)}不符合{_quote(BOOLEAN)}规范")
    elif kind == DATE:
        if not _valid_datetime(_DATE_PATTERN.fullmatch(value)):
            raise ValidationError(f"字段{name}内容{_quote(value)}不符合{_quote(DATE)}规范")
    elif kind == TIME:
        if not _valid_datetime(_TIME_PATTERN.fullmatch(value)):
            raise ValidationError(f"字段{name}内容{_quote(value)}不符合{_quote(TIME)}规范")
    return value