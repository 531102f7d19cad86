# cmdbkit

Building blocks for a model-driven configuration management database (CMDB).
Here a CMDB is organised as **models** (for example "server" or "domain")
that are grouped into **model groups**. Each model has **attribute groups**
that hold typed **attributes**. Concrete **resources** are instances of a
model. Their attribute values live in attribute-group instances and
attribute instances.

The package has no runtime dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Purpose |
| --- | --- |
| `cmdbkit.models` | Dataclasses `Model`, `ModelGroup`, `AttributeGroup`, `Attribute`, `AttributeCommon`, `Resource`, `AttributeGroupIns`, `AttributeIns`, `RelationshipModel` and `ModelRelation`. Audit fields come from `CommonObj`, whose `stamp(creator)` sets the creator, the editor and both times in milliseconds. |
| `cmdbkit.dictpath` | Dotted-path access to nested dicts: `get_path`, `set_path`, `delete_path` and `shift`. |
| `cmdbkit.pool` | `GenericPool`, a bounded pool of closable resources. It raises `InvalidPoolConfig` and `PoolClosed`, both subclasses of `PoolError`. |
| `cmdbkit.naming` | Identifier and name rules (`validate_uid_name`, `validate_relationship_label`), which raise `ValidationError`. Also `add_model_group` and `count_relationship_usage`. |
| `cmdbkit.validation` | `validate_attribute_value` checks one value against an attribute definition. `escape_query_value` puts a backslash before regex-special characters. |
| `cmdbkit.ldapusers` | `UserCache`, a cache of directory users with a time limit (600 s by default), the `LdapUser` record and `uid_from_dn`. |
| `cmdbkit.domains` | Turns DNS provider domains, domain logs and records into attribute maps (`peel_domain`, `peel_domain_log`, `peel_parsing_record`). Also `format_time` and `record_type_code`. |
| `cmdbkit.syncing` | Matching used during a domain sync: `Idc`, `SelfDomain`, `SelfDomainParsingRecord`, `domain_uuid`, `resource_by_attributes`, `parsing_rows_to_records`, `find_self_domain`, `find_idc` and `sync_lock_key`. |

## Examples

Nested dict paths:

```python
from cmdbkit.dictpath import get_path, set_path, delete_path

data = {"a": {"b": {"c": 123}}}
get_path(data, "a.b.c")        # 123
set_path(data, "a.b.c", 456)   # {"a": {"b": {"c": 456}}}
delete_path(data, "a.b.c")     # {"a": {"b": {}}}
```

Checking an identifier and a name. The function returns both stripped:

```python
from cmdbkit.naming import ValidationError, validate_uid_name

validate_uid_name(" host_server ", "Host server")   # ("host_server", "Host server")
try:
    validate_uid_name("Host", "Host server")
except ValidationError as exc:
    print(exc)
```

Building a model and looking up its parts:

```python
from cmdbkit.models import Attribute, AttributeGroup, Model

model = Model(uid="server", name="Server")
group = AttributeGroup(uid="base", name="Base info")
group.add_attribute(Attribute(uid="hostname", name="Hostname", value_type="短字符", required=True))
model.add_attribute_group(group)

hostname = model.get_attribute_group_by_uid("base").get_attribute_by_uid("hostname")
```

Validating an attribute value. The function returns the stripped value. It
raises `ValidationError` when the value breaks a rule, such as a required
field, the attribute's regular expression, a length limit, an integer range,
or an enum or list choice:

```python
from cmdbkit.validation import validate_attribute_value

validate_attribute_value(hostname, " web-01 ")   # "web-01"
```

Attribute value types use the CMDB's own labels: 短字符 (short text, at most
256 bytes), 长字符 (long text, at most 2000 bytes), 数字 (integer), 浮点数
(decimal), 枚举 (enumeration), 日期 (date, `YYYY-MM-DD`), 时间 (date and
time, `YYYY-MM-DD hh:mm:ss`), 用户 (user), 布尔 (`true` or `false`) and 列表
(list).

Caching directory users. You supply the loader, which returns
`(dn, cn)` pairs:

```python
from cmdbkit.ldapusers import UserCache

cache = UserCache(lambda: [("uid=alice,ou=people,dc=example,dc=com", "Alice")])
cache.name_of("alice")   # "Alice"
```

Flattening a provider domain entry:

```python
from cmdbkit.domains import peel_domain

values = peel_domain({"DomainName": "example.com", "InstanceEndTime": "2030-01-02T03:04Z"})
values["domain_expiration_date"]   # "2030-01-02 03:04:00"
```

A pool of resources:

```python
import io
from cmdbkit.pool import GenericPool

pool = GenericPool(1, 4, 3600, io.StringIO)
conn = pool.acquire()
pool.release(conn)
pool.shutdown()
```

## What the package does not do

This is a library of data types and pure helpers. It does not store
anything. There is no graph database access and no persistence for models or
resources. It does not convert query rows into these objects. It has no HTTP
API and no command-line tool. It does not talk to a directory server or a
DNS provider. `UserCache` calls whatever loader you give it, and the
`domains` functions take provider entries as plain mappings. The sync
helpers match and merge data only. Running a sync, and any locking around
it, is left to the caller.