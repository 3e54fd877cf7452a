# adminsdk

Building blocks for the back end of an admin web application. This is a
library only: it has no command-line entry point. You import the pieces you
need.

## What is inside

- `adminsdk.context`: `RequestContext` holds one request's method, path,
  headers, route parameters, query values and stored values. It also holds the
  response status, body and headers once they are written.
  `generate_msg_id_from_context` returns the `X-Request-Id` header. When the
  header is missing it creates a new UUID and echoes it in the response
  headers. `get_orm` returns the handle stored under `"db"` and raises
  `DBConnectionError` when there is none.
- `adminsdk.response`: `ok`, `error`, `page_ok` and `custom` write the
  standard JSON body (`requestId`, `code`, `msg`, `status`, `data`) to a
  `RequestContext`. Each also stores the `Response` under `"result"`. Paged
  data is wrapped in `Page`.
- `adminsdk.antd`: the same kind of answers in the shape an Ant Design front
  end expects (`success`, `errorCode`, `errorMessage`, `showType`,
  `traceId`, ...), with `ok`, `up_file_ok`, `error`, `page_ok`, `list_ok`,
  `custom`, the `AntdResponse` body and the `ShowType` values.
- `adminsdk.claims`: `MapClaims`, a dict of token claims with typed readers
  (`get_int64`, `get_int`, `get_uint64`, `get_string`, `exp`, `orig_iat`,
  `identity`). There are also request helpers that read the claims stored
  under `"JWT_PAYLOAD"`: `extract_claims`, `get`, `get_user_id`,
  `get_user_id_str`, `get_user_name`, `get_role_name`, `get_role_id`,
  `get_dept_id` and `get_dept_name`.
- `adminsdk.captcha`: `CacheStore` and `new_cache_store` keep captcha answers
  in any object with `set(key, value, expire)`, `get(key)` and
  `delete(key)`.
- `adminsdk.service`: `Service` carries the ORM handle, logger and cache
  that a service works with. `add_error` gathers errors into a
  `CombinedError`.
- `adminsdk.binding`: `BindConstructor` reads the metadata tags (`json`,
  `xml`, `yaml`, `form`, `query`, `uri`) on dataclass fields and decides which
  `Binding` sources a request should be read from. It follows nested models
  marked with `dive`.
- `adminsdk.connection_options`: dataclasses for Redis and NSQ connection
  settings (`RedisConnectOptions`, `NSQOptions`, `Tls`) and for the cache,
  locker and queue sections. `get_redis_options` and `get_nsq_options` turn
  them into client option objects. `load_tls` builds an `ssl.SSLContext` that
  requires client certificates.
- `adminsdk.security`: random keys (`generate_random_key20`, `...16`,
  `...6`), scrypt password digests (`set_password`), bcrypt checks
  (`compare_hash_and_password`), and the guards `assert_that` and
  `has_error`, which raise `CustomError`.
- `adminsdk.sharding`: `crc32_hash`, `crc16_hash` and `crc8_hash` pick a shard
  from the CRC32 of a value. `dynamic_table` returns a scope that calls
  `db.table("<base>_<shard>")`.
- `adminsdk.helpers`: MD5 hex digests, UUIDs, recursive file listing,
  base64 decoding, de-duplication, the `JSONTime` value and the
  `APIException` error builders (`server_error`, `not_found`,
  `parameter_error`, ...).
- `adminsdk.convert`: number and string conversions, comma-separated id
  parsing, JSON serialisation of dataclasses, the `Mode` enum, and
  `translate`, which copies matching fields from one object to another.
- `adminsdk.textcolor`: ANSI colouring (`set_color`, `red`, `green`, ...).
- `adminsdk.netutil`: `http_get`, `http_post`, `get_location` and
  `get_local_host`.

## Example

```python
from adminsdk.context import RequestContext
from adminsdk import response

ctx = RequestContext()
response.ok(ctx, {"name": "demo"}, "done")
print(ctx.body)          # {'requestId': '...', 'code': 200, 'msg': 'done', 'data': {'name': 'demo'}}
print(ctx.get("result").to_dict() == ctx.body)
```

## What this package does not do

There is no HTTP server and no routing. You fill in a `RequestContext`
yourself from whatever framework you use, and you send its `status` and
`body` yourself. The package does not include:

- controller base classes or request loggers;
- an application registry for databases and adapters;
- cache, queue or locker implementations;
- loading of configuration files;
- logger setup;
- websocket handling.

The connection settings only describe Redis and NSQ clients. The package
opens no connection to either.

## Running the tests

```
pip install -e ".[test]"
pytest
```