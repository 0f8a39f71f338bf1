# zitikit

Building blocks for services on a zero-trust overlay network: the identity
configuration file, enrollment token claims, and the logic behind a few small
network tools — a latency pinger, a chat relay, a line reflector, a
point-to-point call console and two WSGI greeters. It uses only the standard
library.

The tools work on connection objects you supply. Anything with
`recv(size) -> bytes`, `sendall(data)` and `close()` will do, such as a
`socket.socket`; `reflect_lines` also needs `makefile("rb")`.

## Identity configuration — `zitikit.config`

`Config` holds the controller API address (`zt_api`, JSON key `ztAPI`), the
identity block (`id`) and the requested config types (`config_types`, JSON key
`configTypes`). Missing keys take empty defaults.

```python
from zitikit.config import Config, ConfigError

try:
    cfg = Config.from_file("identity.json")
except ConfigError as exc:
    print(exc)
else:
    same = Config.from_dict(cfg.to_dict())
```

`from_file` raises `ConfigError` when the file cannot be read, is not JSON, or
holds values of the wrong type. `ZITI_SESSION` is the header name
(`zt-session`) used to pass sessions around.

## Key algorithms — `zitikit.key_alg`

`KeyAlg.set(value)` accepts `EC` or `RSA` in any letter case and raises
`ValueError` for anything else. `is_ec()` and `is_rsa()` tell which was
chosen, `str()` gives the name, and `type_hint()` returns `RSA|EC`.

## Enrollment claims — `zitikit.token`

`EnrollmentClaims` carries the enrollment method and the standard JWT claims
(`audience`, `expires_at`, `id`, `issued_at`, `issuer`, `not_before`,
`subject`).

- `enrollment_url()` resolves `/edge/client/v1/enroll` against the issuer and
  appends the `method` and `token` query parameters.
- `to_map_claims()` returns a dictionary with `em` and the standard claim keys
  (`aud`, `exp`, `jti`, `iat`, `iss`, `nbf`, `sub`), leaving out those that
  hold a zero value.
- `validate(now=None)` checks expiry, issue time and not-before against `now`
  (the current time by default) and raises `ClaimsError` when they do not hold.

## Ping — `zitikit.ping`

- `random_ping_data(n, rng=None)` returns `n` random letters and digits.
- `make_ping_payload(seq, length, rng=None)` builds `"<seq>:<data>"` of total
  length `length`.
- `validate_ping_options(length, timeout, number)` requires length 1–1500,
  timeout 0–65535 and count 0–65535, raising `ValueError` otherwise.
- `PingSession(identity)` records replies with `record(sent, received,
  elapsed_ms)` (returns whether the reply echoed the payload), computes
  min/max/avg/stddev with `compute_stats()`, and renders the closing report
  with `summary()`.
- `handle_ping(conn)` echoes everything read back to the peer until the
  connection ends, then closes it.

## Enrollment output paths — `zitikit.enroll`

`out_path_from_jwt(path)` turns `alice.jwt` into `alice.json`, appends
`.json` to names without a `.jwt` suffix, and raises `EnrollmentPathError` for
names ending in `.json`. `resolve_output_path(jwt_path, out_path="")` derives
the output path when none is given, checks that the token file exists, and
refuses an output path equal to the token path.

## Chat and reflect — `zitikit.chat`

`ChatServer` keeps connected clients by name. `handle_chat(conn)` takes the
client's first read as its name, then relays each later read to every other
client as `name: message` via `broadcast`; a client that fails on write is
dropped and closed. `client_connected` and `client_disconnected` maintain the
client table directly.

`reflect_lines(conn)` answers each newline-terminated line with
`you sent me: <line>` until the peer closes.

## Call console — `zitikit.call`

`CallApp(dial, service="call", identity="", out=None, start_io=True)` is the
state machine of a one-to-one call console. `dial` is a callable
`dial(service, *, identity, connect_timeout, app_data)` returning a
connection; incoming connections also need `source_identifier` and `app_data`
attributes.

`handle_input(line)` understands `/accept` (take the pending call), `/call
<identity>` (dial a peer), `/bye` (hang up) and `/quit` (raises
`SystemExit(0)`); any other line is sent to the current peer. `incoming`,
`remote_data`, `disconnected` and `disconnect_current` feed network events
into the same state. With `start_io=True` a background thread reads the
active connection and puts events on `CallApp.events` for the caller to run.

## HTTP greeters — `zitikit.web`

- `greeter_app(server_type)` is a WSGI app answering `?name=bob` with
  `Hello, bob, from <server_type>` and `Who are you?` when no name is given
  (see `greeting`).
- `exercise_app(prefix="", hostname=None)` serves `/hello` with
  `hello_response(hostname)` and `/add?a=1&b=2` with `add_response(query,
  prefix)`, giving `a+b=1+2=3`; other paths get 404. Unparsable numbers count
  as 0.

Either can be run with `wsgiref.simple_server` or any WSGI server.

## What it does not do

zitikit has no overlay-network transport: it does not authenticate to a
controller, dial or bind services, or perform enrollment requests, and it
does not parse or verify JWT signatures. It installs no command-line tools;
the ping, chat, call and greeter pieces are functions and classes to wire to
connections and listeners of your own.

## Tests

```
pip install -e .[test]
pytest
```