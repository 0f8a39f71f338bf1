from wsgiref.util import setup_testing_defaults

from zitikit.web import (
    add_response,
    exercise_app,
    greeter_app,
    greeting,
    hello_response,
)


def call(app, path="/", query=""):
    environ = {"PATH_INFO": path, "QUERY_STRING": query}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body.decode()


def test_greeting_with_name():
    assert greeting("bob", "ziti") == "Hello, bob, from ziti\n"


def test_greeting_without_name():
    assert greeting("", "ziti") == "Who are you?\n"


def test_greeter_app_uses_name_parameter(capsys):
    status, headers, body = call(greeter_app("plain-internet"), query="name=bob&name=eve")
    assert status.startswith("200")
    assert body == greeting("bob", "plain-internet")
    assert headers["Content-Length"] == str(len(body.encode()))
    assert "Saying hello to bob" in capsys.readouterr().out


def test_greeter_app_without_name(capsys):
    _, _, body = call(greeter_app("ziti"))
    assert body == "Who are you?\n"
    assert "Asking for introduction" in capsys.readouterr().out


def test_add_response_zitified():
    assert add_response("a=1&b=2", "zitified ") == "zitified a+b=1+2=3"


def test_add_response_prefix_is_prepended():
    query = "a=-4&b=+9"
    assert add_response(query, "zitified ") == "zitified " + add_response(query, "")


def test_add_response_bad_numbers_count_as_zero():
    assert add_response("a=x&b=2") == add_response("a=0&b=2")
    assert add_response("b=7") == add_response("a=0&b=7")
    assert add_response("a= 5&b=1_0") == add_response("a=0&b=0")


def test_hello_response():
    assert hello_response("box") == "zitified hello from box"


def test_exercise_app_hello_route():
    status, _, body = call(exercise_app(hostname="box"), "/hello")
    assert status.startswith("200")
    assert body == hello_response("box")


def test_exercise_app_add_route():
    _, headers, body = call(exercise_app("zitified "), "/add", "a=1&b=2")
    assert body == add_response("a=1&b=2", "zitified ")
    assert headers["Content-Type"].startswith("text/plain")


def test_exercise_app_unknown_route():
    status, _, _ = call(exercise_app(), "/nope")
    assert status.startswith("404")