from urllib.parse import parse_qs, urlsplit

import pytest

from zitikit.token import ENROLL_PATH, ClaimsError, EnrollmentClaims


def _claims(**kwargs):
    base = dict(
        enrollment_method="ott",
        id="abc123",
        issuer="https://ctrl.example.com:1280",
        subject="sub-1",
    )
    base.update(kwargs)
    return EnrollmentClaims(**base)


def test_enrollment_url_pinned():
    assert (
        _claims().enrollment_url()
        == "https://ctrl.example.com:1280/edge/client/v1/enroll?method=ott&token=abc123"
    )


def test_enrollment_url_replaces_issuer_path_and_query():
    claims = _claims(issuer="https://ctrl.example.com/some/path?x=1", id="a b&c")
    parts = urlsplit(claims.enrollment_url())
    assert parts.netloc == "ctrl.example.com"
    assert parts.path == ENROLL_PATH
    assert parse_qs(parts.query) == {"method": ["ott"], "token": ["a b&c"]}


def test_enrollment_url_bad_issuer():
    with pytest.raises(ClaimsError):
        _claims(issuer="http://[::1").enrollment_url()


def test_to_map_claims_drops_zero_standard_claims():
    claims = _claims()
    assert claims.to_map_claims() == {
        "em": "ott",
        "jti": "abc123",
        "iss": "https://ctrl.example.com:1280",
        "sub": "sub-1",
    }


def test_to_map_claims_keeps_empty_method_and_times():
    claims = EnrollmentClaims(expires_at=200, issued_at=100, not_before=150, audience="aud-x")
    assert claims.to_map_claims() == {
        "em": "",
        "exp": 200,
        "iat": 100,
        "nbf": 150,
        "aud": "aud-x",
    }


def test_signature_cert_not_in_map():
    claims = _claims(signature_cert=object())
    assert "signature_cert" not in claims.to_map_claims()
    assert set(claims.to_map_claims()) == {"em", "jti", "iss", "sub"}


def test_expired_boundary():
    claims = _claims(expires_at=1000)
    claims.validate(now=1000)
    with pytest.raises(ClaimsError, match="token is expired by"):
        claims.validate(now=1001)


def test_expired_duration_text():
    with pytest.raises(ClaimsError) as info:
        _claims(expires_at=1000).validate(now=1090)
    assert str(info.value) == "token is expired by 1m30s"


def test_used_before_issued():
    with pytest.raises(ClaimsError, match="Token used before issued"):
        _claims(issued_at=500).validate(now=499)


def test_not_before_reported_last():
    claims = _claims(issued_at=500, not_before=500)
    with pytest.raises(ClaimsError, match="token is not valid yet"):
        claims.validate(now=100)


def test_zero_times_never_fail_but_set_ones_do():
    claims = EnrollmentClaims()
    claims.validate(now=0)
    claims.validate(now=10**10)
    claims.expires_at = 5
    with pytest.raises(ClaimsError):
        claims.validate(now=10**10)