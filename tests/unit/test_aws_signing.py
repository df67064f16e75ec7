import hashlib
import hmac
from datetime import UTC, datetime

import httpx

from petcare_api.adapters.aws_signing import AwsSigV4Auth

_FIXED_NOW = datetime(2024, 5, 20, 12, 30, 0, tzinfo=UTC)


def _sign(body: bytes = b'{"Keywords":"collar"}') -> httpx.Request:
    auth = AwsSigV4Auth(
        access_key="AKIAEXAMPLE123",
        secret_key="secret",
        region="us-east-1",
        service="ProductAdvertisingAPI",
        clock=lambda: _FIXED_NOW,
    )
    request = httpx.Request(
        "POST",
        "https://webservices.amazon.com/paapi5/searchitems",
        content=body,
        headers={
            "content-encoding": "amz-1.0",
            "content-type": "application/json; charset=utf-8",
            "x-amz-target": "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.SearchItems",
        },
    )
    flow = auth.auth_flow(request)
    return next(flow)


def test_signing_sets_date_and_authorization_header() -> None:
    signed = _sign()

    assert signed.headers["x-amz-date"] == "20240520T123000Z"
    authorization = signed.headers["Authorization"]
    assert authorization.startswith(
        "AWS4-HMAC-SHA256 Credential=AKIAEXAMPLE123/20240520/us-east-1/ProductAdvertisingAPI/aws4_request, "
    )
    assert (
        "SignedHeaders=content-encoding;content-type;host;x-amz-date;x-amz-target, "
        in authorization
    )


def test_signature_is_deterministic_and_body_dependent() -> None:
    first = _sign().headers["Authorization"]
    second = _sign().headers["Authorization"]
    other = _sign(b'{"Keywords":"leash"}').headers["Authorization"]

    assert first == second
    assert first != other


def test_signing_key_derivation_matches_aws_reference() -> None:
    # Beispiel aus der AWS-Dokumentation ("Deriving the signing key")
    auth = AwsSigV4Auth(
        access_key="AKIDEXAMPLE",
        secret_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
        region="us-east-1",
        service="iam",
    )
    expected = "c4afb1cc5771d871763a393e44b703571b55cc28424d1a5e86da6ed3c154a4b9"

    assert auth._signing_key("20150830").hex() == expected


def test_signature_matches_manual_computation() -> None:
    signed = _sign()
    signature = signed.headers["Authorization"].rsplit("Signature=", 1)[1]

    body_hash = hashlib.sha256(b'{"Keywords":"collar"}').hexdigest()
    canonical = "\n".join(
        [
            "POST",
            "/paapi5/searchitems",
            "",
            "content-encoding:amz-1.0\n"
            "content-type:application/json; charset=utf-8\n"
            "host:webservices.amazon.com\n"
            "x-amz-date:20240520T123000Z\n"
            "x-amz-target:com.amazon.paapi5.v1.ProductAdvertisingAPIv1.SearchItems\n",
            "content-encoding;content-type;host;x-amz-date;x-amz-target",
            body_hash,
        ]
    )
    string_to_sign = "\n".join(
        [
            "AWS4-HMAC-SHA256",
            "20240520T123000Z",
            "20240520/us-east-1/ProductAdvertisingAPI/aws4_request",
            hashlib.sha256(canonical.encode()).hexdigest(),
        ]
    )

    def _h(key: bytes, msg: str) -> bytes:
        return hmac.new(key, msg.encode(), hashlib.sha256).digest()

    key = _h(_h(_h(_h(b"AWS4secret", "20240520"), "us-east-1"), "ProductAdvertisingAPI"), "aws4_request")
    expected = hmac.new(key, string_to_sign.encode(), hashlib.sha256).hexdigest()

    assert signature == expected
