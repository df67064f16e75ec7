# src/petcare_api/adapters/aws_signing.py
"""AWS Signature Version 4 als httpx-Auth-Flow (benötigt von PA-API 5)."""
from __future__ import annotations

import hashlib
import hmac
from collections.abc import Callable, Generator
from datetime import UTC, datetime

import httpx

_ALGORITHM = "AWS4-HMAC-SHA256"


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class AwsSigV4Auth(httpx.Auth):
    requires_request_body = True

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        region: str,
        service: str,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._access_key = access_key
        self._secret_key = secret_key
        self._region = region
        self._service = service
        self._clock = clock

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        now = self._clock()
        amz_date = now.strftime("%Y%m%dT%H%M%SZ")
        date_stamp = now.strftime("%Y%m%d")

        request.headers["host"] = request.url.netloc.decode("ascii")
        request.headers["x-amz-date"] = amz_date

        signed = sorted(
            name
            for name in (k.lower() for k in request.headers.keys())
            if name in ("host", "content-type", "content-encoding") or name.startswith("x-amz-")
        )
        canonical_headers = "".join(f"{name}:{request.headers[name].strip()}\n" for name in signed)
        signed_headers = ";".join(signed)

        canonical_request = "\n".join(
            [
                request.method,
                request.url.raw_path.decode("ascii").split("?", 1)[0] or "/",
                request.url.query.decode("ascii"),
                canonical_headers,
                signed_headers,
                _sha256_hex(request.content),
            ]
        )

        scope = f"{date_stamp}/{self._region}/{self._service}/aws4_request"
        string_to_sign = "\n".join(
            [_ALGORITHM, amz_date, scope, _sha256_hex(canonical_request.encode("utf-8"))]
        )
        signature = hmac.new(
            self._signing_key(date_stamp), string_to_sign.encode("utf-8"), hashlib.sha256
        ).hexdigest()

        request.headers["Authorization"] = (
            f"{_ALGORITHM} Credential={self._access_key}/{scope}, "
            f"SignedHeaders={signed_headers}, Signature={signature}"
        )
        yield request

    def _signing_key(self, date_stamp: str) -> bytes:
        k_date = _hmac(f"AWS4{self._secret_key}".encode("utf-8"), date_stamp)
        k_region = _hmac(k_date, self._region)
        k_service = _hmac(k_region, self._service)
        return _hmac(k_service, "aws4_request")
