"""HTTP interface that runs payroll calculations on request."""

from __future__ import annotations

import json
import os
import socket
import socketserver
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from wage_engine.engine import run_payroll
from wage_engine.models import PayRunInput
from wage_engine.tax import (
    FEDERAL_REGION,
    FlatStateCalculator,
    TaxCalculator,
    TaxLaw,
    UsFederalCalculator,
    load_tax_laws_from_dir,
)

CALCULATE_PATH = "/api/calculate"

StartResponse = Callable[..., Any]


@dataclass
class AppState:
    """Tax laws and calculators shared by every request."""

    tax_laws: dict[str, TaxLaw]
    calculators: dict[str, TaxCalculator]
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)


def _status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


def _is_json_content_type(value: str) -> bool:
    mime = value.split(";", 1)[0].strip().lower()
    if mime == "application/json":
        return True
    return mime.startswith("application/") and mime.endswith("+json")


class PayrollApp:
    """WSGI application serving ``POST /api/calculate``."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        if environ.get("PATH_INFO", "") != CALCULATE_PATH:
            return self._respond(start_response, HTTPStatus.NOT_FOUND)
        if environ.get("REQUEST_METHOD", "GET").upper() != "POST":
            return self._respond(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, extra_headers=[("Allow", "POST")]
            )
        if not _is_json_content_type(environ.get("CONTENT_TYPE", "")):
            return self._text(
                start_response,
                HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
                "Expected request with `Content-Type: application/json`",
            )

        body = self._read_body(environ)
        try:
            payload = json.loads(body)
        except ValueError as err:
            return self._text(
                start_response,
                HTTPStatus.BAD_REQUEST,
                f"Failed to parse the request body as JSON: {err}",
            )
        try:
            pay_input = PayRunInput.from_dict(payload)
        except ValueError as err:
            return self._text(
                start_response,
                HTTPStatus.UNPROCESSABLE_ENTITY,
                f"Failed to deserialize the JSON body into the target type: {err}",
            )

        try:
            with self.state.lock:
                result = run_payroll(pay_input, self.state.tax_laws, self.state.calculators)
        except Exception as err:  # any calculator failure becomes a server error
            return self._json(
                start_response, HTTPStatus.INTERNAL_SERVER_ERROR, {"error": str(err)}
            )
        return self._json(start_response, HTTPStatus.OK, result.to_dict())

    @staticmethod
    def _read_body(environ: dict[str, Any]) -> bytes:
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if length <= 0:
            return b""
        return environ["wsgi.input"].read(length)

    @staticmethod
    def _respond(
        start_response: StartResponse,
        status: HTTPStatus,
        body: bytes = b"",
        content_type: str | None = None,
        extra_headers: list[tuple[str, str]] | None = None,
    ) -> list[bytes]:
        headers = [("Content-Length", str(len(body)))]
        if content_type is not None:
            headers.append(("Content-Type", content_type))
        headers.extend(extra_headers or [])
        start_response(_status_line(status), headers)
        return [body]

    def _text(self, start_response: StartResponse, status: HTTPStatus, message: str) -> list[bytes]:
        return self._respond(
            start_response, status, message.encode("utf-8"), "text/plain; charset=utf-8"
        )

    def _json(self, start_response: StartResponse, status: HTTPStatus, payload: Any) -> list[bytes]:
        return self._respond(
            start_response, status, json.dumps(payload).encode("utf-8"), "application/json"
        )


def build_router(tax_law_dir: str | os.PathLike[str]) -> tuple[PayrollApp, AppState]:
    """Load tax laws from ``tax_law_dir`` and build the application and its state.

    Laws are keyed as ``"<region>-<version>"``. A federal calculator is always
    registered, plus a flat-rate calculator for every other region found.
    """
    tax_laws = {f"{law.region}-{law.version}": law for law in load_tax_laws_from_dir(tax_law_dir)}
    calculators: dict[str, TaxCalculator] = {FEDERAL_REGION: UsFederalCalculator()}
    for law in tax_laws.values():
        if law.region != FEDERAL_REGION:
            calculators[law.region] = FlatStateCalculator(law.region)
    state = AppState(tax_laws=tax_laws, calculators=calculators)
    return PayrollApp(state), state


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: Any) -> None:
        pass


class _ThreadingWSGIServer(socketserver.ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _ThreadingWSGIServer6(_ThreadingWSGIServer):
    address_family = socket.AF_INET6


def _parse_address(addr: str) -> tuple[str, int]:
    host, sep, port_text = addr.rpartition(":")
    if not sep or not host or not port_text.isdigit():
        raise ValueError(f"invalid socket address {addr!r}")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"invalid socket address {addr!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port


def serve(addr: str, tax_law_dir: str | os.PathLike[str]) -> None:
    """Serve the payroll API on ``addr`` (``host:port``) until interrupted."""
    app, _state = build_router(tax_law_dir)
    print(f"Server listening on {addr}", flush=True)
    host, port = _parse_address(addr)
    server_class = _ThreadingWSGIServer6 if ":" in host else _ThreadingWSGIServer
    with make_server(host, port, app, server_class=server_class, handler_class=_QuietHandler) as server:
        server.serve_forever()