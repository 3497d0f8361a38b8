# Shared fixtures: a fake terminology server built on httpx.MockTransport.

import json

import httpx
import pytest

from tx_mcp_server.utils.terminology_client import ClientConfig, TerminologyClient

BASE_URL = "https://tx.example.org/fhir"


class FakeTerminologyServer:
    """Records every request and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = {}
        self.error: Exception | None = None

    def respond(self, body, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code

    def raise_error(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(
            self.status_code,
            content=json.dumps(self.body),
            headers={"Content-Type": "application/fhir+json"},
        )

    def client(self) -> TerminologyClient:
        return TerminologyClient(
            ClientConfig(base_url=BASE_URL),
            transport=httpx.MockTransport(self.handler),
        )

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def tx_server():
    return FakeTerminologyServer()
