import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List

import httpx
import pytest
from tracker_mcp.core.connection import TrackerConnection
from tracker_mcp.core.models import Pagination

BASE_URL = "https://mock-tracker.com/services/v5"
PROJECT_ID = 99


def load_fixture(name: str) -> Any:
    p = Path(__file__).parent / "fixtures" / name
    with open(p, encoding="utf-8") as f:
        return json.load(f)


@dataclass
class RecordedCall:
    request: httpx.Request
    result_type: Any

    @property
    def path(self) -> str:
        return self.request.url.path

    @property
    def body(self) -> bytes:
        return self.request.content


class FakeConnection:
    """Records requests; replays queued (value, Pagination) results or raises."""

    def __init__(self, *results: Any):
        self.results: List[Any] = list(results)
        self.calls: List[RecordedCall] = []

    def create_request(self, method, path, params=None):
        return httpx.Request(method, "https://tracker.test" + path, params=params)

    def do(self, request, result_type=None):
        self.calls.append(RecordedCall(request=request, result_type=result_type))
        result = self.results.pop(0) if self.results else (None, Pagination())
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def connection():
    conn = TrackerConnection(api_token="mock-token", base_url=BASE_URL)
    yield conn
    conn.close()


@pytest.fixture
def client(connection):
    return connection.project(PROJECT_ID)
