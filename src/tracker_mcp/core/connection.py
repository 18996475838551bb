from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Protocol, Tuple

import httpx
from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError

from .models import Pagination
from .observability import op_call

if TYPE_CHECKING:
    from .project_client import ProjectClient

DEFAULT_BASE_URL = "https://www.pivotaltracker.com/services/v5"
TOKEN_HEADER = "X-TrackerToken"

PAGINATION_HEADERS = {
    "total": "X-Tracker-Pagination-Total",
    "limit": "X-Tracker-Pagination-Limit",
    "offset": "X-Tracker-Pagination-Offset",
    "returned": "X-Tracker-Pagination-Returned",
}


class TrackerClientError(Exception):
    """Base error for client failures."""


class TrackerHTTPError(TrackerClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class TrackerParseError(TrackerClientError):
    pass


class TrackerModelValidationError(TrackerClientError):
    pass


class Connection(Protocol):
    """
    Transport seam consumed by ProjectClient.

    TrackerConnection satisfies it in production; tests may pass any object
    with the same two methods.
    """

    def create_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Request:
        """Build an addressed, authenticated request without a body."""
        ...

    def do(
        self, request: httpx.Request, result_type: Any = None
    ) -> Tuple[Any, Pagination]:
        """
        Send the request and decode the JSON body into result_type.

        Every failure must surface as TrackerClientError or a subclass.
        ProjectClient classifies only those; anything else is treated as a
        bug and propagates.
        """
        ...


class TrackerConnection:
    """
    Shared HTTP connection for the tracker REST API.
    - Handles token auth, base URL and timeouts
    - Decodes JSON bodies into pydantic types and reads pagination headers
    - Never retries; callers decide what a failure means
    """

    def __init__(
        self,
        *,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.Client] = None,
    ):
        base_url = (base_url or "").rstrip("/")
        api_token = api_token or ""

        if not base_url:
            raise ValueError("base_url must be provided.")
        if not api_token:
            raise ValueError("api_token must be provided.")

        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("tracker_mcp.connection")

        self._owns_http = http is None
        self.http = http or httpx.Client(
            headers={
                "Accept": "application/json",
                TOKEN_HEADER: api_token,
            },
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "TrackerConnection":
        load_dotenv()
        base_url = os.getenv("TRACKER_BASE_URL", "").strip() or DEFAULT_BASE_URL
        api_token = os.getenv("TRACKER_API_TOKEN", "").strip()
        return cls(base_url=base_url, api_token=api_token, **kwargs)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "TrackerConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def project(self, project_id: int) -> "ProjectClient":
        from .project_client import ProjectClient

        return ProjectClient(project_id, self)

    def create_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> httpx.Request:
        try:
            return self.http.build_request(
                method.upper(), self.base_url + path, params=params or None
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise TrackerClientError(
                f"Could not build request {method.upper()} {path}: {exc}"
            ) from exc

    def do(
        self, request: httpx.Request, result_type: Any = None
    ) -> Tuple[Any, Pagination]:
        """
        Execute a prepared request.
        - Raises TrackerHTTPError on non-2xx HTTP responses
        - Raises TrackerClientError on network/timeout errors
        - Raises TrackerParseError if the body isn't valid JSON
        - Raises TrackerModelValidationError if JSON doesn't fit result_type
        - Returns (decoded value or None, Pagination)
        """
        method = request.method

        try:
            with op_call(method, request.url.path) as call:
                resp = self.http.send(request)
                call.status = resp.status_code
        except httpx.HTTPError as exc:
            if isinstance(exc, (httpx.ConnectError, httpx.TimeoutException)):
                raise TrackerClientError(
                    f"Network/timeout error calling {method} {request.url}: {exc}"
                ) from exc
            raise TrackerClientError(
                f"HTTPX error calling {method} {request.url}: {exc}"
            ) from exc

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=method)

        pagination = self._pagination(resp.headers)
        if result_type is None:
            return None, pagination

        payload = self._safe_json(resp)
        try:
            value = TypeAdapter(result_type).validate_python(payload)
        except ValidationError as exc:
            raise TrackerModelValidationError(
                f"Response from {method} {request.url} did not match "
                f"{_type_name(result_type)}: {exc}"
            ) from exc
        return value, pagination

    def _safe_json(self, resp: httpx.Response) -> Any:
        # Empty bodies decode like JSON null
        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise TrackerParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

    @staticmethod
    def _pagination(headers: httpx.Headers) -> Pagination:
        values: Dict[str, int] = {}
        for field, header in PAGINATION_HEADERS.items():
            raw = headers.get(header)
            if raw is None:
                continue
            try:
                values[field] = int(raw)
            except ValueError:
                continue
        return Pagination(**values)

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> TrackerHTTPError:
        url = str(resp.request.url)
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                # Tracker errors carry "error", sometimes "general_problem"
                message = (
                    parsed.get("error")
                    or parsed.get("general_problem")
                    or parsed.get("possible_fix")
                    or message
                )
        except ValueError:
            response_text = (resp.text or "")[:500]

        return TrackerHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )


def _type_name(result_type: Any) -> str:
    return getattr(result_type, "__name__", None) or str(result_type)
