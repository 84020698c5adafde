"""Single-shot HTTP fetching of TMDb entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from ..config import ApiConfig, EntityKind
from ..errors import FetchError

MOVIE_APPENDICES = ("credits", "keywords", "similar", "recommendations")
PERSON_APPENDICES = ("movie_credits",)


@dataclass(slots=True)
class FetchRequest:
    """Outbound request for one identifier."""

    identifier: int
    url: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    identifier: int
    url: str
    status_code: int
    text: str
    raw: httpx.Response | None = field(repr=False, default=None)


def build_request(api: ApiConfig, kind: EntityKind, identifier: int) -> FetchRequest:
    """Construct the URL and query parameters for one entity."""

    if kind is EntityKind.MOVIE:
        path = f"movie/{identifier}"
        appendices = MOVIE_APPENDICES
    else:
        path = f"person/{identifier}"
        appendices = PERSON_APPENDICES
    return FetchRequest(
        identifier=identifier,
        url=f"{api.base_url}/{path}",
        params={
            "api_key": api.api_key,
            "language": api.language,
            "append_to_response": ",".join(appendices),
        },
    )


class Fetcher:
    """Perform exactly one blocking GET per identifier; no retries.

    Each worker owns its own fetcher, so the underlying client is never shared
    between threads.
    """

    def __init__(
        self,
        api: ApiConfig,
        kind: EntityKind,
        client: httpx.Client | None = None,
    ) -> None:
        self.api = api
        self.kind = kind
        self._client = client or httpx.Client(
            follow_redirects=True,
            timeout=api.timeout,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, identifier: int) -> FetchResponse:
        request = build_request(self.api, self.kind, identifier)
        try:
            response = self._client.get(request.url, params=request.params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(identifier, f"transport error: {exc}") from exc

        if not response.is_success:
            raise FetchError(
                identifier,
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            text = response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(identifier, f"unreadable body: {exc}", response.status_code) from exc

        return FetchResponse(
            identifier=identifier,
            url=str(response.url),
            status_code=response.status_code,
            text=text,
            raw=response,
        )


__all__ = ["FetchRequest", "FetchResponse", "Fetcher", "build_request"]
