"""
GreenTrack India: Upstream Transport
Single-shot JSON GET/POST helpers built on httpx. Upstream failures are
returned as a FetchResult carrying the reason instead of being raised, so
every caller decides its own substitution and logs which branch it took.
No retries, no caching.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class FetchResult:
    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any, status_code: int = 200) -> "FetchResult":
        return cls(data=data, status_code=status_code)

    @classmethod
    def failure(cls, reason: str, status_code: Optional[int] = None) -> "FetchResult":
        return cls(error=reason, status_code=status_code)


@asynccontextmanager
async def _client_scope(client: Optional[httpx.AsyncClient], timeout: float):
    """Borrow the caller's client, or open a short-lived one."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


async def _request_json(
    method: str,
    url: str,
    *,
    client: Optional[httpx.AsyncClient],
    timeout: float,
    **kwargs,
) -> FetchResult:
    try:
        async with _client_scope(client, timeout) as http:
            resp = await http.request(method, url, **kwargs)
            resp.raise_for_status()
            return FetchResult.success(resp.json(), resp.status_code)
    except httpx.HTTPStatusError as e:
        return FetchResult.failure(f"HTTP {e.response.status_code}", e.response.status_code)
    except httpx.HTTPError as e:
        return FetchResult.failure(f"{type(e).__name__}: {e}")
    except ValueError as e:
        return FetchResult.failure(f"malformed JSON ({e})")


async def get_json(
    url: str,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    return await _request_json(
        "GET", url, client=client, timeout=timeout, params=params, headers=headers
    )


async def post_json(
    url: str,
    payload: dict,
    headers: Optional[dict] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    return await _request_json(
        "POST", url, client=client, timeout=timeout, json=payload, headers=headers
    )
