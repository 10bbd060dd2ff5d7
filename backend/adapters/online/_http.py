# adapters/online/_http.py
from __future__ import annotations
from typing import Any, Dict, Optional

import httpx

from core.exceptions import ProviderError

DEFAULT_TIMEOUT_S = 15.0


async def fetch_json(
    provider: str,
    method: str,
    url: str,
    *,
    timeout: Optional[float] = None,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """One request, one JSON object back. Every transport problem is a ProviderError."""
    try:
        async with httpx.AsyncClient(timeout=timeout or DEFAULT_TIMEOUT_S) as client:
            resp = await client.request(
                method, url, params=params, json=json, headers=headers
            )
            resp.raise_for_status()
            data = resp.json()
    except httpx.TimeoutException as e:
        raise ProviderError(provider, f"timed out: {e}") from e
    except httpx.HTTPStatusError as e:
        # include upstream body text for easier debugging
        raise ProviderError(
            provider, f"HTTP {e.response.status_code}: {e.response.text[:300]}"
        ) from e
    except httpx.HTTPError as e:
        raise ProviderError(provider, f"request failed: {e}") from e
    except ValueError as e:
        raise ProviderError(provider, f"response is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ProviderError(provider, "response is not a JSON object")
    return data
