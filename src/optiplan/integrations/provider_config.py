from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import ValidationError

from ..api.models import ProviderConfigPayload

logger = logging.getLogger(__name__)

CONFIG_PATH = "/api/config"
_TIMEOUT_SECONDS = 5


@dataclass(frozen=True)
class ProviderConfig:
    provider_client_id: str = ""
    provider_api_key: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.provider_client_id


async def fetch_provider_config(
    base_url: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ProviderConfig:
    """Ask the server for public provider keys.

    Any failure degrades to an empty config, which puts the calendar adapter in
    simulated mode.
    """

    url = f"{base_url.rstrip('/')}{CONFIG_PATH}"
    try:
        async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS, transport=transport) as client:
            resp = await client.get(url)
            resp.raise_for_status()
            payload = ProviderConfigPayload.model_validate(resp.json())
    except (httpx.HTTPError, ValueError, ValidationError) as exc:
        logger.warning("Provider config unavailable from %s (%s); using simulated calendar", url, exc)
        return ProviderConfig()

    return ProviderConfig(
        provider_client_id=payload.provider_client_id,
        provider_api_key=payload.provider_api_key,
    )


__all__ = ["CONFIG_PATH", "ProviderConfig", "fetch_provider_config"]
