# FILE: backend/feedhub/services/weather_service.py
# Reads the current temperature from a DarkSky-compatible forecast endpoint.
# A failed tick returns None; there is no retry.

from typing import Any, Optional

import httpx
import structlog

from ..core.config import settings

logger = structlog.get_logger(__name__)

class WeatherService:
    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def fetch_current_temperature(self) -> Optional[float]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                payload: Any = response.json()
            return float(payload["currently"]["temperature"])
        except httpx.HTTPError as e:
            logger.warning("weather.fetch_failed", url=self.url, error=str(e))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("weather.payload_invalid", url=self.url, error=repr(e))
        return None

weather_service = WeatherService(settings.WEATHER_API_URL, timeout=settings.WEATHER_TIMEOUT_SECONDS)
