import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from alternative_finder.core.config import Settings

logger = logging.getLogger(__name__)


class DetectionError(Exception):
    pass


@dataclass
class DetectionResult:
    is_american: bool
    labels: List[Dict[str, Any]] = field(default_factory=list)
    demo: bool = False


class Detector:
    async def detect(self, image: str) -> DetectionResult:
        raise NotImplementedError


class DemoDetector(Detector):
    """Pretends to classify: waits a moment and reports nothing found."""

    def __init__(self, delay_seconds: float = 1.5):
        self.delay_seconds = delay_seconds

    async def detect(self, image: str) -> DetectionResult:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return DetectionResult(is_american=False, labels=[], demo=True)


class RemoteDetector(Detector):
    """Posts the frame to the detect-product service."""

    def __init__(
        self,
        functions_url: str,
        anon_key: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = 60,
    ):
        self.endpoint = f"{functions_url.rstrip('/')}/detect-product"
        self.anon_key = anon_key
        self._client = client
        self.timeout = timeout

    async def _post(self, client: httpx.AsyncClient, image: str) -> httpx.Response:
        return await client.post(
            self.endpoint,
            headers={
                "Authorization": f"Bearer {self.anon_key}",
                "Content-Type": "application/json",
            },
            json={"image": image},
        )

    async def detect(self, image: str) -> DetectionResult:
        try:
            if self._client is not None:
                r = await self._post(self._client, image)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    r = await self._post(client, image)
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DetectionError(f"detect-product call failed: {e}") from e

        if r.status_code >= 400 or not isinstance(data, dict) or "error" in data:
            message = data.get("error") if isinstance(data, dict) else None
            raise DetectionError(f"detect-product returned {r.status_code}: {message or r.text[:500]}")

        return DetectionResult(
            is_american=bool(data.get("isAmerican")),
            labels=list(data.get("labels") or []),
        )


def select_detector(cfg: Settings) -> Detector:
    if cfg.is_configured:
        return RemoteDetector(cfg.functions_url, cfg.SUPABASE_ANON_KEY, timeout=cfg.DETECT_TIMEOUT_SECONDS)
    return DemoDetector(cfg.DEMO_SCAN_DELAY_SECONDS)
