import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from alternative_finder.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(;[\w-]+=[^;,]*)*;base64,", re.IGNORECASE)
_URI_PREFIXES = ("http://", "https://", "gs://")


class VisionRequestError(Exception):
    """Any failure talking to the label detection provider."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


def _redact_key(s: str) -> str:
    """
    Redact 'key=...' in URLs or text so we never leak API keys in logs/responses.
    """
    if not s:
        return s
    return re.sub(r"(key=)([^&\s]+)", r"\1REDACTED", s)


def _image_payload(image: str) -> Dict[str, Any]:
    """
    Build the `image` object for images:annotate.
      - webcam screenshots arrive as data URLs -> strip the prefix, send as content
      - http(s):// and gs:// references -> imageUri, the provider fetches them
      - anything else is assumed to already be base64
    """
    if image is None or not str(image).strip():
        raise VisionRequestError("No image provided")

    image = str(image).strip()

    if image.lower().startswith(_URI_PREFIXES):
        return {"source": {"imageUri": image}}

    m = _DATA_URL.match(image)
    if m:
        image = image[m.end():]

    return {"content": image}


def build_annotate_request(image: str, max_results: int = 10) -> Dict[str, Any]:
    return {
        "requests": [
            {
                "image": _image_payload(image),
                "features": [{"type": "LABEL_DETECTION", "maxResults": max_results}],
            }
        ]
    }


def _parse_labels(data: Any) -> List[Dict[str, Any]]:
    def bad_shape() -> VisionRequestError:
        return VisionRequestError(f"Unexpected Vision response shape; raw={json.dumps(data)[:2000]}")

    if not isinstance(data, dict):
        raise bad_shape()

    if data.get("error"):
        raise VisionRequestError(f"Vision request failed: {data['error']}")

    responses = data.get("responses") or [{}]
    if not isinstance(responses, list) or not isinstance(responses[0], dict):
        raise bad_shape()
    first = responses[0]

    if first.get("error"):
        err = first["error"]
        if isinstance(err, dict):
            raise VisionRequestError(
                f"Vision label detection failed: {err.get('message') or err}",
                status_code=err.get("code"),
            )
        raise VisionRequestError(f"Vision label detection failed: {err}")

    # Provider omits the key entirely when it found nothing
    labels = first.get("labelAnnotations") or []
    if not isinstance(labels, list):
        raise bad_shape()
    return list(labels)


async def detect_labels(
    image: str,
    *,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[Dict[str, Any]]:
    """
    Sends one image to Google Cloud Vision label detection and returns the
    label annotations exactly as the provider sent them.

    - Single attempt, no retry
    - Redacts the API key from any raised errors
    """
    cfg = settings or default_settings

    api_key = (cfg.GOOGLE_VISION_API_KEY or "").strip()
    if not api_key:
        raise VisionRequestError("GOOGLE_VISION_API_KEY is not set")

    url = f"{cfg.VISION_API_BASE.rstrip('/')}/images:annotate"
    payload = build_annotate_request(image, max_results=cfg.VISION_MAX_LABELS)

    async def _send(c: httpx.AsyncClient) -> httpx.Response:
        try:
            return await c.post(url, params={"key": api_key}, json=payload)
        except httpx.HTTPError as e:
            raise VisionRequestError(f"Vision request failed: {_redact_key(str(e))}") from e

    if client is not None:
        r = await _send(client)
    else:
        async with httpx.AsyncClient(timeout=cfg.VISION_TIMEOUT_SECONDS) as c:
            r = await _send(c)

    if r.status_code >= 400:
        safe_body = _redact_key(r.text)[:2000]
        logger.warning("Vision returned %s: %s", r.status_code, safe_body[:200])
        raise VisionRequestError(
            f"Vision request failed: {r.status_code}\nBODY:\n{safe_body}",
            status_code=r.status_code,
            body=safe_body,
        )

    try:
        data = r.json()
    except ValueError:
        raise VisionRequestError(f"Vision returned non-JSON body: {_redact_key(r.text)[:2000]}")

    labels = _parse_labels(data)
    logger.debug("Vision returned %d labels", len(labels))
    return labels
