import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

import httpx

from happyhour.core import get_settings, PDF_MEDIA_TYPE

logger = logging.getLogger(__name__)


class AnalysisServiceError(Exception):
    """Raised when the PDF analysis API fails or returns an unexpected response."""


class AnalysisConfigError(AnalysisServiceError):
    """Raised when the PDF analysis API URL is not configured."""


@dataclass
class MenuAnalysis:
    """Decoded response of POST /upload. ``happy_hours`` items are left as raw JSON."""

    message: str = ""
    filename: str = ""
    pages: list[Any] = field(default_factory=list)
    happy_hours: list[Any] = field(default_factory=list)


def _decode_analysis(raw: Any) -> dict:
    """The ``analysis`` field is a JSON-encoded string; tolerate an already-decoded object."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AnalysisServiceError("Analysis API returned an undecodable analysis.") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise AnalysisServiceError("Analysis API returned an analysis that is not an object.")
    return raw


def parse_analysis_response(data: Any) -> MenuAnalysis:
    if not isinstance(data, dict):
        raise AnalysisServiceError("Analysis API returned unexpected response format.")
    analysis = _decode_analysis(data.get("analysis"))
    happy_hours = analysis.get("happy_hours")
    pages = data.get("pages")
    return MenuAnalysis(
        message=str(data.get("message") or ""),
        filename=str(data.get("filename") or ""),
        pages=pages if isinstance(pages, list) else [],
        happy_hours=happy_hours if isinstance(happy_hours, list) else [],
    )


class PdfAnalysisProvider:
    """Client for the external PDF-to-happy-hours analysis API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def analyze(self, filename: str, content: bytes) -> MenuAnalysis:
        url = f"{self.base_url}/upload"
        files = {"file": (filename, content, PDF_MEDIA_TYPE)}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(url, files=files)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            body = getattr(e.response, "text", None) or ""
            if body:
                logger.warning("Analysis API error %s: %s", e.response.status_code, body[:500])
            raise AnalysisServiceError(
                f"Analysis API returned {e.response.status_code}."
            ) from e
        except httpx.RequestError as e:
            raise AnalysisServiceError("Analysis service unavailable (timeout or connection error).") from e
        except ValueError as e:
            raise AnalysisServiceError("Analysis API returned invalid JSON.") from e
        return parse_analysis_response(data)


@lru_cache
def get_analysis_provider() -> PdfAnalysisProvider:
    s = get_settings()
    if not s.analysis_api_base_url:
        raise AnalysisConfigError("PDF analysis API URL is not configured.")
    return PdfAnalysisProvider(base_url=s.analysis_api_base_url, timeout=s.analysis_timeout_seconds)
