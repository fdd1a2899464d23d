"""Mermaid text -> SVG/PNG through a mermaid.ink compatible HTTP server.

The server takes the diagram as URL-safe base64 in the path:

    GET {server}/svg/{code}            -> image/svg+xml
    GET {server}/img/{code}?type=png   -> image/png

Syntax errors come back as a non-200 response whose body carries the
parser message; that message is surfaced unchanged in ``RenderFailure``.
"""
from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from ..errors import RenderFailure

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "https://mermaid.ink"

MEDIA_TYPES = {
    "svg": "image/svg+xml",
    "png": "image/png",
}


@dataclass(frozen=True, slots=True)
class RenderedDiagram:
    content: bytes
    media_type: str


class DiagramRenderer(ABC):
    @abstractmethod
    async def render(self, diagram: str) -> RenderedDiagram:
        """Turn diagram text into an image, raising RenderFailure when rejected."""


def encode_diagram(diagram: str) -> str:
    return base64.urlsafe_b64encode(diagram.encode("utf-8")).decode("ascii")


class MermaidInkRenderer(DiagramRenderer):
    def __init__(
        self,
        server_url: str = DEFAULT_SERVER,
        output_format: str = "svg",
        theme: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if output_format not in MEDIA_TYPES:
            raise ValueError(f"Unsupported output format: {output_format}")
        self.server_url = server_url.rstrip("/")
        self.output_format = output_format
        self.theme = theme
        self.timeout = timeout
        self._transport = transport

    def build_url(self, diagram: str) -> str:
        encoded = encode_diagram(diagram)
        if self.output_format == "svg":
            return f"{self.server_url}/svg/{encoded}"
        return f"{self.server_url}/img/{encoded}"

    def _params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.output_format == "png":
            params["type"] = "png"
        if self.theme:
            params["theme"] = self.theme
        return params

    async def render(self, diagram: str) -> RenderedDiagram:
        url = self.build_url(diagram)
        logger.info("Rendering %s via %s (%d chars)", self.output_format, self.server_url, len(diagram))
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=self._params())
        except httpx.HTTPError as exc:
            logger.warning("Renderer request failed: %s", exc)
            raise RenderFailure(f"renderer request failed: {exc}") from exc

        if response.status_code != 200:
            message = response.text.strip() or f"renderer returned {response.status_code}"
            logger.warning("Renderer rejected diagram (status=%d): %s", response.status_code, message[:300])
            raise RenderFailure(message)

        return RenderedDiagram(
            content=response.content,
            media_type=MEDIA_TYPES[self.output_format],
        )
