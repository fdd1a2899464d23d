from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .diagram.mermaid import render_class_diagram
from .diagram.renderer import DiagramRenderer, MermaidInkRenderer
from .errors import EmptyInput, GoUmlError, NoDeclarationsFound
from .extractor import GoParser, ParserRegistry
from .models.records import ParsedSource

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DiagramResult:
    diagram: Optional[str] = None
    artifact: Optional[bytes] = None
    media_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DiagramService:
    """Runs source text through extraction, emission and rendering.

    Each call starts from an empty entity table; the service keeps no
    state between runs besides its collaborators.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: ParserRegistry | None = None,
        renderer: DiagramRenderer | None = None,
        language: str = "go",
    ) -> None:
        self.settings = settings or Settings()
        self.registry = registry or build_registry()
        self.renderer = renderer or build_renderer(self.settings)
        self.language = language

    # --- public API ---
    def parse(self, source: str) -> ParsedSource:
        if not source.strip():
            raise EmptyInput()
        parsed = self.registry.get(self.language).parse(source)
        if not parsed.declared:
            raise NoDeclarationsFound()
        return parsed

    def build_diagram(self, source: str) -> str:
        return render_class_diagram(self.parse(source))

    async def generate(self, source: str, render: bool = True) -> DiagramResult:
        """Produce diagram text (and optionally an image) without raising."""
        result = DiagramResult()
        try:
            result.diagram = self.build_diagram(source)
            if render:
                rendered = await self.renderer.render(result.diagram)
                result.artifact = rendered.content
                result.media_type = rendered.media_type
        except GoUmlError as exc:
            logger.info("Diagram run failed: %s", exc.user_message)
            result.artifact = None
            result.media_type = None
            result.error = exc.user_message
        return result


def build_registry() -> ParserRegistry:
    registry = ParserRegistry()
    registry.register(GoParser())
    return registry


def build_renderer(settings: Settings) -> DiagramRenderer:
    return MermaidInkRenderer(
        server_url=settings.renderer_url,
        output_format=settings.output_format,
        theme=settings.theme,
        timeout=settings.timeout,
    )
