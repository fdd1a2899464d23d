"""Shared fixtures for gouml tests."""
from typing import List

import pytest

from gouml.diagram.renderer import DiagramRenderer, RenderedDiagram
from gouml.errors import RenderFailure
from gouml.extractor.go_parser import GoParser

ANIMAL_SOURCE = """
package zoo

type Animal interface {
    Speak() string
}

type Dog struct {
    Name string
}

func (d *Dog) Speak() string {
    return "woof"
}
"""

EMBEDDING_SOURCE = """
type A struct {
    X int
}

type B struct {
    A
    Extra int
}
"""


class FakeRenderer(DiagramRenderer):
    """Records diagrams it was asked to render; optionally rejects them."""

    def __init__(self, error: str | None = None) -> None:
        self.error = error
        self.calls: List[str] = []

    async def render(self, diagram: str) -> RenderedDiagram:
        self.calls.append(diagram)
        if self.error:
            raise RenderFailure(self.error)
        return RenderedDiagram(content=b"<svg></svg>", media_type="image/svg+xml")


@pytest.fixture
def parser() -> GoParser:
    return GoParser()


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()
