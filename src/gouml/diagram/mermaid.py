"""Mermaid ``classDiagram`` text from a parsed entity graph."""
from __future__ import annotations

from typing import List

from ..extractor.utils import is_exported
from ..models.records import (
    COMPOSITION,
    SATISFACTION,
    EntityRecord,
    FieldRecord,
    MethodRecord,
    ParsedSource,
    RelationshipRecord,
)

HEADER = "classDiagram"
CONTRACT_MARKER = "<<Interface>>"
INDENT = "    "

EDGE_NOTATIONS = {
    COMPOSITION: "<|--",
    SATISFACTION: "<|..",
}


def visibility(name: str) -> str:
    return "+" if is_exported(name) else "-"


def format_field(field: FieldRecord) -> str:
    return f"{visibility(field.name)}{field.name}: {field.type_expression}"


def format_method(method: MethodRecord) -> str:
    line = f"{visibility(method.name)}{method.name}({method.params})"
    if method.returns:
        line = f"{line} {method.returns}"
    return line


def format_relationship(relationship: RelationshipRecord) -> str:
    arrow = EDGE_NOTATIONS[relationship.edge_type]
    return f"{relationship.source} {arrow} {relationship.target}"


def entity_block(entity: EntityRecord) -> List[str]:
    lines = [f"class {entity.name} {{"]
    if entity.is_contract:
        lines.append(INDENT + CONTRACT_MARKER)
    lines.extend(INDENT + format_field(f) for f in entity.fields)
    lines.extend(INDENT + format_method(m) for m in entity.methods)
    lines.append("}")
    return lines


def render_class_diagram(parsed: ParsedSource) -> str:
    """Serialize entities (first-seen order) and then relationships."""
    lines = [HEADER]
    for entity in parsed.entities:
        lines.extend(entity_block(entity))
    lines.extend(format_relationship(rel) for rel in parsed.relationships)
    return "\n".join(lines)
