from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List

from ..models.records import (
    AGGREGATE,
    COMPOSITION,
    CONTRACT,
    SATISFACTION,
    EntityRecord,
    FieldRecord,
    MethodRecord,
    ParsedSource,
    RelationshipRecord,
)
from .base import ParserAdapter
from .utils import strip_comments, strip_pointer

logger = logging.getLogger(__name__)

KEYWORD_KINDS = {
    "struct": AGGREGATE,
    "interface": CONTRACT,
}

# Bodies end at the first closing brace; nested braces are not supported.
TYPE_DECL_RE = re.compile(r"type\s+(?P<name>\w+)\s+(?P<keyword>struct|interface)\s*\{(?P<body>[\s\S]*?)\}")

EMBEDDED_RE = re.compile(r"^\*?(?P<name>\w+)$")
# Everything after the name is the type; a trailing `tag` is dropped.
FIELD_RE = re.compile(r"^(?P<name>\w+)\s+(?P<type>[^`]+?)\s*(?:`.*`)?$")
# Parameter lists may hold one level of nested parentheses, e.g. func(int) error.
PARAMS = r"\((?P<params>(?:[^()\n]|\([^()\n]*\))*)\)"
INTERFACE_METHOD_RE = re.compile(r"^(?P<name>\w+)" + PARAMS + r"\s*(?P<returns>.*)")

RECEIVER_METHOD_RE = re.compile(
    r"func\s+\(\s*\w+\s+(?P<receiver>\*?\w+)\s*\)\s+(?P<name>\w+)\s*"
    + PARAMS
    + r"\s*(?P<returns>.*?)\s*\{"
)


class TypeRegistry:
    """Name -> entity table for a single parse run."""

    def __init__(self) -> None:
        self._types: Dict[str, EntityRecord] = {}
        self._relationships: Dict[RelationshipRecord, None] = {}

    def ensure(self, name: str) -> EntityRecord:
        entity = self._types.get(name)
        if entity is None:
            # Placeholder for a type declared outside the visible source.
            entity = EntityRecord(name=name)
            self._types[name] = entity
        return entity

    def declare(self, name: str, kind: str) -> EntityRecord:
        entity = self.ensure(name)
        if not entity.declared:
            entity.kind = kind
            entity.declared = True
        elif entity.kind != kind:
            logger.debug(
                "Ignoring %s redeclaration of %s %s", kind, entity.kind, name
            )
        return entity

    def note_composition(self, embedded: str, owner: str) -> None:
        self.ensure(embedded)
        self.add_relationship(RelationshipRecord(embedded, owner, COMPOSITION))

    def add_relationship(self, relationship: RelationshipRecord) -> None:
        self._relationships.setdefault(relationship, None)

    def entities(self) -> List[EntityRecord]:
        return list(self._types.values())

    def of_kind(self, kind: str) -> List[EntityRecord]:
        return [entity for entity in self._types.values() if entity.kind == kind]

    def relationships(self) -> List[RelationshipRecord]:
        return list(self._relationships)


class GoParser(ParserAdapter):
    language = "go"

    def parse(self, source: str) -> ParsedSource:
        registry = TypeRegistry()
        code = strip_comments(source)

        declarations = self._extract_declarations(code, registry)
        receivers = self._link_receiver_methods(code, registry)
        self._infer_satisfaction(registry)

        parsed = ParsedSource(
            entities=registry.entities(),
            relationships=registry.relationships(),
        )
        logger.debug(
            "Parsed %d declarations, %d receiver methods -> %d entities, %d relationships",
            declarations,
            receivers,
            len(parsed.entities),
            len(parsed.relationships),
        )
        return parsed

    def _extract_declarations(self, code: str, registry: TypeRegistry) -> int:
        count = 0
        for match in TYPE_DECL_RE.finditer(code):
            kind = KEYWORD_KINDS[match.group("keyword")]
            entity = registry.declare(match.group("name"), kind)
            self._classify_members(entity, kind, match.group("body"), registry)
            count += 1
        return count

    def _classify_members(
        self,
        entity: EntityRecord,
        kind: str,
        body: str,
        registry: TypeRegistry,
    ) -> None:
        for line in _body_lines(body):
            embedded = EMBEDDED_RE.match(line)
            if embedded:
                name = embedded.group("name")
                entity.add_embed(name)
                registry.note_composition(name, entity.name)
                continue

            if kind == AGGREGATE:
                field_match = FIELD_RE.match(line)
                if field_match:
                    entity.fields.append(
                        FieldRecord(field_match.group("name"), field_match.group("type"))
                    )
            else:
                method_match = INTERFACE_METHOD_RE.match(line)
                if method_match:
                    entity.methods.append(_method_record(method_match))

    def _link_receiver_methods(self, code: str, registry: TypeRegistry) -> int:
        count = 0
        for match in RECEIVER_METHOD_RE.finditer(code):
            # Pointer and value receivers share one entity.
            entity = registry.ensure(strip_pointer(match.group("receiver")))
            entity.methods.append(_method_record(match))
            count += 1
        return count

    def _infer_satisfaction(self, registry: TypeRegistry) -> None:
        aggregates = registry.of_kind(AGGREGATE)
        for contract in registry.of_kind(CONTRACT):
            required = contract.method_names()
            # Empty interfaces would match every struct.
            if not required:
                continue
            for aggregate in aggregates:
                if required <= aggregate.method_names():
                    registry.add_relationship(
                        RelationshipRecord(contract.name, aggregate.name, SATISFACTION)
                    )


def _body_lines(body: str) -> Iterable[str]:
    for raw in body.splitlines():
        line = raw.strip()
        if line:
            yield line


def _method_record(match: re.Match) -> MethodRecord:
    return MethodRecord(
        name=match.group("name"),
        params=match.group("params").strip(),
        returns=match.group("returns").strip(),
    )

