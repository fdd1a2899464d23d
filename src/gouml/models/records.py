from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

AGGREGATE = "aggregate"
CONTRACT = "contract"

COMPOSITION = "composition"
SATISFACTION = "satisfaction"


@dataclass(slots=True)
class FieldRecord:
    name: str
    type_expression: str


@dataclass(slots=True)
class MethodRecord:
    name: str
    params: str
    returns: str


@dataclass(slots=True)
class EntityRecord:
    name: str
    kind: str = AGGREGATE
    fields: List[FieldRecord] = field(default_factory=list)
    methods: List[MethodRecord] = field(default_factory=list)
    embeds: List[str] = field(default_factory=list)
    declared: bool = False  # True once a struct/interface body was seen

    def add_embed(self, name: str) -> None:
        if name not in self.embeds:
            self.embeds.append(name)

    def method_names(self) -> Set[str]:
        return {method.name for method in self.methods}

    @property
    def is_contract(self) -> bool:
        return self.kind == CONTRACT


@dataclass(frozen=True, slots=True)
class RelationshipRecord:
    """Directed edge between two entity names.

    composition:  embedded -> embedding type
    satisfaction: interface -> struct providing every interface method
    """
    source: str
    target: str
    edge_type: str


@dataclass(slots=True)
class ParsedSource:
    entities: List[EntityRecord] = field(default_factory=list)
    relationships: List[RelationshipRecord] = field(default_factory=list)

    @property
    def declared(self) -> List[str]:
        return [entity.name for entity in self.entities if entity.declared]

    def get(self, name: str) -> Optional[EntityRecord]:
        return next((e for e in self.entities if e.name == name), None)

    def contracts(self) -> List[EntityRecord]:
        return [e for e in self.entities if e.kind == CONTRACT]

    def aggregates(self) -> List[EntityRecord]:
        return [e for e in self.entities if e.kind == AGGREGATE]

    def edges(self, edge_type: Optional[str] = None) -> List[RelationshipRecord]:
        if edge_type is None:
            return list(self.relationships)
        return [rel for rel in self.relationships if rel.edge_type == edge_type]

    def to_dict(self) -> Dict[str, list]:
        return {
            "entities": [
                {
                    "name": entity.name,
                    "kind": entity.kind,
                    "fields": [
                        {"name": f.name, "type": f.type_expression} for f in entity.fields
                    ],
                    "methods": [
                        {"name": m.name, "params": m.params, "returns": m.returns}
                        for m in entity.methods
                    ],
                    "embeds": list(entity.embeds),
                }
                for entity in self.entities
            ],
            "relationships": [
                {"source": rel.source, "target": rel.target, "kind": rel.edge_type}
                for rel in self.relationships
            ],
        }
