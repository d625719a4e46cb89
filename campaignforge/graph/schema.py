"""
schema.py
---------
Declarative shape of a generated campaign artifact.

The schema is a small tagged tree (`Scalar`, `ListOf`, `Record`) declared once
as `ARTIFACT_SCHEMA`. The repairer, the prompt builder and the tests all walk
this tree generically, so adding or renaming a section only touches this file.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple, Union


@dataclass(frozen=True)
class Scalar:
    description: str = "string"


@dataclass(frozen=True)
class ListOf:
    item: "Node" = field(default_factory=Scalar)


@dataclass(frozen=True)
class Record:
    fields: Tuple[Tuple[str, "Node"], ...]

    def names(self) -> List[str]:
        return [name for name, _ in self.fields]

    def get(self, name: str) -> "Node | None":
        for key, node in self.fields:
            if key == name:
                return node
        return None


Node = Union[Scalar, ListOf, Record]


def record(**fields: Node) -> Record:
    """Build a Record keeping keyword order (sections render in this order)."""
    return Record(tuple(fields.items()))


STRINGS = ListOf(Scalar())

_PERSONA = record(demographics=Scalar(), psychographics=Scalar(), behaviors=Scalar())

ARTIFACT_SCHEMA = record(
    campaignSummary=record(overview=Scalar(), rationale=Scalar(), approach=Scalar()),
    businessChallenge=record(objectives=STRINGS, challenges=STRINGS, kpis=STRINGS),
    audience=record(primary=_PERSONA, secondary=_PERSONA),
    category=record(
        landscape=Scalar(),
        competitors=STRINGS,
        trends=STRINGS,
        opportunities=STRINGS,
    ),
    productBrand=record(
        positioning=Scalar(),
        uniqueValue=Scalar(),
        brandPersonality=STRINGS,
        coreMessage=Scalar(),
    ),
    culture=record(
        culturalMoments=STRINGS,
        socialTrends=STRINGS,
        relevantMovements=STRINGS,
        timelyOpportunities=STRINGS,
    ),
    strategy=record(
        approach=Scalar(),
        channels=STRINGS,
        timeline=Scalar(),
        phases=ListOf(record(phase=Scalar(), duration=Scalar(), focus=Scalar(), tactics=STRINGS)),
    ),
    propositionPlatform=record(
        bigIdea=Scalar(),
        coreMessage=Scalar(),
        supportingMessages=STRINGS,
        tonalAttributes=STRINGS,
    ),
    keyDetails=record(
        budget=Scalar(),
        timeline=Scalar(),
        team=STRINGS,
        resources=STRINGS,
        constraints=STRINGS,
    ),
    ambition=record(
        primaryGoal=Scalar(),
        successMetrics=STRINGS,
        longTermVision=Scalar(),
        competitiveAdvantage=Scalar(),
    ),
    thoughtStarters=record(
        creativeDirections=STRINGS,
        activationIdeas=STRINGS,
        partnershipOpportunities=STRINGS,
        innovativeApproaches=STRINGS,
    ),
    keyDeliverables=record(
        immediate=STRINGS,
        shortTerm=STRINGS,
        longTerm=STRINGS,
        measurables=STRINGS,
    ),
)


# --------------------------------------------------------------------------------------
# Walking helpers
# --------------------------------------------------------------------------------------
def section_names(schema: Record = ARTIFACT_SCHEMA) -> List[str]:
    return schema.names()


def list_paths(schema: Record = ARTIFACT_SCHEMA, prefix: str = "") -> Iterator[str]:
    """
    Yield the dotted path of every list-typed field, depth first.
    List items are not descended into; a list is repaired as a whole.
    """
    for name, node in schema.fields:
        path = f"{prefix}.{name}" if prefix else name
        if isinstance(node, ListOf):
            yield path
        elif isinstance(node, Record):
            yield from list_paths(node, path)


def get_path(obj: Any, path: str) -> Any:
    current = obj
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def set_path(obj: Dict[str, Any], path: str, value: Any) -> None:
    """Set a dotted path, replacing missing or non-dict parents with empty dicts."""
    keys = path.split(".")
    current = obj
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def describe(node: Node) -> Any:
    """Render a JSON skeleton of the schema for the generation prompt."""
    if isinstance(node, Record):
        return {name: describe(child) for name, child in node.fields}
    if isinstance(node, ListOf):
        if isinstance(node.item, Scalar):
            return ["array of strings"]
        return [describe(node.item)]
    return node.description
