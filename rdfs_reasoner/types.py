"""Core types for the entailment core.

A vocabulary is made of terms. Each term is identified by an IRI and tagged
with the capabilities it has: it may be a class, a property, both, or
neither. Entailment operations check these capabilities before dispatching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag, auto

from rdflib import OWL, RDFS, URIRef


# ---------------------------------------------------------------------------
# TermKind — capability tags
# ---------------------------------------------------------------------------

class TermKind(Flag):
    """What a term can be used as."""
    NONE = 0
    CLASS = auto()
    PROPERTY = auto()


# ---------------------------------------------------------------------------
# Relation — the two hierarchy relations we entail over
# ---------------------------------------------------------------------------

class Relation(Enum):
    """A hierarchy relation, valued by its RDFS local name."""
    SUB_CLASS_OF = "subClassOf"
    SUB_PROPERTY_OF = "subPropertyOf"

    @property
    def iri(self) -> URIRef:
        return RDFS[self.value]

    @property
    def required_kind(self) -> TermKind:
        if self is Relation.SUB_CLASS_OF:
            return TermKind.CLASS
        return TermKind.PROPERTY


# ---------------------------------------------------------------------------
# Term
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Term:
    """A named class or property in a vocabulary."""
    iri: URIRef
    # Identity is the IRI alone
    kind: TermKind = field(default=TermKind.NONE, compare=False)

    @property
    def name(self) -> str:
        """Local name: the part of the IRI after the last '#' or '/'."""
        iri = str(self.iri)
        for sep in ("#", "/"):
            if sep in iri:
                iri = iri.rsplit(sep, 1)[1] or iri
        return iri

    def is_class(self) -> bool:
        return bool(self.kind & TermKind.CLASS)

    def is_property(self) -> bool:
        return bool(self.kind & TermKind.PROPERTY)

    def __str__(self) -> str:
        return str(self.iri)

    def __repr__(self) -> str:
        return f"Term({self.name})"


# owl:Thing carries no constraint when used as a domain.
THING = Term(URIRef(OWL.Thing), TermKind.CLASS)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ReasonerError(Exception):
    """Base class for entailment errors."""


class NotApplicable(ReasonerError):
    """An operation was invoked on a term lacking the capability it needs."""

    def __init__(self, term: Term, operation: str):
        self.term = term
        self.operation = operation
        super().__init__(f"{term} can't {operation}")


class CyclicHierarchy(ReasonerError):
    """A hierarchy relation loops back onto a term already being entailed."""

    def __init__(self, relation: Relation, cycle: list[Term]):
        self.relation = relation
        self.cycle = cycle
        path = " → ".join(t.name for t in cycle)
        super().__init__(f"Cyclic {relation.value} hierarchy: {path}")


class UndeclaredTerm(ReasonerError):
    """A declared relation points at a term the vocabulary does not define."""

    def __init__(self, term: Term, relation: str, target: URIRef):
        self.term = term
        self.relation = relation
        self.target = target
        super().__init__(f"{term} {relation} undeclared term {target}")
