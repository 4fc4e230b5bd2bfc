"""RDFS entailment for vocabulary models.

Adds two pieces of RDFS-style reasoning to a vocabulary of classes and
properties:

- Closure engine (rdfs_reasoner.entailment): the reflexive-transitive closure
  of rdfs:subClassOf and rdfs:subPropertyOf for a term, memoized per
  (relation, term) in an EntailmentCache owned by the Reasoner.
- Domain checker (rdfs_reasoner.domain): whether a resource's entailed types
  cover every rdfs:domain of a property. Asserted types are read from any
  queryable with an objects(subject, predicate) method, such as an
  rdflib.Graph.

rdfs_reasoner.validation applies the domain checker to every triple of a
data graph and collects the violations.
"""

from .cache import EntailmentCache
from .domain import DomainCheckOptions, entailed_types, is_domain_acceptable
from .entailment import Reasoner
from .types import (
    THING,
    CyclicHierarchy,
    NotApplicable,
    ReasonerError,
    Relation,
    Term,
    TermKind,
    UndeclaredTerm,
)
from .validation import DomainCheckResult, DomainViolation, check_domains
from .vocabulary import Vocabulary

__all__ = [
    "THING",
    "CyclicHierarchy",
    "DomainCheckOptions",
    "DomainCheckResult",
    "DomainViolation",
    "EntailmentCache",
    "NotApplicable",
    "Reasoner",
    "ReasonerError",
    "Relation",
    "Term",
    "TermKind",
    "UndeclaredTerm",
    "Vocabulary",
    "check_domains",
    "entailed_types",
    "is_domain_acceptable",
]
