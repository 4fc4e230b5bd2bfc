"""Closure engine — reflexive-transitive closure of the hierarchy relations.

For a class C, entail_sub_class_of(C) is C followed by every class reachable
from C by following rdfs:subClassOf zero or more times. entail_sub_property_of
does the same for properties over rdfs:subPropertyOf.

Closures are memoized in the Reasoner's EntailmentCache. Traversal keeps
the current path so that a hierarchy which loops back onto itself raises
CyclicHierarchy instead of recursing forever.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .cache import Closure, EntailmentCache
from .domain import DomainCheckOptions, is_domain_acceptable
from .types import CyclicHierarchy, NotApplicable, Relation, Term
from .vocabulary import Vocabulary

if TYPE_CHECKING:
    from .domain import Queryable

logger = logging.getLogger(__name__)


class Reasoner:
    """RDFS entailment over a single Vocabulary."""

    def __init__(self, vocabulary: Vocabulary, cache: EntailmentCache | None = None):
        self.vocabulary = vocabulary
        self.cache = cache if cache is not None else EntailmentCache()

    # -----------------------------------------------------------------------
    # Hierarchy closures
    # -----------------------------------------------------------------------

    def entail_sub_class_of(self, term: Term) -> Closure:
        """Return term and all of its super-classes, direct or inherited."""
        return self._entail(Relation.SUB_CLASS_OF, term, ())

    def entail_sub_property_of(self, term: Term) -> Closure:
        """Return term and all of its super-properties, direct or inherited."""
        return self._entail(Relation.SUB_PROPERTY_OF, term, ())

    def entail(self, term: Term, relation: Relation | str) -> Closure:
        """Entail along a relation given as a Relation or its RDFS local name."""
        if not isinstance(relation, Relation):
            try:
                relation = Relation(relation)
            except ValueError:
                raise NotApplicable(term, f"entail {relation}") from None
        return self._entail(relation, term, ())

    def _entail(self, relation: Relation, term: Term, path: tuple[Term, ...]) -> Closure:
        if not term.kind & relation.required_kind:
            raise NotApplicable(term, f"entail {relation.value}")
        if term in path:
            cycle = list(path[path.index(term):]) + [term]
            raise CyclicHierarchy(relation, cycle)
        return self.cache.get_or_compute(
            relation, term, lambda: self._compute(relation, term, path + (term,)),
        )

    def _compute(self, relation: Relation, term: Term, path: tuple[Term, ...]) -> Closure:
        direct = self._direct(relation, term)
        found: list[Term] = [term, *direct]
        for parent in direct:
            found.extend(self._entail(relation, parent, path))
        closure = tuple(dict.fromkeys(found))
        logger.debug("Entailed %s %s: %s", term, relation.value, closure)
        return closure

    def _direct(self, relation: Relation, term: Term) -> tuple[Term, ...]:
        if relation is Relation.SUB_CLASS_OF:
            return self.vocabulary.declared_super_classes(term)
        return self.vocabulary.declared_super_properties(term)

    # -----------------------------------------------------------------------
    # Domain checks
    # -----------------------------------------------------------------------

    def is_domain_acceptable(
        self,
        prop: Term,
        resource: Any,
        queryable: Queryable | None = None,
        options: DomainCheckOptions | None = None,
    ) -> bool:
        """See rdfs_reasoner.domain.is_domain_acceptable."""
        return is_domain_acceptable(self, prop, resource, queryable, options)

    def __repr__(self) -> str:
        return f"Reasoner({self.vocabulary!r}, {self.cache!r})"
