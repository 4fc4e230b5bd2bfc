"""Domain checker — is a resource an acceptable subject for a property?

A property's rdfs:domain classes are checked against the resource's fully
entailed types: its asserted rdf:type values plus every super-class of each.
The check is stricter than RDFS entailment, which would simply infer that
the resource has every domain type. Here the resource must already carry
every domain type, which surfaces data that disagrees with the vocabulary.

The check is permissive wherever it lacks information:
  - a property with no domain, or only owl:Thing, accepts anything
  - a resource with no known types is accepted
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Collection, Iterable, Protocol

from rdflib import RDF

from .types import THING, NotApplicable, Term

if TYPE_CHECKING:
    from .entailment import Reasoner

logger = logging.getLogger(__name__)


class Queryable(Protocol):
    """Anything that can list the objects of (subject, predicate, ?o) facts.

    rdflib.Graph satisfies this directly.
    """

    def objects(self, subject: Any, predicate: Any) -> Iterable[Any]:
        ...


@dataclass(frozen=True)
class DomainCheckOptions:
    """Per-call options for is_domain_acceptable.

    entailed_types: the resource's fully entailed types, if already known.
    When given, the queryable is not consulted.
    """
    entailed_types: Collection[Term] | None = None


def entailed_types(reasoner: Reasoner, resource: Any, queryable: Queryable) -> tuple[Term, ...]:
    """Return the asserted types of resource together with all their super-classes.

    Type values that do not resolve to a class in the reasoner's vocabulary
    are skipped.
    """
    vocabulary = reasoner.vocabulary
    found: list[Term] = []
    for value in queryable.objects(resource, RDF.type):
        term = vocabulary.find_term(value)
        if term is None or not term.is_class():
            logger.debug("Skipping unresolved type %s of %s", value, resource)
            continue
        found.extend(reasoner.entail_sub_class_of(term))
    return tuple(dict.fromkeys(found))


def is_domain_acceptable(
    reasoner: Reasoner,
    prop: Term,
    resource: Any,
    queryable: Queryable | None,
    options: DomainCheckOptions | None = None,
) -> bool:
    """Return True if resource's entailed types cover every domain of prop.

    Raises NotApplicable if prop is not a property.
    """
    if not prop.is_property():
        raise NotApplicable(prop, "check domain")

    declared = reasoner.vocabulary.declared_domains(prop)
    if not declared:
        return True

    domains = [d for d in declared if d != THING]
    if not domains:
        return True

    if options is not None and options.entailed_types is not None:
        known = options.entailed_types
    elif queryable is None:
        raise ValueError("A queryable is required when entailed_types is not given")
    else:
        known = entailed_types(reasoner, resource, queryable)

    if not known:
        return True

    missing = [d for d in domains if d not in known]
    if missing:
        logger.debug("%s lacks domain(s) %s of %s", resource, missing, prop)
    return not missing
