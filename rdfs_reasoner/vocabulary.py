"""Vocabulary — the term model consumed by the entailment core.

A Vocabulary declares classes and properties under a namespace and records
their direct hierarchy relations and property domains. It stores only what
was declared; everything entailed is computed by the Reasoner.

Relation targets are stored as IRIs and resolved on access, so terms may be
declared in any order.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Union

from rdflib import OWL, RDF, RDFS, XSD, BNode, Graph, Literal, Namespace, URIRef

from .types import THING, Term, TermKind, UndeclaredTerm

logger = logging.getLogger(__name__)

TermRef = Union[str, URIRef, Term]

_STANDARD_PREFIXES = {
    "rdf": Namespace(str(RDF)),
    "rdfs": Namespace(str(RDFS)),
    "owl": Namespace(str(OWL)),
    "xsd": Namespace(str(XSD)),
}

_CLASS_TYPES = (RDFS.Class, OWL.Class)
_PROPERTY_TYPES = (
    RDF.Property,
    OWL.ObjectProperty,
    OWL.DatatypeProperty,
    OWL.AnnotationProperty,
)


@dataclass
class Vocabulary:
    """A set of declared terms and their direct relations."""

    namespace: Namespace = field(default_factory=lambda: Namespace(""))

    # Declared terms, indexed by IRI
    terms: dict[URIRef, Term] = field(default_factory=dict)

    # Direct relations: term IRI → target IRIs, in declaration order
    super_classes: dict[URIRef, list[URIRef]] = field(default_factory=dict)
    super_properties: dict[URIRef, list[URIRef]] = field(default_factory=dict)

    # Property IRI → domain IRIs. A missing key means no domain was declared.
    domains: dict[URIRef, list[URIRef]] = field(default_factory=dict)

    # Prefixes expanded by iri_for, e.g. "owl:Thing"
    prefixes: dict[str, Namespace] = field(default_factory=lambda: dict(_STANDARD_PREFIXES))

    def __post_init__(self) -> None:
        if not isinstance(self.namespace, Namespace):
            self.namespace = Namespace(self.namespace)

    # -----------------------------------------------------------------------
    # Builder API
    # -----------------------------------------------------------------------

    def add_term(
        self,
        name: TermRef,
        kind: TermKind,
        sub_class_of: Iterable[TermRef] = (),
        sub_property_of: Iterable[TermRef] = (),
        domain: Iterable[TermRef] | None = None,
    ) -> Term:
        """Declare a term with the given capabilities and direct relations."""
        iri = self.iri_for(name)
        if iri in self.terms or iri == THING.iri:
            raise ValueError(f"Term '{iri}' already declared in vocabulary")
        term = Term(iri, kind)
        self.terms[iri] = term

        if kind & TermKind.CLASS:
            self.super_classes[iri] = [self.iri_for(r) for r in sub_class_of]
        if kind & TermKind.PROPERTY:
            self.super_properties[iri] = [self.iri_for(r) for r in sub_property_of]
            if domain is not None:
                self.domains[iri] = [self.iri_for(r) for r in domain]
        return term

    def add_class(self, name: TermRef, sub_class_of: Iterable[TermRef] = ()) -> Term:
        """Declare a class."""
        return self.add_term(name, TermKind.CLASS, sub_class_of=sub_class_of)

    def add_property(
        self,
        name: TermRef,
        sub_property_of: Iterable[TermRef] = (),
        domain: Iterable[TermRef] | None = None,
    ) -> Term:
        """Declare a property, optionally constrained to a domain."""
        return self.add_term(
            name, TermKind.PROPERTY, sub_property_of=sub_property_of, domain=domain,
        )

    @classmethod
    def from_graph(cls, graph: Graph, namespace: Namespace | str = "") -> Vocabulary:
        """Build a Vocabulary from RDFS/OWL declarations in an rdflib Graph.

        Kinds are taken from explicit rdf:type declarations and from the
        relations themselves: both ends of rdfs:subClassOf are classes, both
        ends of rdfs:subPropertyOf are properties, and rdfs:domain links a
        property to a class. Blank nodes are ignored.
        """
        kinds: dict[URIRef, TermKind] = defaultdict(lambda: TermKind.NONE)

        for class_type in _CLASS_TYPES:
            for s in graph.subjects(RDF.type, class_type):
                if isinstance(s, URIRef):
                    kinds[s] |= TermKind.CLASS
        for property_type in _PROPERTY_TYPES:
            for s in graph.subjects(RDF.type, property_type):
                if isinstance(s, URIRef):
                    kinds[s] |= TermKind.PROPERTY

        relation_kinds = (
            (RDFS.subClassOf, TermKind.CLASS, TermKind.CLASS),
            (RDFS.subPropertyOf, TermKind.PROPERTY, TermKind.PROPERTY),
            (RDFS.domain, TermKind.PROPERTY, TermKind.CLASS),
        )
        for predicate, subject_kind, object_kind in relation_kinds:
            for s, o in graph.subject_objects(predicate):
                if isinstance(s, URIRef) and isinstance(o, URIRef):
                    kinds[s] |= subject_kind
                    kinds[o] |= object_kind

        def targets(s: URIRef, predicate: URIRef) -> list[URIRef]:
            return sorted(o for o in graph.objects(s, predicate) if isinstance(o, URIRef))

        vocab = cls(namespace=namespace)
        for prefix, ns in graph.namespaces():
            if prefix:
                vocab.prefixes.setdefault(prefix, Namespace(str(ns)))
        for iri in sorted(kinds):
            if iri == THING.iri:
                continue
            domain = targets(iri, RDFS.domain)
            vocab.add_term(
                iri,
                kinds[iri],
                sub_class_of=targets(iri, RDFS.subClassOf),
                sub_property_of=targets(iri, RDFS.subPropertyOf),
                domain=domain or None,
            )
        logger.debug("Loaded %d terms from graph", len(vocab.terms))
        return vocab

    # -----------------------------------------------------------------------
    # Lookup
    # -----------------------------------------------------------------------

    def iri_for(self, ref: TermRef) -> URIRef:
        """Resolve a name, prefixed name, IRI or Term to an IRI.

        A plain name is taken relative to the vocabulary namespace. A string
        whose prefix is in self.prefixes (rdf, rdfs, owl, xsd and any bound
        by from_graph) is expanded; any other string containing ":" is taken
        as a full IRI.
        """
        if isinstance(ref, Term):
            return ref.iri
        if isinstance(ref, URIRef):
            return ref
        if ":" in ref:
            prefix, local = ref.split(":", 1)
            if prefix in self.prefixes and not local.startswith("//"):
                return self.prefixes[prefix][local]
            return URIRef(ref)
        return self.namespace[ref]

    def find_term(self, ref: object) -> Term | None:
        """Return the Term for a name or IRI, or None if it is not declared."""
        if isinstance(ref, (BNode, Literal)) or not isinstance(ref, (str, Term)):
            return None
        iri = self.iri_for(ref)
        if iri == THING.iri:
            return THING
        return self.terms.get(iri)

    def term(self, ref: TermRef) -> Term:
        """Like find_term, but raise KeyError for undeclared terms."""
        term = self.find_term(ref)
        if term is None:
            raise KeyError(f"Unknown term: {ref}")
        return term

    def classes(self) -> list[Term]:
        return [t for t in self.terms.values() if t.is_class()]

    def properties(self) -> list[Term]:
        return [t for t in self.terms.values() if t.is_property()]

    # -----------------------------------------------------------------------
    # Declared relations
    # -----------------------------------------------------------------------

    def declared_super_classes(self, term: Term) -> tuple[Term, ...]:
        """Direct rdfs:subClassOf targets of a class."""
        return self._resolve_targets(term, "subClassOf", self.super_classes.get(term.iri, ()))

    def declared_super_properties(self, term: Term) -> tuple[Term, ...]:
        """Direct rdfs:subPropertyOf targets of a property."""
        iris = self.super_properties.get(term.iri, ())
        return self._resolve_targets(term, "subPropertyOf", iris)

    def declared_domains(self, term: Term) -> tuple[Term, ...] | None:
        """Declared rdfs:domain classes of a property, or None if it has none."""
        iris = self.domains.get(term.iri)
        if iris is None:
            return None
        return self._resolve_targets(term, "domain", iris)

    def _resolve_targets(
        self, term: Term, relation: str, iris: Iterable[URIRef],
    ) -> tuple[Term, ...]:
        resolved = []
        for iri in iris:
            target = self.find_term(iri)
            if target is None:
                raise UndeclaredTerm(term, relation, iri)
            resolved.append(target)
        return tuple(resolved)

    # -----------------------------------------------------------------------
    # Reference checks
    # -----------------------------------------------------------------------

    def check_references(self) -> list[str]:
        """Check that every relation target resolves to a term of the right kind.

        Returns a list of errors (empty if every reference resolves).
        """
        errors: list[str] = []
        relation_maps = (
            ("subClassOf", self.super_classes, TermKind.CLASS),
            ("subPropertyOf", self.super_properties, TermKind.PROPERTY),
            ("domain", self.domains, TermKind.CLASS),
        )
        for label, relation_map, required in relation_maps:
            for source, target_iris in relation_map.items():
                for iri in target_iris:
                    target = self.find_term(iri)
                    if target is None:
                        errors.append(f"{source} {label} unknown term: {iri}")
                    elif not target.kind & required:
                        errors.append(
                            f"{source} {label} {iri}, which is not a "
                            f"{required.name.lower()}"
                        )
        return errors

    def __repr__(self) -> str:
        return (
            f"Vocabulary({self.namespace}: "
            f"{len(self.classes())} classes, "
            f"{len(self.properties())} properties)"
        )
