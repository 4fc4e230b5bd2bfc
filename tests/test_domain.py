"""Tests for the domain acceptability predicate."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import OWL, RDF, Graph, Literal, Namespace

from rdfs_reasoner.domain import DomainCheckOptions, entailed_types, is_domain_acceptable
from rdfs_reasoner.entailment import Reasoner
from rdfs_reasoner.types import THING, NotApplicable, ReasonerError, Term, UndeclaredTerm
from rdfs_reasoner.vocabulary import Vocabulary

EX = Namespace("http://example.org/")
DATA = Namespace("http://example.org/data/")


def _vocab() -> Vocabulary:
    vocab = Vocabulary(EX)
    vocab.add_class("Animal")
    vocab.add_class("Dog", sub_class_of=["Animal"])
    vocab.add_class("D1")
    vocab.add_class("D2")
    vocab.add_class("Dx")
    vocab.add_property("free")
    vocab.add_property("emptyDomain", domain=[])
    vocab.add_property("anything", domain=[OWL.Thing])
    vocab.add_property("legs", domain=["Animal"])
    vocab.add_property("both", domain=["D1", "D2"])
    vocab.add_property("one", domain=["D1"])
    vocab.add_property("thingAndD1", domain=[OWL.Thing, "D1"])
    return vocab


class _NoQuery:
    """A queryable that must never be consulted."""

    def objects(self, subject, predicate):
        raise AssertionError("queryable should not be consulted")


@pytest.fixture
def reasoner():
    return Reasoner(_vocab())


def _types(reasoner, *names):
    return DomainCheckOptions(entailed_types=[reasoner.vocabulary.term(n) for n in names])


class TestPreconditions:
    def test_class_not_applicable(self, reasoner):
        dog = reasoner.vocabulary.term("Dog")
        with pytest.raises(NotApplicable) as excinfo:
            reasoner.is_domain_acceptable(dog, DATA.rex, Graph())
        assert excinfo.value.term == dog

    def test_queryable_required_without_types(self, reasoner):
        legs = reasoner.vocabulary.term("legs")
        with pytest.raises(ValueError):
            reasoner.is_domain_acceptable(legs, DATA.rex)


class TestPermissiveCases:
    def test_no_declared_domain(self, reasoner):
        free = reasoner.vocabulary.term("free")
        assert reasoner.is_domain_acceptable(free, DATA.rex, _NoQuery())
        assert reasoner.is_domain_acceptable(free, DATA.rex, _NoQuery(), _types(reasoner, "Dx"))

    def test_empty_declared_domain(self, reasoner):
        prop = reasoner.vocabulary.term("emptyDomain")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery())

    def test_domain_is_only_thing(self, reasoner):
        prop = reasoner.vocabulary.term("anything")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "Dx"))

    def test_no_types_known(self, reasoner):
        prop = reasoner.vocabulary.term("both")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, Graph())

    def test_empty_entailed_types_given(self, reasoner):
        prop = reasoner.vocabulary.term("both")
        options = DomainCheckOptions(entailed_types=[])
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), options)


class TestCoverage:
    def test_missing_one_of_two_domains(self, reasoner):
        prop = reasoner.vocabulary.term("both")
        assert not reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "D1"))

    def test_all_domains_covered(self, reasoner):
        prop = reasoner.vocabulary.term("both")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "D2", "D1"))

    def test_extra_types_ignored(self, reasoner):
        prop = reasoner.vocabulary.term("one")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "D1", "Dx"))

    def test_unrelated_types(self, reasoner):
        prop = reasoner.vocabulary.term("one")
        assert not reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "Dx"))

    def test_thing_alongside_real_domain(self, reasoner):
        prop = reasoner.vocabulary.term("thingAndD1")
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "D1"))
        assert not reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), _types(reasoner, "Dx"))

    def test_module_function_matches_method(self, reasoner):
        prop = reasoner.vocabulary.term("both")
        options = _types(reasoner, "D1")
        assert is_domain_acceptable(reasoner, prop, DATA.rex, None, options) is False


class TestQueriedTypes:
    def test_end_to_end_subclass(self, reasoner):
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Dog))
        legs = reasoner.vocabulary.term("legs")
        assert reasoner.is_domain_acceptable(legs, DATA.rex, g)

    def test_asserted_type_outside_domain(self, reasoner):
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Dx))
        legs = reasoner.vocabulary.term("legs")
        assert not reasoner.is_domain_acceptable(legs, DATA.rex, g)

    def test_unresolved_types_skipped(self, reasoner):
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Unicorn))
        g.add((DATA.rex, RDF.type, Literal("Dog")))
        legs = reasoner.vocabulary.term("legs")
        assert entailed_types(reasoner, DATA.rex, g) == ()
        assert reasoner.is_domain_acceptable(legs, DATA.rex, g)

    def test_property_used_as_type_skipped(self, reasoner):
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.legs))
        assert entailed_types(reasoner, DATA.rex, g) == ()

    def test_entailed_types_union(self, reasoner):
        vocab = reasoner.vocabulary
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Dog))
        g.add((DATA.rex, RDF.type, EX.Animal))
        g.add((DATA.rex, RDF.type, EX.D1))
        types = entailed_types(reasoner, DATA.rex, g)
        assert len(types) == len(set(types))
        assert set(types) == {vocab.term("Dog"), vocab.term("Animal"), vocab.term("D1")}

    def test_thing_typed_resource(self, reasoner):
        g = Graph()
        g.add((DATA.rex, RDF.type, OWL.Thing))
        assert entailed_types(reasoner, DATA.rex, g) == (THING,)
        legs = reasoner.vocabulary.term("legs")
        assert not reasoner.is_domain_acceptable(legs, DATA.rex, g)

    def test_supplied_types_skip_query(self, reasoner):
        legs = reasoner.vocabulary.term("legs")
        options = _types(reasoner, "Animal")
        assert reasoner.is_domain_acceptable(legs, DATA.rex, _NoQuery(), options)

    def test_hand_built_terms_match_by_iri(self, reasoner):
        prop = reasoner.vocabulary.term("one")
        options = DomainCheckOptions(entailed_types=[Term(EX.D1)])
        assert reasoner.is_domain_acceptable(prop, DATA.rex, _NoQuery(), options)


class TestUndeclaredDomains:
    def test_undeclared_domain_with_queried_types(self):
        vocab = Vocabulary(EX)
        vocab.add_class("Dog")
        legs = vocab.add_property("legs", domain=["Animal"])
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Dog))
        with pytest.raises(UndeclaredTerm) as excinfo:
            Reasoner(vocab).is_domain_acceptable(legs, DATA.rex, g)
        assert isinstance(excinfo.value, ReasonerError)
        assert excinfo.value.term == legs
        assert excinfo.value.target == EX.Animal
        assert excinfo.value.relation == "domain"

    def test_undeclared_super_class_of_asserted_type(self):
        vocab = Vocabulary(EX)
        vocab.add_class("Animal")
        vocab.add_class("Dog", sub_class_of=["Animall"])
        legs = vocab.add_property("legs", domain=["Animal"])
        g = Graph()
        g.add((DATA.rex, RDF.type, EX.Dog))
        with pytest.raises(UndeclaredTerm):
            Reasoner(vocab).is_domain_acceptable(legs, DATA.rex, g)
