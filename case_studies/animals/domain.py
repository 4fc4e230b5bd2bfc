"""Animals — vocabulary and data for the end-to-end demonstration.

The vocabulary is declared in Turtle and loaded through Vocabulary.from_graph:

    Animal
    ├── Mammal
    │   └── Dog
    └── Bird
    Pet
    Person ⊑ owl:Thing

Properties and their domains:

    name      owl:Thing        (no real constraint)
    petName   Pet              (sub-property of name)
    barks     Dog
    hasFur    Mammal
    wingspan  Bird
    owner     Pet, Animal      (subject must be both)
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from rdflib import Graph, Namespace

from rdfs_reasoner.entailment import Reasoner
from rdfs_reasoner.vocabulary import Vocabulary

EX = Namespace("http://animals.example.org/vocab#")
DATA = Namespace("http://animals.example.org/data/")

VOCABULARY_TTL = """
@prefix ex:   <http://animals.example.org/vocab#> .
@prefix rdf:  <http://www.w3.org/1999/02/22-rdf-syntax-ns#> .
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#> .
@prefix owl:  <http://www.w3.org/2002/07/owl#> .

ex:Animal a rdfs:Class .
ex:Mammal a rdfs:Class ; rdfs:subClassOf ex:Animal .
ex:Dog    a rdfs:Class ; rdfs:subClassOf ex:Mammal .
ex:Bird   a rdfs:Class ; rdfs:subClassOf ex:Animal .
ex:Pet    a rdfs:Class .
ex:Person a owl:Class  ; rdfs:subClassOf owl:Thing .

ex:name     a rdf:Property ; rdfs:domain owl:Thing .
ex:petName  a rdf:Property ; rdfs:subPropertyOf ex:name ; rdfs:domain ex:Pet .
ex:barks    a owl:DatatypeProperty ; rdfs:domain ex:Dog .
ex:hasFur   a owl:DatatypeProperty ; rdfs:domain ex:Mammal .
ex:wingspan a owl:DatatypeProperty ; rdfs:domain ex:Bird .
ex:owner    a owl:ObjectProperty ; rdfs:domain ex:Pet, ex:Animal .
"""

DATA_TTL = """
@prefix ex:   <http://animals.example.org/vocab#> .
@prefix data: <http://animals.example.org/data/> .

data:rex a ex:Dog, ex:Pet ;
    ex:petName "Rex" ;
    ex:barks true ;
    ex:owner data:alice ;
    ex:color "brown" .

data:tweety a ex:Bird ;
    ex:owner data:alice ;
    ex:wingspan 20 .

data:alice a ex:Person ;
    ex:name "Alice" ;
    ex:hasFur false .

data:ghost ex:barks true .
"""


def build_vocabulary() -> Vocabulary:
    """Load the animal vocabulary from its Turtle declaration."""
    g = Graph()
    g.parse(data=VOCABULARY_TTL, format="turtle")
    return Vocabulary.from_graph(g, namespace=EX)


def build_data_graph() -> Graph:
    """Load the instance data.

    rex:    a well-typed pet dog
    tweety: a bird with an owner, but not declared a Pet
    alice:  a person described with a mammal-only property
    ghost:  untyped, so nothing can contradict its domains
    """
    g = Graph()
    g.parse(data=DATA_TTL, format="turtle")
    return g


def build_reasoner() -> Reasoner:
    return Reasoner(build_vocabulary())
