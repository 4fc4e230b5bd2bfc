"""Animals — end-to-end entailment and domain check demonstration.

  STEP 1 — Closures
    Sub-class and sub-property closures for every term in the vocabulary.

  STEP 2 — Per-resource domain checks
    Each property of each resource, with the resource's entailed types.

  STEP 3 — Graph-wide domain validation
    check_domains over the whole data graph.
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from rdflib import RDF

from rdfs_reasoner.domain import DomainCheckOptions, entailed_types
from rdfs_reasoner.validation import check_domains

from case_studies.animals.domain import DATA, build_data_graph, build_reasoner


def print_header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def _names(terms) -> str:
    return ", ".join(t.name for t in terms) or "(none)"


def main() -> None:
    reasoner = build_reasoner()
    vocabulary = reasoner.vocabulary
    data = build_data_graph()

    print_header("STEP 1: Closures")
    for cls in sorted(vocabulary.classes(), key=lambda t: t.name):
        print(f"  {cls.name:<10} subClassOf*    {_names(reasoner.entail_sub_class_of(cls))}")
    for prop in sorted(vocabulary.properties(), key=lambda t: t.name):
        print(f"  {prop.name:<10} subPropertyOf* {_names(reasoner.entail_sub_property_of(prop))}")

    print_header("STEP 2: Per-resource domain checks")
    for resource in sorted(set(data.subjects())):
        types = entailed_types(reasoner, resource, data)
        print(f"\n  {resource.replace(DATA, 'data:')}  types: {_names(types)}")
        options = DomainCheckOptions(entailed_types=types)
        for p in sorted(set(data.predicates(resource))):
            if p == RDF.type:
                continue
            prop = vocabulary.find_term(p)
            if prop is None:
                print(f"    {p}: not in vocabulary")
                continue
            ok = reasoner.is_domain_acceptable(prop, resource, data, options)
            domains = vocabulary.declared_domains(prop) or ()
            print(f"    {prop.name:<10} domain {_names(domains):<14} {'OK' if ok else 'VIOLATION'}")

    print_header("STEP 3: Graph-wide domain validation")
    result = check_domains(reasoner, data)
    print(result.summary())

    print(f"\n  {reasoner.cache!r}")


if __name__ == "__main__":
    main()
