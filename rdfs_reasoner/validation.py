"""Validation — domain checks over every triple of a data graph.

For each (subject, predicate, object) whose predicate is a property of the
vocabulary, the subject must be an acceptable member of the property's
domain (see rdfs_reasoner.domain). Each subject's entailed types are
computed once and reused for all of its properties.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from rdflib import Graph

from .domain import DomainCheckOptions, entailed_types
from .entailment import Reasoner
from .types import THING, Term

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DomainViolation:
    """A subject used with a property whose domain it does not satisfy."""
    subject: Any
    prop: Term
    missing: tuple[Term, ...]
    types: tuple[Term, ...]

    def __repr__(self) -> str:
        missing = ", ".join(t.name for t in self.missing)
        return f"DomainViolation({self.subject} {self.prop.name}: missing {missing})"


@dataclass
class DomainCheckResult:
    """Outcome of checking a data graph against the vocabulary's domains."""
    violations: list[DomainViolation] = field(default_factory=list)
    checked: int = 0
    skipped: int = 0

    @property
    def conforms(self) -> bool:
        return not self.violations

    def summary(self) -> str:
        lines = []
        status = "CONFORMS" if self.conforms else "DOES NOT CONFORM"
        lines.append(f"Domain Check: {status}")
        lines.append("-" * 50)
        lines.append(f"  Triples checked: {self.checked}, skipped: {self.skipped}")
        if self.violations:
            lines.append(f"  Violations ({len(self.violations)}):")
            for v in self.violations:
                missing = ", ".join(t.name for t in v.missing)
                lines.append(f"    - {v.subject} {v.prop.name}: not a {missing}")
        else:
            lines.append("  No violations found.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Graph-wide check
# ---------------------------------------------------------------------------

def check_domains(reasoner: Reasoner, data_graph: Graph) -> DomainCheckResult:
    """Check every triple of data_graph against its predicate's domain.

    Triples whose predicate is not a property of the reasoner's vocabulary
    are counted as skipped. A subject/property pair is reported once, however
    many triples it appears in.
    """
    vocabulary = reasoner.vocabulary
    result = DomainCheckResult()
    subject_types: dict[Any, tuple[Term, ...]] = {}
    reported: set[tuple[Any, Term]] = set()

    for s, p, _ in sorted(data_graph, key=lambda t: (str(t[0]), str(t[1]))):
        prop = vocabulary.find_term(p)
        if prop is None or not prop.is_property():
            result.skipped += 1
            continue
        result.checked += 1

        if s not in subject_types:
            subject_types[s] = entailed_types(reasoner, s, data_graph)
        types = subject_types[s]

        options = DomainCheckOptions(entailed_types=types)
        if reasoner.is_domain_acceptable(prop, s, data_graph, options):
            continue
        if (s, prop) in reported:
            continue
        reported.add((s, prop))

        domains = vocabulary.declared_domains(prop) or ()
        missing = tuple(d for d in domains if d != THING and d not in types)
        result.violations.append(
            DomainViolation(subject=s, prop=prop, missing=missing, types=types)
        )

    logger.debug(
        "Checked %d triples (%d skipped), %d violations",
        result.checked, result.skipped, len(result.violations),
    )
    return result
