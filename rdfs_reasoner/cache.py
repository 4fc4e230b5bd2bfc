"""Entailment cache — memoized closures, one partition per relation.

Entries are computed once per (relation, term) key and never invalidated:
vocabulary definitions are treated as immutable for the cache's lifetime.
A cache belongs to whatever owns it (usually a Reasoner), so independent
vocabularies and tests never share entries.

Threads computing different keys may wait on each other. The cache records
which thread is computing each key and which key each thread is waiting for;
a wait that would close a loop can only come from a cyclic hierarchy, and
raises CyclicHierarchy instead of blocking.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .types import CyclicHierarchy, Relation, Term

logger = logging.getLogger(__name__)

Closure = tuple[Term, ...]
Key = tuple[Relation, Term]


class EntailmentCache:
    """Compute-if-absent store of closures keyed by (relation, term)."""

    def __init__(self) -> None:
        self._partitions: dict[Relation, dict[Term, Closure]] = {r: {} for r in Relation}
        self._locks: dict[Key, threading.Lock] = {}
        # Guards _locks, _owners and _waiting
        self._registry_lock = threading.Lock()
        self._owners: dict[Key, int] = {}
        self._waiting: dict[int, Key] = {}

    def get(self, relation: Relation, term: Term) -> Closure | None:
        return self._partitions[relation].get(term)

    def get_or_compute(
        self,
        relation: Relation,
        term: Term,
        compute: Callable[[], Closure],
    ) -> Closure:
        """Return the cached closure, computing and storing it on a miss.

        Only one caller computes a given key; concurrent callers for the same
        key wait for it and then read the stored value.

        Raises CyclicHierarchy if waiting for the key would deadlock.
        """
        partition = self._partitions[relation]
        cached = partition.get(term)
        if cached is not None:
            return cached

        key = (relation, term)
        me = threading.get_ident()
        lock = self._wait_for(key, me)
        try:
            cached = partition.get(term)
            if cached is not None:
                return cached
            with self._registry_lock:
                self._owners[key] = me
            logger.debug("Cache miss: %s %s", relation.value, term)
            closure = compute()
            partition[term] = closure
            return closure
        finally:
            with self._registry_lock:
                self._owners.pop(key, None)
            lock.release()

    def _wait_for(self, key: Key, me: int) -> threading.Lock:
        """Acquire the lock for key, unless waiting would never end."""
        with self._registry_lock:
            lock = self._locks.setdefault(key, threading.Lock())
            loop = self._wait_loop(key, me)
            if loop is not None:
                relation = key[0]
                cycle = [term for _, term in loop] + [key[1]]
                raise CyclicHierarchy(relation, cycle)
            self._waiting[me] = key
        try:
            lock.acquire()
        finally:
            with self._registry_lock:
                self._waiting.pop(me, None)
        return lock

    def _wait_loop(self, key: Key, me: int) -> list[Key] | None:
        """Follow owner → awaited key links from key; return them if they lead back to me."""
        chain = [key]
        seen: set[int] = set()
        owner = self._owners.get(key)
        while owner is not None and owner not in seen:
            if owner == me:
                return chain
            seen.add(owner)
            awaited = self._waiting.get(owner)
            if awaited is None:
                return None
            chain.append(awaited)
            owner = self._owners.get(awaited)
        return None

    def __contains__(self, key: Key) -> bool:
        relation, term = key
        return term in self._partitions[relation]

    def __len__(self) -> int:
        return sum(len(p) for p in self._partitions.values())

    def __repr__(self) -> str:
        sizes = ", ".join(f"{r.value}={len(p)}" for r, p in self._partitions.items())
        return f"EntailmentCache({sizes})"
