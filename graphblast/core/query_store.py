#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Query storage for graphblast.

Contains functionality for:
1. Query name cleaning so names match BLAST's own output
2. Nucleotide/protein classification of query sequences
3. Indexed add/remove/lookup of queries with per-query hit counts
"""

import re
import logging
from typing import Iterable, List, Optional

from ..config import DuplicateQueryError

logger = logging.getLogger(__name__)

# IUPAC nucleotide codes
NUCLEOTIDE_CHARACTERS = frozenset("ACGTUNRYSWKMBDHV")
GAP_CHARACTERS = frozenset("-.")
CORE_NUCLEOTIDES = frozenset("ACGTUN")
MIN_CORE_NUCLEOTIDE_SHARE = 0.9


class Query:
    """
    A named sequence submitted for search against the graph.

    Attributes:
        name: Cleaned query name, unique within its QueryStore
        sequence: Query sequence
        hit_count: Number of hits linked to this query by the last parse
        searched_for: Whether the query was included in a completed search
    """

    def __init__(self, name: str, sequence: str):
        self.name = name
        self.sequence = sequence
        self.hit_count = 0
        self.searched_for = False

    @property
    def sequence_type(self) -> str:
        """
        Return "nucleotide" or "protein", which decides blastn vs tblastn.

        A sequence is nucleotide when every residue is an IUPAC nucleotide
        code and at least 90% of them are A, C, G, T, U or N. Short peptides
        such as "MKVAT" use only nucleotide letters but fail the share.
        """
        residues = [c for c in self.sequence.upper() if c not in GAP_CHARACTERS]
        if not residues or not set(residues) <= NUCLEOTIDE_CHARACTERS:
            return "protein"
        core = sum(1 for c in residues if c in CORE_NUCLEOTIDES)
        if core / len(residues) >= MIN_CORE_NUCLEOTIDE_SHARE:
            return "nucleotide"
        return "protein"

    @property
    def length(self) -> int:
        return len(self.sequence)

    @staticmethod
    def clean_name(name: str) -> str:
        """
        Clean a FASTA header into a query name.

        Whitespace becomes underscores and trailing dots are removed, since
        BLAST drops them from its output and the names must match exactly.

        Example:
            >>> Query.clean_name("contig 1.region.a.  ")
            'contig_1.region.a'
        """
        name = re.sub(r"\s", "_", name.strip())
        return name.rstrip(".")

    def __repr__(self):
        return f"Query({self.name!r}, {self.sequence_type}, hits={self.hit_count})"


class QueryStore:
    """
    Owns the set of search queries in insertion order.

    Names are unique: adding a second query with the same cleaned name
    raises DuplicateQueryError. Use make_unique_name() to derive a free name.

    Example:
        >>> store = QueryStore()
        >>> q = store.add_query("my query", "ACGTACGT")
        >>> store.get_query_by_name("my_query") is q
        True
    """

    def __init__(self):
        self._queries: List[Query] = []
        self._by_name = {}

    @property
    def queries(self) -> List[Query]:
        return list(self._queries)

    def add_query(self, name: str, sequence: str) -> Query:
        """
        Append a new query.

        Args:
            name: Raw query name, cleaned before storing
            sequence: Query sequence

        Returns:
            The stored Query

        Raises:
            DuplicateQueryError: If a query with the cleaned name exists
        """
        cleaned = Query.clean_name(name)
        if cleaned in self._by_name:
            error_msg = f"A query named '{cleaned}' already exists"
            logger.error(error_msg)
            raise DuplicateQueryError(error_msg)

        query = Query(cleaned, sequence)
        self._queries.append(query)
        self._by_name[cleaned] = query
        logger.debug(f"Added query {cleaned} ({query.sequence_type}, {query.length} residues)")
        return query

    def make_unique_name(self, name: str) -> str:
        """
        Return the cleaned name, suffixed with _2, _3, ... if already taken.
        """
        cleaned = Query.clean_name(name) or "unnamed"
        if cleaned not in self._by_name:
            return cleaned

        suffix = 2
        while f"{cleaned}_{suffix}" in self._by_name:
            suffix += 1
        return f"{cleaned}_{suffix}"

    def get_query_by_name(self, name: str) -> Optional[Query]:
        return self._by_name.get(name)

    def remove_queries(self, queries: Iterable[Query]):
        """
        Remove the given queries.

        Hits referencing them must be removed from the HitTable first.
        """
        names = {query.name for query in queries}
        self._queries = [q for q in self._queries if q.name not in names]
        for name in names:
            self._by_name.pop(name, None)
        logger.debug(f"Removed {len(names)} queries, {len(self._queries)} remain")

    def clear_all(self):
        self._queries = []
        self._by_name = {}

    def clear_search_results(self):
        """Reset the hit count and searched flag of every query."""
        for query in self._queries:
            query.hit_count = 0
            query.searched_for = False

    def nucleotide_queries(self) -> List[Query]:
        return [q for q in self._queries if q.sequence_type == "nucleotide"]

    def protein_queries(self) -> List[Query]:
        return [q for q in self._queries if q.sequence_type == "protein"]

    def __len__(self):
        return len(self._queries)

    def __iter__(self):
        return iter(list(self._queries))

    def __contains__(self, name):
        return name in self._by_name
