#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BLAST hit records for graphblast.

A HitRecord refers to its query and node by name; the QueryStore and the
AssemblyGraph resolve those names. The HitTable is the only owner of the
hit list for the current search.
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Iterable, List

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HitRecord:
    """One alignment between a query and a graph node."""

    query_name: str
    node_name: str
    percent_identity: float
    alignment_length: int
    mismatches: int
    gap_opens: int
    query_start: int
    query_end: int
    node_start: int
    node_end: int
    e_value: float
    bit_score: int

    def __post_init__(self):
        if self.node_start > self.node_end:
            raise ValueError(
                f"Reverse strand hit for node {self.node_name}: "
                f"start {self.node_start} > end {self.node_end}"
            )

    @property
    def query_alignment_length(self) -> int:
        return abs(self.query_end - self.query_start) + 1

    @property
    def node_alignment_length(self) -> int:
        return self.node_end - self.node_start + 1


HIT_COLUMNS = [f.name for f in fields(HitRecord)]


class HitTable:
    """
    Ordered collection of all hits produced by the current search.

    Appending a hit also increments its query's hit count, so counts and
    table contents never drift apart.
    """

    def __init__(self):
        self._hits: List[HitRecord] = []

    @property
    def hits(self) -> List[HitRecord]:
        return list(self._hits)

    def append(self, hit: HitRecord, query):
        """
        Add one hit and count it against its query.

        Args:
            hit: The hit to add
            query: The Query the hit belongs to

        Raises:
            ValueError: If the query does not match the hit's query name
        """
        if query.name != hit.query_name:
            raise ValueError(f"Hit for query {hit.query_name} appended against query {query.name}")
        self._hits.append(hit)
        query.hit_count += 1

    def remove_for_queries(self, queries: Iterable) -> int:
        """
        Remove every hit belonging to one of the given queries.

        Returns:
            Number of hits removed
        """
        names = {query.name for query in queries}
        before = len(self._hits)
        self._hits = [hit for hit in self._hits if hit.query_name not in names]
        removed = before - len(self._hits)
        logger.debug(f"Removed {removed} hits for {len(names)} queries")
        return removed

    def clear(self):
        self._hits = []

    def hits_for_query(self, name: str) -> List[HitRecord]:
        return [hit for hit in self._hits if hit.query_name == name]

    def hits_for_node(self, name: str) -> List[HitRecord]:
        return [hit for hit in self._hits if hit.node_name == name]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the hits as a DataFrame, one row per hit in table order.
        """
        return pd.DataFrame([asdict(hit) for hit in self._hits], columns=HIT_COLUMNS)

    def __len__(self):
        return len(self._hits)

    def __iter__(self):
        return iter(list(self._hits))
