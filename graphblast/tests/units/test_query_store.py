#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for the query store module.
"""

import pytest

from ...core.query_store import Query, QueryStore
from ...config import DuplicateQueryError


class TestQuery:
    """Test suite for Query."""

    def test_clean_name_replaces_whitespace_and_strips_dots(self):
        """Header whitespace becomes underscores and trailing dots go."""
        assert Query.clean_name("contig 1.region.a.  ") == "contig_1.region.a"

    def test_clean_name_keeps_inner_dots(self):
        assert Query.clean_name("gene.v2...") == "gene.v2"
        assert Query.clean_name("a\tb c") == "a_b_c"

    def test_clean_name_unchanged_for_clean_names(self):
        assert Query.clean_name("Q1") == "Q1"

    def test_sequence_type(self):
        """Nucleotide codes go to blastn, anything else to tblastn."""
        assert Query("n", "ACGTNacgtn").sequence_type == "nucleotide"
        assert Query("g", "ACGT--ACGU..ACGTACGTR").sequence_type == "nucleotide"
        assert Query("p", "MKLVWQERTY").sequence_type == "protein"

    def test_short_peptide_of_nucleotide_letters_is_protein(self):
        assert Query("p", "MKVAT").sequence_type == "protein"
        assert Query("r", "ACGURYKM").sequence_type == "protein"
        assert Query("empty", "").sequence_type == "protein"

    def test_new_query_has_no_hits(self):
        query = Query("Q1", "ACGT")
        assert query.hit_count == 0
        assert query.searched_for is False
        assert query.length == 4


class TestQueryStore:
    """Test suite for QueryStore."""

    def test_add_and_lookup(self):
        store = QueryStore()
        query = store.add_query("my query", "ACGT")

        assert query.name == "my_query"
        assert store.get_query_by_name("my_query") is query
        assert "my_query" in store
        assert len(store) == 1

    def test_lookup_missing_returns_none(self):
        store = QueryStore()
        assert store.get_query_by_name("nope") is None

    def test_duplicate_names_rejected(self):
        """A second query with the same cleaned name is refused."""
        store = QueryStore()
        store.add_query("Q1.", "ACGT")

        with pytest.raises(DuplicateQueryError):
            store.add_query("Q1", "TTTT")

        assert len(store) == 1

    def test_make_unique_name(self):
        store = QueryStore()
        assert store.make_unique_name("Q1") == "Q1"

        store.add_query("Q1", "ACGT")
        assert store.make_unique_name("Q1") == "Q1_2"

        store.add_query("Q1_2", "ACGT")
        assert store.make_unique_name("Q1 ") == "Q1_3"

    def test_make_unique_name_for_empty_header(self):
        store = QueryStore()
        assert store.make_unique_name("...") == "unnamed"

    def test_remove_queries(self, query_store):
        q1 = query_store.get_query_by_name("Q1")

        query_store.remove_queries([q1])

        assert query_store.get_query_by_name("Q1") is None
        assert [q.name for q in query_store] == ["Q2"]

    def test_clear_all(self, query_store):
        query_store.clear_all()
        assert len(query_store) == 0
        assert query_store.get_query_by_name("Q1") is None

    def test_clear_search_results(self, query_store):
        q1 = query_store.get_query_by_name("Q1")
        q1.hit_count = 5
        q1.searched_for = True

        query_store.clear_search_results()

        assert q1.hit_count == 0
        assert q1.searched_for is False
        assert len(query_store) == 2

    def test_queries_split_by_type(self, query_store):
        query_store.add_query("prot", "MKLVWQ")

        assert [q.name for q in query_store.nucleotide_queries()] == ["Q1", "Q2"]
        assert [q.name for q in query_store.protein_queries()] == ["prot"]

    def test_insertion_order_preserved(self):
        store = QueryStore()
        for name in ["c", "a", "b"]:
            store.add_query(name, "ACGT")
        assert [q.name for q in store.queries] == ["c", "a", "b"]
