#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for HitRecord and HitTable.
"""

import dataclasses

import pytest

from ...core.hit_table import HitRecord, HitTable, HIT_COLUMNS


def make_hit(query_name="Q1", node_name="7", node_start=10, node_end=130, bit_score=220):
    return HitRecord(
        query_name=query_name,
        node_name=node_name,
        percent_identity=98.5,
        alignment_length=120,
        mismatches=2,
        gap_opens=0,
        query_start=1,
        query_end=120,
        node_start=node_start,
        node_end=node_end,
        e_value=1e-40,
        bit_score=bit_score,
    )


class TestHitRecord:
    """Test suite for HitRecord."""

    def test_hit_is_immutable(self):
        hit = make_hit()
        with pytest.raises(dataclasses.FrozenInstanceError):
            hit.bit_score = 1

    def test_reverse_strand_rejected(self):
        with pytest.raises(ValueError):
            make_hit(node_start=130, node_end=10)

    def test_alignment_lengths(self):
        hit = make_hit(node_start=10, node_end=130)
        assert hit.node_alignment_length == 121
        assert hit.query_alignment_length == 120


class TestHitTable:
    """Test suite for HitTable."""

    def test_append_increments_query_count(self, query_store):
        table = HitTable()
        q1 = query_store.get_query_by_name("Q1")

        table.append(make_hit("Q1"), q1)
        table.append(make_hit("Q1", node_name="1"), q1)

        assert len(table) == 2
        assert q1.hit_count == 2

    def test_append_rejects_mismatched_query(self, query_store):
        table = HitTable()
        q2 = query_store.get_query_by_name("Q2")

        with pytest.raises(ValueError):
            table.append(make_hit("Q1"), q2)

        assert len(table) == 0
        assert q2.hit_count == 0

    def test_remove_for_queries_preserves_order(self, query_store):
        table = HitTable()
        q1 = query_store.get_query_by_name("Q1")
        q2 = query_store.get_query_by_name("Q2")

        table.append(make_hit("Q1", node_name="1"), q1)
        table.append(make_hit("Q2", node_name="2"), q2)
        table.append(make_hit("Q1", node_name="7"), q1)
        table.append(make_hit("Q2", node_name="7"), q2)

        removed = table.remove_for_queries([q1])

        assert removed == 2
        assert [(h.query_name, h.node_name) for h in table] == [("Q2", "2"), ("Q2", "7")]
        assert table.hits_for_query("Q1") == []

    def test_clear_does_not_touch_queries(self, query_store):
        table = HitTable()
        q1 = query_store.get_query_by_name("Q1")
        table.append(make_hit("Q1"), q1)

        table.clear()

        assert len(table) == 0
        assert len(query_store) == 2
        assert q1.hit_count == 1

    def test_hits_for_node(self, query_store):
        table = HitTable()
        q1 = query_store.get_query_by_name("Q1")
        q2 = query_store.get_query_by_name("Q2")
        table.append(make_hit("Q1", node_name="7"), q1)
        table.append(make_hit("Q2", node_name="1"), q2)
        table.append(make_hit("Q2", node_name="7"), q2)

        assert [h.query_name for h in table.hits_for_node("7")] == ["Q1", "Q2"]

    def test_to_dataframe(self, query_store):
        table = HitTable()
        q1 = query_store.get_query_by_name("Q1")
        table.append(make_hit("Q1", node_name="7"), q1)
        table.append(make_hit("Q1", node_name="1", bit_score=90), q1)

        df = table.to_dataframe()

        assert list(df.columns) == HIT_COLUMNS
        assert len(df) == 2
        assert df.iloc[1]["node_name"] == "1"
        assert df.iloc[1]["bit_score"] == 90

    def test_empty_dataframe_has_columns(self):
        df = HitTable().to_dataframe()
        assert df.empty
        assert list(df.columns) == HIT_COLUMNS
