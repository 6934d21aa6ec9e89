#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BLAST tabular output parsing for graphblast.

Turns the text written by ``blastn``/``tblastn -outfmt 6`` into HitRecords
linked to the loaded queries and graph nodes.

Two kinds of bad input are handled differently:
1. A malformed line (too few columns, unreadable numbers) ends parsing
   quietly. Everything parsed before it is kept.
2. A hit naming an unknown node or query aborts the whole batch. Nothing
   from the batch is added to the HitTable.
"""

import logging

from .hit_table import HitRecord
from ..config import UnresolvedNodeReferenceError, UnresolvedQueryReferenceError

logger = logging.getLogger(__name__)

BLAST_TABULAR_COLUMNS = 12


class BlastOutputParser:
    """
    Parses BLAST tabular output into a HitTable.

    Example:
        >>> added = BlastOutputParser.parse(raw_text, query_store, graph, hit_table)
    """

    @staticmethod
    def node_name_from_label(label):
        """
        Extract the node key from a database label.

        Example:
            >>> BlastOutputParser.node_name_from_label("NODE_7_length_500")
            '7'

        Returns:
            The second underscore-delimited token, or None if there is none
        """
        parts = label.split("_")
        if len(parts) < 2:
            return None
        return parts[1]

    @staticmethod
    def parse_line(line):
        """
        Split one output line into its typed columns.

        Returns:
            Tuple of the 12 column values, or None if the line is malformed
        """
        parts = line.split("\t")
        if len(parts) < BLAST_TABULAR_COLUMNS:
            return None

        try:
            return (
                parts[0],
                parts[1],
                float(parts[2]),
                int(parts[3]),
                int(parts[4]),
                int(parts[5]),
                int(parts[6]),
                int(parts[7]),
                int(parts[8]),
                int(parts[9]),
                float(parts[10]),
                # Bit scores may be printed with a fractional part
                int(float(parts[11])),
            )
        except ValueError as e:
            logger.debug(f"Unreadable number in BLAST line: {str(e)}")
            return None

    @classmethod
    def parse(cls, raw_text, query_store, graph, hit_table):
        """
        Parse raw BLAST output and append the resulting hits.

        Args:
            raw_text: Tabular BLAST output
            query_store: QueryStore used to resolve query names
            graph: AssemblyGraph used to resolve node keys
            hit_table: HitTable receiving the hits

        Returns:
            Number of hits added

        Raises:
            UnresolvedNodeReferenceError: If a hit names a node not in the graph
            UnresolvedQueryReferenceError: If a hit names a query not in the store
        """
        lines = [line for line in raw_text.split("\n") if line]
        staged = []
        skipped_reverse = 0

        for line_number, line in enumerate(lines, start=1):
            columns = cls.parse_line(line)
            if columns is None:
                logger.debug(f"Stopping at malformed BLAST line {line_number}: {line!r}")
                break

            (query_name, node_label, percent_identity, alignment_length,
             mismatches, gap_opens, query_start, query_end,
             node_start, node_end, e_value, bit_score) = columns

            # Only forward strand hits are kept
            if node_start > node_end:
                skipped_reverse += 1
                continue

            node_name = cls.node_name_from_label(node_label)
            if node_name is None or graph.resolve_node(node_name) is None:
                logger.error(f"BLAST output refers to unknown node label {node_label}")
                raise UnresolvedNodeReferenceError(node_label)

            query = query_store.get_query_by_name(query_name)
            if query is None:
                logger.error(f"BLAST output refers to unknown query {query_name}")
                raise UnresolvedQueryReferenceError(query_name)

            staged.append((HitRecord(
                query_name=query.name,
                node_name=node_name,
                percent_identity=percent_identity,
                alignment_length=alignment_length,
                mismatches=mismatches,
                gap_opens=gap_opens,
                query_start=query_start,
                query_end=query_end,
                node_start=node_start,
                node_end=node_end,
                e_value=e_value,
                bit_score=bit_score,
            ), query))

        for hit, query in staged:
            hit_table.append(hit, query)

        logger.debug(f"Parsed {len(staged)} BLAST hits ({skipped_reverse} reverse strand hits skipped)")
        return len(staged)
