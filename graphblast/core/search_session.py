#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Search session orchestration for graphblast.

Contains functionality for:
1. Owning the queries, hits and scratch directory of one search session
2. Running the automatic build -> load -> search -> parse pipeline
3. Target selection, rebuilding the per-node hit lists on the graph
4. Partial invalidation by removing a subset of queries

No exception leaves a public SearchSession method that can fail: each
returns an empty string on success or a human-readable error message.
"""

import os
import enum
import shutil
import logging
import tempfile

import pandas as pd

from .query_store import Query, QueryStore
from .hit_table import HitTable
from .output_parser import BlastOutputParser
from ..config import Config, GraphBlastError, SearchCancelledError
from ..utils.file_io import FileIO
from ..utils.tool_runner import BlastToolRunner

logger = logging.getLogger(__name__)

ALL_TARGETS = "all"


class SessionState(enum.Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class SearchSession:
    """
    Top-level BLAST search state for one assembly graph.

    Example:
        >>> with SearchSession(graph) as session:
        ...     error = session.run_automatic_search("queries.fasta", "-evalue 1e-10")
        ...     if not error:
        ...         session.select_target("query_1")
    """

    def __init__(self, graph, temp_dir=None, config=None):
        """
        Initialize a session.

        Args:
            graph: AssemblyGraph searched against; only its per-node hit
                lists are modified
            temp_dir: Scratch directory; a private one is created (and
                removed by close()) when neither this nor Config.TEMP_DIR is set
            config: Configuration object (defaults to global Config)
        """
        self.graph = graph
        self.config = config if config else Config
        self.queries = QueryStore()
        self.hits = HitTable()
        self.raw_output = ""
        self.state = SessionState.EMPTY
        self.target = None

        temp_dir = temp_dir or self.config.TEMP_DIR
        self._owns_temp_dir = temp_dir is None
        if temp_dir is None:
            temp_dir = tempfile.mkdtemp(prefix="graphblast_")
        else:
            os.makedirs(temp_dir, exist_ok=True)
        self.temp_dir = temp_dir
        self.runner = BlastToolRunner(self.temp_dir, self.config)
        logger.debug(f"Search session using scratch directory {self.temp_dir}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def close(self):
        """Clean up the session and remove a scratch directory it created."""
        self.clean_up()
        if self._owns_temp_dir and os.path.isdir(self.temp_dir):
            try:
                shutil.rmtree(self.temp_dir)
            except OSError as e:
                logger.warning(f"Error removing scratch directory {self.temp_dir}: {str(e)}")

    #############################################################################
    #                           Lifecycle
    #############################################################################

    def clear_hits(self):
        """Empty the hit table, per-query results and raw output."""
        self.hits.clear()
        self.queries.clear_search_results()
        self.raw_output = ""
        self.graph.clear_all_hit_pointers()

    def clean_up(self):
        """Drop all hits and queries and empty the scratch directory."""
        self.clear_hits()
        self.queries.clear_all()
        self.empty_temp_directory()
        self.state = SessionState.EMPTY
        self.target = None

    def empty_temp_directory(self):
        """Delete every regular file directly inside the scratch directory."""
        if not os.path.isdir(self.temp_dir):
            return

        for entry in os.scandir(self.temp_dir):
            if not entry.is_file():
                continue
            try:
                os.remove(entry.path)
            except OSError as e:
                logger.warning(f"Error removing scratch file {entry.path}: {str(e)}")

    #############################################################################
    #                           Automatic Search
    #############################################################################

    def run_automatic_search(self, query_file=None, parameters=None, progress_callback=None):
        """
        Run the complete search without user input.

        Steps: clean up, build the node database, load queries, locate the
        search programs, search, parse, then select the "all" target.

        Args:
            query_file: FASTA file of queries, defaults to Config.BLAST_QUERY_FILE
            parameters: BLAST parameter string, defaults to Config.BLAST_SEARCH_PARAMETERS
            progress_callback: Optional callable(done, total) invoked while
                loading queries; returning False cancels the search

        Returns:
            Empty string on success, otherwise the first error message
        """
        self.clean_up()

        if query_file is None:
            query_file = self.config.BLAST_QUERY_FILE
        if parameters is None:
            parameters = self.config.BLAST_SEARCH_PARAMETERS

        if not query_file:
            return "Error: No query file was given."

        try:
            self.runner.build_database(self.graph)
            self.load_queries(query_file, progress_callback)
            self.runner.check_search_programs()
            self.raw_output = self.runner.run_search(self.queries, parameters)
            hit_count = BlastOutputParser.parse(self.raw_output, self.queries, self.graph, self.hits)
        except GraphBlastError as e:
            logger.error(f"Automatic BLAST search failed: {str(e)}")
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            return str(e)

        logger.info(f"BLAST search found {hit_count} hits for {len(self.queries)} queries")
        self.state = SessionState.POPULATED
        return self.select_target(ALL_TARGETS)

    def load_queries(self, query_file, progress_callback=None):
        """
        Add every record of a FASTA file as a query.

        Names are cleaned and made unique before they are added.

        Raises:
            FileError: If the file cannot be read
            SearchCancelledError: If the progress callback returns False
        """
        records = FileIO.load_fasta(query_file)
        total = len(records)

        for done, (header, sequence) in enumerate(records, start=1):
            name = self.queries.make_unique_name(header)
            if name != Query.clean_name(header):
                logger.warning(f"Renamed query {header!r} to {name}")
            self.queries.add_query(name, sequence)

            if progress_callback is not None and progress_callback(done, total) is False:
                raise SearchCancelledError("Query loading was cancelled.")

        logger.debug(f"Loaded {total} queries from {query_file}")
        return total

    #############################################################################
    #                           Queries and Targets
    #############################################################################

    def remove_queries(self, queries):
        """
        Remove a subset of queries and their hits, keeping everything else.

        Hits are removed before the queries. The current target is rebuilt;
        if it was one of the removed queries the target falls back to "all".
        """
        queries = list(queries)
        removed_names = {query.name for query in queries}

        self.hits.remove_for_queries(queries)
        self.queries.remove_queries(queries)

        if not len(self.queries):
            self.graph.clear_all_hit_pointers()
            self.state = SessionState.EMPTY
            self.target = None
            return

        if self.target is not None:
            target = ALL_TARGETS if self.target in removed_names else self.target
            self.select_target(target)

    def select_target(self, name):
        """
        Rebuild every node's hit list for the given target.

        Args:
            name: "all" for every query, or the name of one query

        Returns:
            Empty string on success, otherwise an error message; on error
            the current hit lists are left untouched
        """
        if self.state == SessionState.EMPTY:
            error_msg = "Error: No search results to select from."
            logger.error(error_msg)
            return error_msg

        if name == ALL_TARGETS:
            selected = self.queries.queries
        else:
            query = self.queries.get_query_by_name(name)
            if query is None:
                error_msg = f"Error: No query named {name}."
                logger.error(error_msg)
                return error_msg
            selected = [query]

        self.graph.clear_all_hit_pointers()

        for query in selected:
            for hit in self.hits:
                if hit.query_name == query.name:
                    self.graph.attach_hit(hit)

        self.target = name
        logger.debug(f"Selected target {name}: {len(self.graph.nodes_with_hits())} nodes with hits")
        return ""

    def hits_for_node(self, node_name):
        """Hits attached to a node for the current target."""
        return self.graph.hits_for_node(node_name)

    def query_summary(self):
        """
        Return one row per query with its type, length and hit count.
        """
        return pd.DataFrame(
            [(q.name, q.sequence_type, q.length, q.hit_count, q.searched_for) for q in self.queries],
            columns=["query_name", "sequence_type", "length", "hits", "searched_for"],
        )
