#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
graphblast command line entry point.

A streamlined script that:
1. Loads an assembly graph from a GFA or FASTA file
2. Builds a BLAST database from the graph's nodes
3. Loads query sequences and BLASTs them against the nodes
4. Selects a target (all queries or one query) and reports the hits

Contains functionality for:
1. Command line argument parsing
2. Configuration loading and logging setup
3. Progress display while loading queries
4. Hit report output
"""

import sys
import argparse
import logging
import traceback

from tqdm import tqdm

from .config import Config, setup_logging, GraphBlastError
from .core import AssemblyGraph, SearchSession
from .utils import FileIO

# Set up module logger
logger = logging.getLogger(__name__)


#############################################################################
#                          Command Line Argument Parsing
#############################################################################

def parse_arguments(argv=None):
    """
    Parse command line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description='graphblast: BLAST query sequences against assembly graph nodes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    option_group = parser.add_argument_group('options')
    input_group = parser.add_argument_group('inputs')

    option_group.add_argument('--debug', nargs='*', metavar='MODULE',
                              help='Enable debug mode. Use without arguments for universal debug, '
                                   'or specify module names (e.g. "--debug output_parser").')
    option_group.add_argument('--config', metavar='[.json]',
                              help='JSON configuration file.')
    option_group.add_argument('--params', metavar='"<blast options>"',
                              help='Extra BLAST parameters, e.g. "-evalue 1e-10".')
    option_group.add_argument('--target', metavar='<query name>',
                              help='Query whose hits are reported (default: all).')

    input_group.add_argument('--graph', metavar='[.gfa, .fasta]', required=True,
                             help='Assembly graph (GFA) or FASTA of node sequences. Node names '
                                  'must not contain "_" (e.g. Flye "edge_1" segments need renaming), '
                                  'since BLAST labels are NODE_<name>_length_<len>.')
    input_group.add_argument('--queries', metavar='[.fasta]',
                             help='FASTA file of query sequences')
    input_group.add_argument('--output', metavar='[.tsv, .csv]',
                             help='Write the selected hits to this file')

    args = parser.parse_args(argv)

    if args.debug is None:
        args.debug = False
    elif len(args.debug) == 0:
        args.debug = True

    return args


class _LoadProgress:
    """Progress callback that drives a tqdm bar while queries load."""

    def __init__(self, enabled=True):
        self.enabled = enabled
        self.bar = None

    def __call__(self, done, total):
        if not self.enabled:
            return True
        if self.bar is None:
            self.bar = tqdm(total=total, desc="Loading queries", unit="query")
        self.bar.update(1)
        return True

    def close(self):
        if self.bar is not None:
            self.bar.close()


def run_search(args):
    """
    Run one search session from parsed arguments.

    Returns:
        bool: True if the search completed without error
    """
    if args.config:
        Config.load_from_file(args.config)
    if args.queries:
        Config.BLAST_QUERY_FILE = args.queries
    if args.params is not None:
        Config.BLAST_SEARCH_PARAMETERS = args.params

    graph = AssemblyGraph.load(args.graph)

    progress = _LoadProgress(enabled=Config.SHOW_PROGRESS)
    with SearchSession(graph) as session:
        try:
            error = session.run_automatic_search(progress_callback=progress)
        finally:
            progress.close()

        if error:
            logger.error(error)
            return False

        if args.target:
            error = session.select_target(args.target)
            if error:
                logger.error(error)
                return False

        summary = session.query_summary()
        logger.info("\n" + summary.to_string(index=False))
        logger.info(f"\n{len(graph.nodes_with_hits())} of {len(graph)} nodes have hits "
                    f"for target '{session.target}'")

        if args.output:
            selected = session.hits.to_dataframe()
            if session.target != "all":
                selected = selected[selected["query_name"] == session.target]
            FileIO.save_hits(selected, args.output)

    return True


def main(argv=None):
    """
    Main entry point.

    Returns:
        int: Process exit code
    """
    args = parse_arguments(argv)
    setup_logging(debug=args.debug)

    try:
        success = run_search(args)
        if success:
            logger.info("\n=== Search completed successfully ===")
            return 0
        return 1
    except GraphBlastError as e:
        logger.error(f"\n!!! Search failed: {str(e)}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
