#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
BLAST+ tool runner for graphblast.

Contains functionality for:
1. Locating makeblastdb, blastn and tblastn on the search path
2. Building a nucleotide BLAST database from the graph's node sequences
3. Running blastn/tblastn for nucleotide/protein queries

Each invocation blocks until the program exits. The first failure raises
and no later step is attempted.
"""

import os
import shlex
import shutil
import logging
import subprocess

from .file_io import FileIO
from ..config import Config, BlastError, ToolNotFoundError, ToolExecutionError

# Set up module logger
logger = logging.getLogger(__name__)


class BlastToolRunner:
    """
    Runs the BLAST+ programs inside a scratch directory.

    Example:
        >>> runner = BlastToolRunner("/tmp/graphblast_x")
        >>> runner.build_database(graph)
        >>> raw = runner.run_search(query_store, "-evalue 1e-10")
    """

    def __init__(self, temp_dir, config=None):
        """
        Initialize with a scratch directory and configuration.

        Args:
            temp_dir: Directory holding the database and query files
            config: Configuration object (defaults to global Config)
        """
        self.temp_dir = temp_dir
        self.config = config if config else Config
        self.commands = {}

    @property
    def database_path(self):
        return os.path.join(self.temp_dir, self.config.NODE_DB_FILENAME)

    def find_program(self, program_name):
        """
        Locate a program on the search path.

        Args:
            program_name: Program to look for

        Returns:
            Full path to the program

        Raises:
            ToolNotFoundError: If the program is not on the search path
        """
        command = shutil.which(program_name)
        if command is None:
            logger.error(f"Program not found on PATH: {program_name}")
            raise ToolNotFoundError(program_name)

        logger.debug(f"Found {program_name} at: {command}")
        self.commands[program_name] = command
        return command

    def _run(self, program_name, args):
        command = self.commands.get(program_name) or self.find_program(program_name)
        cmd = [command] + args

        # Log the command but with quotes for human readability
        cmd_str = " ".join(shlex.quote(str(c)) for c in cmd)
        logger.debug(f"Running command: {cmd_str}")

        try:
            result = subprocess.run(cmd, text=True, capture_output=True, cwd=self.temp_dir)
        except OSError as e:
            error_msg = f"Failed to start {program_name}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ToolExecutionError(error_msg, tool_name=program_name, command=cmd) from e

        if result.returncode != 0:
            message = (result.stderr or result.stdout or "").strip() or "no output"
            logger.error(f"{program_name} failed with return code {result.returncode}")
            logger.debug(f"{program_name} stderr: {result.stderr}")
            logger.debug(f"{program_name} stdout: {result.stdout}")
            raise ToolExecutionError(
                message,
                tool_name=program_name,
                command=cmd,
                return_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return result.stdout

    def build_database(self, graph):
        """
        Write every graph node to FASTA and build a nucleotide database.

        Args:
            graph: AssemblyGraph providing node sequences and labels

        Raises:
            ToolNotFoundError: If makeblastdb is not on the search path
            ToolExecutionError: If makeblastdb fails
        """
        self.find_program(self.config.MAKEBLASTDB_PROGRAM)

        FileIO.save_fasta(
            ((graph.blast_label(node), node.sequence) for node in graph),
            self.database_path,
        )

        self._run(self.config.MAKEBLASTDB_PROGRAM, [
            "-in", self.config.NODE_DB_FILENAME,
            "-dbtype", "nucl",
        ])
        logger.info(f"BLAST database built from {len(graph)} nodes")

    def check_search_programs(self):
        """
        Locate blastn and then tblastn.

        Raises:
            ToolNotFoundError: For the first program that is missing
        """
        self.find_program(self.config.BLASTN_PROGRAM)
        self.find_program(self.config.TBLASTN_PROGRAM)

    def run_search(self, query_store, parameters=""):
        """
        Search every query against the node database.

        Nucleotide queries go to blastn and protein queries to tblastn; the
        tabular output of both runs is concatenated.

        Args:
            query_store: QueryStore with the queries to search
            parameters: Free-form BLAST parameter string

        Returns:
            Raw tabular BLAST output

        Raises:
            ToolNotFoundError: If a needed search program is missing
            ToolExecutionError: If a search program fails
            BlastError: If the parameter string cannot be split
        """
        try:
            extra_args = shlex.split(parameters) if parameters else []
        except ValueError as e:
            error_msg = f"Error: Invalid BLAST parameters '{parameters}': {str(e)}"
            logger.error(error_msg)
            raise BlastError(error_msg) from e

        batches = [
            (self.config.BLASTN_PROGRAM, self.config.NUCL_QUERY_FILENAME, query_store.nucleotide_queries()),
            (self.config.TBLASTN_PROGRAM, self.config.PROT_QUERY_FILENAME, query_store.protein_queries()),
        ]

        output = []
        for program_name, query_filename, queries in batches:
            if not queries:
                continue

            FileIO.save_fasta(
                ((query.name, query.sequence) for query in queries),
                os.path.join(self.temp_dir, query_filename),
            )
            stdout = self._run(program_name, [
                "-query", query_filename,
                "-db", self.config.NODE_DB_FILENAME,
                "-outfmt", self.config.BLAST_OUTPUT_FORMAT,
            ] + extra_args)
            output.append(stdout)

            for query in queries:
                query.searched_for = True
            logger.debug(f"{program_name} searched {len(queries)} queries")

        return "\n".join(output)
