#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for graphblast tests.

This file contains fixtures that can be reused across multiple test modules.
"""

import os
import shutil
import logging
import tempfile
import warnings
from unittest import mock

import pytest

# Import package modules
from ..config import Config
from ..core import AssemblyGraph, QueryStore, HitTable


# ============== Suppress logging ===============

def pytest_configure(config):
    """
    Configure pytest settings at startup.
    """
    logging.disable(logging.CRITICAL)
    warnings.simplefilter("ignore")


def pytest_runtest_setup(item):
    """
    Reset log levels before each test to ensure consistency.
    """
    logging.disable(logging.CRITICAL)


# ============== Temporary files and directories ===============

@pytest.fixture(scope="function")
def temp_dir():
    """Create a temporary directory and clean it up after the test."""
    temp_dir = tempfile.mkdtemp(prefix="graphblast_test_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def query_fasta_file(temp_dir):
    """
    FASTA file with two nucleotide queries and one protein query.
    """
    path = os.path.join(temp_dir, "queries.fasta")
    with open(path, "w") as f:
        f.write(">Q1\n")
        f.write("ATCGATCGATCGTAGCTAGCTAGC\n")
        f.write(">Q2\n")
        f.write("GCTAGCTAGCTAGCTAGCTA\n")
        f.write(">prot1\n")
        f.write("MKLVWQERTYPLIDF\n")
    return path


# ============== Test data and mock objects ===============

@pytest.fixture(scope="function")
def mock_config():
    """
    Fixture that restores every Config attribute changed during a test.
    """
    original_values = {}
    for attr in dir(Config):
        if attr.isupper():
            original_values[attr] = getattr(Config, attr)

    Config.SHOW_PROGRESS = False

    yield Config

    for attr, value in original_values.items():
        setattr(Config, attr, value)


@pytest.fixture
def graph():
    """Graph with nodes 1, 2 and 7; node 7 is 500 bp long."""
    graph = AssemblyGraph()
    graph.add_node("1", "ACGT" * 50)
    graph.add_node("2", "TTGCA" * 40)
    graph.add_node("7", "ACGT" * 125)
    return graph


@pytest.fixture
def query_store():
    store = QueryStore()
    store.add_query("Q1", "ATCGATCGATCGTAGCTAGCTAGC")
    store.add_query("Q2", "GCTAGCTAGCTAGCTAGCTA")
    return store


@pytest.fixture
def hit_table():
    return HitTable()


def blast_line(query="Q1", node_label="NODE_7_length_500", identity="98.5", length="120",
               mismatches="2", gaps="0", qstart="1", qend="120", sstart="10", send="130",
               evalue="1e-40", bitscore="220"):
    """Build one tab-separated BLAST output line."""
    return "\t".join([query, node_label, identity, length, mismatches, gaps,
                      qstart, qend, sstart, send, evalue, bitscore])


@pytest.fixture
def fake_blast():
    """
    Patch program lookup and subprocess execution for the tool runner.

    The returned object maps program names to (returncode, stdout, stderr)
    and records every command that was run.
    """
    class FakeBlast:
        def __init__(self):
            self.results = {
                "makeblastdb": (0, "Database built", ""),
                "blastn": (0, "", ""),
                "tblastn": (0, "", ""),
            }
            self.missing = set()
            self.commands = []

        def which(self, name):
            if name in self.missing:
                return None
            return f"/usr/bin/{name}"

        def run(self, cmd, **kwargs):
            self.commands.append(cmd)
            program = os.path.basename(cmd[0])
            returncode, stdout, stderr = self.results[program]
            return mock.MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)

        def programs_run(self):
            return [os.path.basename(cmd[0]) for cmd in self.commands]

    fake = FakeBlast()
    with mock.patch("graphblast.utils.tool_runner.shutil.which", side_effect=fake.which), \
            mock.patch("graphblast.utils.tool_runner.subprocess.run", side_effect=fake.run):
        yield fake
