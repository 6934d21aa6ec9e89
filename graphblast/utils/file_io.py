#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
File I/O utilities for graphblast.

Contains functionality for:
1. FASTA reading and writing through Biopython
2. Loading assembly graph nodes from GFA or FASTA files
3. Writing hit reports through pandas
"""

import os
import logging

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from ..config import FileError, FileFormatError

logger = logging.getLogger(__name__)


class FileIO:
    """
    File operations used by the search pipeline and the CLI.
    """

    @staticmethod
    def load_fasta(filepath):
        """
        Load sequences from a FASTA file.

        The full header line (after '>') is kept as the name so that
        whitespace inside it can be cleaned by the caller.

        Args:
            filepath: Path to the FASTA file

        Returns:
            List of (header, sequence) tuples in file order

        Raises:
            FileError: If the FASTA file doesn't exist or cannot be read
            FileFormatError: If there's an error parsing the FASTA file
        """
        if not os.path.exists(filepath):
            error_msg = f"FASTA file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        try:
            with open(filepath, 'r') as handle:
                records = [(record.description, str(record.seq).upper())
                           for record in SeqIO.parse(handle, "fasta")]
        except (OSError, IOError) as e:
            error_msg = f"Error reading FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e
        except ValueError as e:
            error_msg = f"Error parsing FASTA file {os.path.abspath(filepath)}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileFormatError(error_msg) from e

        logger.debug(f"Successfully loaded {len(records)} sequences from FASTA file")
        return records

    @staticmethod
    def save_fasta(records, filepath):
        """
        Save (name, sequence) pairs to a FASTA file.

        Args:
            records: Iterable of (name, sequence) tuples
            filepath: Path to save the FASTA file

        Returns:
            Number of records written

        Raises:
            FileError: If the file cannot be written
        """
        seq_records = [SeqRecord(Seq(sequence), id=name, description="")
                       for name, sequence in records]

        try:
            with open(filepath, 'w') as handle:
                count = SeqIO.write(seq_records, handle, "fasta")
        except (OSError, IOError) as e:
            error_msg = f"Error writing FASTA file {filepath}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        logger.debug(f"Wrote {count} sequences to {filepath}")
        return count

    @classmethod
    def load_graph_nodes(cls, filepath):
        """
        Load graph node sequences from a GFA or FASTA file.

        GFA files contribute their segment (S) lines; FASTA files contribute
        one node per record, named by the first word of the header.

        Args:
            filepath: Path to a .gfa file or a FASTA file

        Returns:
            List of (node_name, sequence) tuples in file order

        Raises:
            FileError: If the file doesn't exist
            FileFormatError: If a segment has no sequence
        """
        if not os.path.exists(filepath):
            error_msg = f"Graph file not found: {filepath}"
            logger.error(error_msg)
            raise FileError(error_msg)

        if filepath.lower().endswith(".gfa"):
            return cls._read_gfa_segments(filepath)

        nodes = []
        for header, sequence in cls.load_fasta(filepath):
            if not header.strip():
                error_msg = f"FASTA record without a name in {filepath}"
                logger.error(error_msg)
                raise FileFormatError(error_msg)
            nodes.append((header.split()[0], sequence))
        return nodes

    @staticmethod
    def _read_gfa_segments(filepath):
        nodes = []
        try:
            with open(filepath, 'r') as f:
                for line_number, line in enumerate(f, start=1):
                    if not line.startswith("S\t"):
                        continue
                    parts = line.rstrip("\n").split("\t")
                    if len(parts) < 3 or parts[2] == "*":
                        raise FileFormatError(
                            f"Segment without sequence on line {line_number} of {filepath}"
                        )
                    nodes.append((parts[1], parts[2].upper()))
        except (OSError, IOError) as e:
            error_msg = f"Error reading GFA file {filepath}: {str(e)}"
            logger.error(error_msg)
            raise FileError(error_msg) from e
        except ValueError as e:
            error_msg = f"Error parsing GFA file {filepath}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileFormatError(error_msg) from e
        return nodes

    @staticmethod
    def save_hits(df, filepath):
        """
        Save a hit table DataFrame, as CSV for .csv paths and TSV otherwise.

        Raises:
            FileError: If the report cannot be written
        """
        sep = "," if filepath.lower().endswith(".csv") else "\t"
        try:
            df.to_csv(filepath, sep=sep, index=False)
        except (OSError, IOError) as e:
            error_msg = f"Error writing hit report {filepath}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e
        logger.info(f"Saved {len(df)} hits to {filepath}")
