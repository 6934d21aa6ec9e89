#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Assembly graph node table for graphblast.

The graph is owned by the caller (a renderer or the CLI). graphblast only
reads node sequences from it and maintains the per-node list of BLAST hits
for the currently selected target.
"""

import logging
from typing import Dict, Iterator, List, Optional

from ..config import FileFormatError
from ..utils.file_io import FileIO

logger = logging.getLogger(__name__)


class GraphNode:
    """
    One node of an assembly graph.

    Attributes:
        name: Node key, as it appears in BLAST database labels
        sequence: Nucleotide sequence of the node
        blast_hits: Hits attached for the currently selected target
    """

    def __init__(self, name: str, sequence: str):
        self.name = name
        self.sequence = sequence
        self.blast_hits = []

    @property
    def length(self) -> int:
        return len(self.sequence)

    def __repr__(self):
        return f"GraphNode({self.name!r}, length={self.length}, hits={len(self.blast_hits)})"


class AssemblyGraph:
    """
    Node table keyed by node name.

    Example:
        >>> graph = AssemblyGraph()
        >>> graph.add_node("7", "ACGT" * 125)
        >>> AssemblyGraph.blast_label(graph.resolve_node("7"))
        'NODE_7_length_500'
    """

    def __init__(self):
        self.nodes: Dict[str, GraphNode] = {}

    @classmethod
    def load(cls, filepath):
        """
        Build a graph from a GFA or FASTA file of node sequences.

        Raises:
            FileError: If the file is missing or unreadable
            FileFormatError: If a node name or segment is invalid
        """
        graph = cls()
        for name, sequence in FileIO.load_graph_nodes(filepath):
            try:
                graph.add_node(name, sequence)
            except ValueError as e:
                error_msg = f"Invalid node in {filepath}: {str(e)}"
                logger.error(error_msg)
                raise FileFormatError(error_msg) from e

        logger.info(f"Loaded graph with {len(graph)} nodes from {filepath}")
        return graph

    def add_node(self, name: str, sequence: str) -> GraphNode:
        """
        Add a node to the graph, replacing any node with the same name.

        Args:
            name: Node key (must not contain underscores)
            sequence: Node sequence

        Returns:
            The new GraphNode

        Raises:
            ValueError: If the name is empty or contains an underscore
        """
        if not name or "_" in name:
            # The node key is recovered from the second underscore-delimited
            # token of the BLAST label, so it cannot contain one itself.
            raise ValueError(f"Invalid node name: {name!r}")

        if name in self.nodes:
            logger.warning(f"Replacing existing node {name}")

        node = GraphNode(name, sequence)
        self.nodes[name] = node
        return node

    def resolve_node(self, name: str) -> Optional[GraphNode]:
        return self.nodes.get(name)

    def clear_all_hit_pointers(self):
        """Detach every hit from every node."""
        for node in self.nodes.values():
            node.blast_hits = []

    def attach_hit(self, hit):
        """
        Attach a hit to the node it refers to.

        Raises:
            KeyError: If the hit's node is not in the graph
        """
        self.nodes[hit.node_name].blast_hits.append(hit)

    def hits_for_node(self, name: str) -> List:
        node = self.nodes.get(name)
        return list(node.blast_hits) if node else []

    def nodes_with_hits(self) -> List[GraphNode]:
        return [node for node in self.nodes.values() if node.blast_hits]

    @staticmethod
    def blast_label(node: GraphNode) -> str:
        return f"NODE_{node.name}_length_{node.length}"

    def __len__(self):
        return len(self.nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes.values())

    def __contains__(self, name):
        return name in self.nodes
