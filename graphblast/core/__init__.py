"""
Core modules for graphblast.

This subpackage contains the search data model and pipeline:
- assembly_graph: Graph node table and per-node hit lists
- query_store: Query names, sequences and hit counts
- hit_table: Typed BLAST hit records
- output_parser: BLAST tabular output parsing and linking
- search_session: Session lifecycle and search orchestration
"""

__all__ = [
    'GraphNode',
    'AssemblyGraph',
    'Query',
    'QueryStore',
    'HitRecord',
    'HitTable',
    'BlastOutputParser',
    'SearchSession',
    'SessionState',
]

from .assembly_graph import GraphNode, AssemblyGraph
from .query_store import Query, QueryStore
from .hit_table import HitRecord, HitTable
from .output_parser import BlastOutputParser
from .search_session import SearchSession, SessionState
