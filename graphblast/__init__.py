"""
graphblast: BLAST searches of query sequences against assembly graph nodes.
"""

__version__ = "0.1.0"
