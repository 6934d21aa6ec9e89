"""
Utility modules for graphblast.

This subpackage contains utility functionality:
- file_io: FASTA, GFA and hit report file operations
- tool_runner: BLAST+ program discovery and invocation
"""

from .file_io import FileIO
from .tool_runner import BlastToolRunner

__all__ = [
    'FileIO',
    'BlastToolRunner',
]
