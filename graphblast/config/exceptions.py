#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for graphblast.

This module defines exception classes used throughout graphblast
to provide more specific error information. None of them cross the
SearchSession boundary: the session converts them to error strings.
"""


class GraphBlastError(Exception):
    """Base exception class for all graphblast-specific errors."""
    pass


class FileError(GraphBlastError):
    """Base class for file-related errors."""
    pass


class FileFormatError(FileError):
    """Error with file formatting or parsing."""
    pass


class ConfigError(GraphBlastError):
    """Error with configuration parameters."""
    pass


class QueryError(GraphBlastError):
    """Base class for query store errors."""
    pass


class DuplicateQueryError(QueryError):
    """A query with the same cleaned name is already stored."""
    pass


class QueryNotFoundError(QueryError):
    """No query with the requested name exists."""
    pass


class SearchCancelledError(GraphBlastError):
    """Query loading was cancelled by the progress callback."""
    pass


class BlastError(GraphBlastError):
    """Base class for BLAST-related errors."""
    pass


class ToolNotFoundError(BlastError):
    """A required BLAST+ program is not on the search path."""

    def __init__(self, program):
        self.program = program
        super().__init__(
            f"Error: The program {program} was not found.  "
            f"Please install NCBI BLAST to use this feature."
        )


class ToolExecutionError(BlastError):
    """Error when executing a BLAST+ program."""

    def __init__(self, message, tool_name=None, command=None, return_code=None, stdout=None, stderr=None):
        """
        Initialize with extended information about the failed invocation.

        Args:
            message (str): Error message
            tool_name (str, optional): Name of the external tool
            command (list, optional): Command that was executed
            return_code (int, optional): Return code from the command
            stdout (str, optional): Standard output from the command
            stderr (str, optional): Standard error from the command
        """
        self.tool_name = tool_name
        self.command = command
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr

        detailed_message = message
        if tool_name:
            detailed_message = f"{tool_name} error: {message}"
        if return_code is not None:
            detailed_message += f" (return code: {return_code})"

        super().__init__(detailed_message)


class BlastOutputParseError(BlastError):
    """Base class for hard-stop failures while linking BLAST output."""
    pass


class UnresolvedNodeReferenceError(BlastOutputParseError):
    """A hit names a node that is not in the current graph."""

    def __init__(self, node_label):
        self.node_label = node_label
        super().__init__(
            f"Error: BLAST hit refers to node label '{node_label}' which is not in the graph."
        )


class UnresolvedQueryReferenceError(BlastOutputParseError):
    """A hit names a query that is not in the query store."""

    def __init__(self, query_name):
        self.query_name = query_name
        super().__init__(
            f"Error: BLAST hit refers to query '{query_name}' which is not loaded."
        )
