#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration package for graphblast.
"""

from .config import Config
from .logging_config import setup_logging
from .exceptions import (
    GraphBlastError,
    FileError,
    FileFormatError,
    ConfigError,
    QueryError,
    DuplicateQueryError,
    QueryNotFoundError,
    SearchCancelledError,
    BlastError,
    ToolNotFoundError,
    ToolExecutionError,
    BlastOutputParseError,
    UnresolvedNodeReferenceError,
    UnresolvedQueryReferenceError,
)

__all__ = [
    'Config',
    'setup_logging',
    'GraphBlastError',
    'FileError',
    'FileFormatError',
    'ConfigError',
    'QueryError',
    'DuplicateQueryError',
    'QueryNotFoundError',
    'SearchCancelledError',
    'BlastError',
    'ToolNotFoundError',
    'ToolExecutionError',
    'BlastOutputParseError',
    'UnresolvedNodeReferenceError',
    'UnresolvedQueryReferenceError',
]
