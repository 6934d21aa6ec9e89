#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration module for graphblast.

Contains functionality for:
1. Module-specific debug level control based on filenames
2. Debug filtering and formatting with colors
3. Automatic log file management

Every graphblast module logs through ``logging.getLogger(__name__)``;
this module only wires handlers onto the root logger.
"""

import os
import logging
from datetime import datetime
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class ModuleDebugConfig:
    """
    Configuration for module-specific debug settings.

    Attributes:
        MODULE_DEBUG_LEVELS: Dictionary mapping module names to log levels
        FILENAME_TO_MODULE: Dictionary mapping filenames to full module paths
    """

    # All modules default to INFO level
    MODULE_DEBUG_LEVELS = {
        'graphblast.main': logging.INFO,
        'graphblast.core.assembly_graph': logging.INFO,
        'graphblast.core.query_store': logging.INFO,
        'graphblast.core.hit_table': logging.INFO,
        'graphblast.core.output_parser': logging.INFO,
        'graphblast.core.search_session': logging.INFO,
        'graphblast.utils.tool_runner': logging.INFO,
        'graphblast.utils.file_io': logging.INFO,
        'graphblast.config.config': logging.INFO,
    }

    # Filename to module mapping for intuitive usage
    FILENAME_TO_MODULE = {
        'main': 'graphblast.main',

        # Core files
        'assembly_graph': 'graphblast.core.assembly_graph',
        'query_store': 'graphblast.core.query_store',
        'hit_table': 'graphblast.core.hit_table',
        'output_parser': 'graphblast.core.output_parser',
        'search_session': 'graphblast.core.search_session',

        # Utility files
        'tool_runner': 'graphblast.utils.tool_runner',
        'file_io': 'graphblast.utils.file_io',

        # Config files
        'config': 'graphblast.config.config',
    }


class LevelColorFormatter(logging.Formatter):
    """Console formatter that colours warnings and errors when debugging."""

    LEVEL_COLORS = {
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, use_colors=False):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record):
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{message}{self.RESET}" if color else message


class ModuleLevelFilter(logging.Filter):
    """
    Pass a record only if it reaches the level configured for its module.

    Loggers below a configured module (``graphblast.core`` covers
    ``graphblast.core.output_parser``) inherit its level; anything else
    needs INFO.
    """

    def __init__(self, module_levels: Dict[str, int]):
        super().__init__()
        self.module_levels = module_levels

    def level_for(self, name: str) -> int:
        while name:
            if name in self.module_levels:
                return self.module_levels[name]
            name = name.rpartition('.')[0]
        return logging.INFO

    def filter(self, record):
        return record.levelno >= self.level_for(record.name)


def setup_logging(debug: Union[bool, List[str], str] = False, log_dir: Optional[str] = None) -> str:
    """
    Configure logging with filename-based debug control.

    Args:
        debug: Debug configuration options:
               - False: No debug logging
               - True: Universal debug for all modules
               - str: Single filename for debug (e.g., 'output_parser')
               - List[str]: List of filenames for debug
        log_dir: Directory for the log file, defaults to ~/.graphblast/logs

    Returns:
        str: Path to the created log file

    Raises:
        LoggingConfigError: If logging setup fails

    Example:
        >>> log_file = setup_logging(debug=['output_parser', 'tool_runner'])
    """
    try:
        from .config import Config

        debug_enabled, debug_modules = _normalize_debug_input(debug)

        module_config = ModuleDebugConfig.MODULE_DEBUG_LEVELS.copy()

        if debug_modules:
            for module in module_config:
                module_config[module] = logging.INFO

            for module_name in debug_modules:
                full_module_name = _resolve_module_name(module_name)
                if full_module_name:
                    module_config[full_module_name] = logging.DEBUG
        elif debug_enabled:
            for module in module_config:
                module_config[module] = logging.DEBUG

        if log_dir is None:
            log_dir = os.path.join(os.path.expanduser("~"), ".graphblast", "logs")
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"graphblast_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        # File handler (detailed, no colors)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)

        if debug_enabled:
            console_formatter = LevelColorFormatter(
                fmt='%(levelname)-8s [%(name)s] %(message)s',
                use_colors=True
            )
            console_handler.addFilter(ModuleLevelFilter(module_config))
        else:
            console_formatter = LevelColorFormatter(fmt='%(message)s', use_colors=False)

        console_handler.setFormatter(console_formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        if debug_enabled:
            logger.debug(f"Debug logging enabled, log file: {log_file}")
            if debug_modules:
                unresolved = [m for m in debug_modules if _resolve_module_name(m) is None]
                if unresolved:
                    logger.warning(f"Unknown module names: {', '.join(unresolved)}")

        Config.DEBUG_MODE = debug_enabled
        return log_file

    except Exception as e:
        error_msg = "Failed to setup logging configuration"
        print(f"ERROR: {error_msg}: {str(e)}")  # Can't use logger here since setup failed
        raise LoggingConfigError(error_msg) from e


def _normalize_debug_input(debug: Union[bool, List[str], str]) -> tuple:
    """
    Normalize various debug input formats to (debug_enabled, debug_modules).

    Example:
        >>> _normalize_debug_input(['output_parser'])
        (True, ['output_parser'])
    """
    from .config import Config

    if isinstance(debug, bool):
        return debug or Config.DEBUG_MODE, None
    if isinstance(debug, str):
        return True, [debug]
    if isinstance(debug, list):
        return True, debug
    return False, None


def _resolve_module_name(filename: str) -> Optional[str]:
    """
    Resolve a filename to its full module path.

    Example:
        >>> _resolve_module_name('output_parser')
        'graphblast.core.output_parser'
    """
    if filename in ModuleDebugConfig.FILENAME_TO_MODULE:
        return ModuleDebugConfig.FILENAME_TO_MODULE[filename]

    if filename in ModuleDebugConfig.MODULE_DEBUG_LEVELS:
        return filename

    return None


class LoggingConfigError(Exception):
    """Error during logging configuration setup."""
    pass
