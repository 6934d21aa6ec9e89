#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module for graphblast.

Contains functionality for:
1. Central configuration settings management with singleton pattern
2. JSON configuration file loading/saving
3. BLAST+ program names and search parameters
4. Scratch directory and file naming settings

This module provides centralized configuration management for graphblast,
supporting simple parameter overrides from a JSON file.
"""

import os
import json
import logging
from typing import Dict, Any

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class Config:
    """
    Central configuration settings for graphblast with singleton pattern.

    Settings are plain class attributes so that every module reads the same
    values without passing a settings object around.

    Attributes:
        DEBUG_MODE: Enable debug logging mode
        BLAST_QUERY_FILE: FASTA file of queries used by automatic searches
        BLAST_SEARCH_PARAMETERS: Free-form parameter string passed to BLAST

    Example:
        >>> config = Config.get_instance()
        >>> config.BLAST_SEARCH_PARAMETERS = "-evalue 1e-10"
        >>> Config.load_from_file("my_config.json")
    """

    # Singleton instance
    _instance = None

    #############################################################################
    #                           Pipeline Mode Options
    #############################################################################
    DEBUG_MODE = False                   # Debug logging mode (enable with --debug flag)
    SHOW_PROGRESS = True                 # Show tqdm progress while loading queries

    #############################################################################
    #                           Search Inputs
    #############################################################################
    BLAST_QUERY_FILE = None              # FASTA file with the query sequences
    BLAST_SEARCH_PARAMETERS = ""         # Extra parameters appended to blastn/tblastn

    #############################################################################
    #                           BLAST+ Programs
    #############################################################################
    MAKEBLASTDB_PROGRAM = "makeblastdb"
    BLASTN_PROGRAM = "blastn"
    TBLASTN_PROGRAM = "tblastn"
    BLAST_OUTPUT_FORMAT = "6"            # Tabular, 12 fixed columns

    #############################################################################
    #                           Scratch Directory
    #############################################################################
    TEMP_DIR = None                      # None creates a private directory per session
    NODE_DB_FILENAME = "all_nodes.fasta"
    NUCL_QUERY_FILENAME = "nucl_queries.fasta"
    PROT_QUERY_FILENAME = "prot_queries.fasta"

    def __init__(self):
        """Initialize Config instance with default values."""
        # Implementation left empty as we're using class variables
        pass

    @classmethod
    def get_instance(cls) -> 'Config':
        """
        Get the singleton instance of Config.

        Returns:
            Config: Singleton instance
        """
        if cls._instance is None:
            logger.debug("Creating new Config singleton instance")
            cls._instance = cls()
        return cls._instance

    @classmethod
    def get_user_config_dir(cls) -> str:
        """
        Get the user configuration directory, creating it if necessary.

        Returns:
            Path to user configuration directory

        Raises:
            ConfigError: If directory cannot be created
        """
        config_dir = os.path.join(os.path.expanduser("~"), ".graphblast")

        try:
            os.makedirs(config_dir, exist_ok=True)
            logger.debug(f"User config directory: {config_dir}")
            return config_dir
        except OSError as e:
            error_msg = f"Failed to create user config directory {config_dir}: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

    @classmethod
    def load_from_file(cls, filepath: str) -> bool:
        """
        Load settings from a JSON configuration file.

        Only keys that name an existing public setting are applied; unknown
        keys are logged and ignored.

        Args:
            filepath: Path to the JSON settings file

        Returns:
            bool: True if settings were loaded successfully

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object
        """
        logger.debug(f"Loading JSON configuration from {filepath}")

        try:
            with open(filepath, 'r') as f:
                settings = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            error_msg = f"Failed to load settings from {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

        if not isinstance(settings, dict):
            error_msg = f"Configuration file {filepath} must contain a JSON object"
            logger.error(error_msg)
            raise ConfigError(error_msg)

        known = cls.get_all_settings()
        for key, value in settings.items():
            if key in known:
                setattr(cls, key, value)
                logger.debug(f"Updated {key} = {value}")
            else:
                logger.warning(f"Ignoring unknown setting: {key}")

        return True

    @classmethod
    def save_to_file(cls, filepath: str) -> bool:
        """
        Save current settings to a JSON file.

        Args:
            filepath: Destination path

        Returns:
            bool: True if settings were saved successfully

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            with open(filepath, 'w') as f:
                json.dump(cls.get_all_settings(), f, indent=2)
            logger.debug(f"Saved configuration to {filepath}")
            return True
        except (OSError, TypeError) as e:
            error_msg = f"Failed to save settings to {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

    @classmethod
    def get_all_settings(cls) -> Dict[str, Any]:
        """
        Get all public configuration settings.

        Returns:
            Dictionary mapping setting names to their current values
        """
        settings = {}

        # Add all class variables that don't start with underscore
        for key in dir(cls):
            if not key.startswith('_') and not callable(getattr(cls, key)):
                settings[key] = getattr(cls, key)

        logger.debug(f"Retrieved {len(settings)} configuration settings")
        return settings
