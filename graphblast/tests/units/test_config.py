#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Unit tests for Config.
"""

import json
import os

import pytest

from ...config import Config, ConfigError


class TestConfig:
    """Test class for Config loading and saving."""

    def test_get_instance_is_singleton(self):
        assert Config.get_instance() is Config.get_instance()

    def test_load_from_file(self, temp_dir, mock_config):
        path = os.path.join(temp_dir, "settings.json")
        with open(path, "w") as f:
            json.dump({"BLAST_SEARCH_PARAMETERS": "-evalue 1e-20", "UNKNOWN_KEY": 1}, f)

        assert Config.load_from_file(path) is True
        assert Config.BLAST_SEARCH_PARAMETERS == "-evalue 1e-20"
        assert not hasattr(Config, "UNKNOWN_KEY")

    def test_load_invalid_json(self, temp_dir, mock_config):
        path = os.path.join(temp_dir, "settings.json")
        with open(path, "w") as f:
            f.write("{not json")

        with pytest.raises(ConfigError):
            Config.load_from_file(path)

    def test_load_non_object(self, temp_dir, mock_config):
        path = os.path.join(temp_dir, "settings.json")
        with open(path, "w") as f:
            json.dump(["a"], f)

        with pytest.raises(ConfigError):
            Config.load_from_file(path)

    def test_save_and_reload(self, temp_dir, mock_config):
        path = os.path.join(temp_dir, "saved.json")
        Config.BLASTN_PROGRAM = "blastn-custom"

        Config.save_to_file(path)
        Config.BLASTN_PROGRAM = "blastn"
        Config.load_from_file(path)

        assert Config.BLASTN_PROGRAM == "blastn-custom"

    def test_get_all_settings(self):
        settings = Config.get_all_settings()
        assert settings["MAKEBLASTDB_PROGRAM"] == Config.MAKEBLASTDB_PROGRAM
        assert "_instance" not in settings
