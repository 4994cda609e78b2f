"""Unit tests for configuration management."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from slplint.config import (
    CONFIG_FILE_NAME,
    CatalogConfig,
    DocumentConfig,
    LogLevel,
    SlplintConfig,
    create_default_config,
    find_config_file,
    load_config,
)
from slplint.exceptions import ConfigError


class TestDocumentConfig:
    """Test DocumentConfig model."""

    def test_snaplogic_defaults(self):
        config = DocumentConfig()
        assert config.discriminator_key == "class_id"
        assert config.discriminator == "com-snaplogic-pipeline"
        assert config.node_section == "snap_map"
        assert config.edge_section == "link_map"
        assert config.required_fields == ["class_version", "property_map", "snap_map", "link_map"]

    def test_camel_case_aliases(self):
        config = DocumentConfig(**{"nodeSection": "nodes", "edgeSection": "edges"})
        assert config.node_section == "nodes"
        assert config.edge_section == "edges"

    def test_invalid_identifier_pattern(self):
        with pytest.raises(ValidationError, match="not a valid regex"):
            DocumentConfig(identifier_pattern="([0-9")


class TestCatalogConfig:
    """Test CatalogConfig model."""

    def test_trailing_slash_stripped(self):
        config = CatalogConfig(base_url="https://uat.elastic.snaplogic.com/")
        assert config.base_url == "https://uat.elastic.snaplogic.com"

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError, match="ttl_seconds must be > 0"):
            CatalogConfig(ttl_seconds=0)


class TestSlplintConfig:
    """Test complete SlplintConfig model."""

    def test_default_config(self):
        config = create_default_config()
        assert config.validation.fast_referential_check is True
        assert config.validation.check_layout is True
        assert config.scaffold.pipeline_class_version == 8
        assert config.logging.level == LogLevel.WARN.value

    def test_config_from_dict(self):
        config = SlplintConfig(**{
            "validation": {"fastReferentialCheck": False},
            "catalog": {"org": "acme", "cacheFile": "catalog.json"},
            "logging": {"level": "debug"},
        })
        assert config.validation.fast_referential_check is False
        assert config.catalog.org == "acme"
        assert config.catalog.cache_file == "catalog.json"
        assert config.logging.level == "debug"

    def test_unknown_section_rejected(self):
        with pytest.raises(ValidationError):
            SlplintConfig(**{"output": {"dir": "out"}})


class TestConfigLoading:
    """Test configuration file loading."""

    def test_load_explicit_file(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text(json.dumps({"scaffold": {"author": "etl-team"}}), encoding="utf-8")

        config = load_config(config_file)
        assert config.scaffold.author == "etl-team"

    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.json")
        assert config == create_default_config()

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("{ invalid json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(config_file)

    def test_invalid_structure(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text(json.dumps({"catalog": {"ttlSeconds": -5}}), encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to load config"):
            load_config(config_file)

    def test_find_config_in_parent(self, tmp_path):
        config_file = tmp_path / CONFIG_FILE_NAME
        config_file.write_text("{}", encoding="utf-8")
        nested = tmp_path / "pipelines" / "customers"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_file

    def test_find_config_not_found(self, tmp_path):
        with patch.object(Path, "exists", return_value=False):
            assert find_config_file(tmp_path) is None

    def test_load_searches_cwd(self, tmp_path, monkeypatch):
        (tmp_path / CONFIG_FILE_NAME).write_text(
            json.dumps({"validation": {"checkLayout": False}}), encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)

        assert load_config().validation.check_layout is False
