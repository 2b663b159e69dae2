"""
Unit tests for LoaderConfig.

Run with: python -m pytest tests/test_config.py -v
"""

import json

import pytest

from rdfloader import LoaderConfig, __version__


@pytest.mark.unit
class TestLoaderConfig:

    def test_defaults(self):
        config = LoaderConfig()
        assert config.user_agent == f"rdfloader/{__version__}"
        assert config.accept == "application/rdf+xml,text/turtle,text/n3,application/trix"
        assert config.timeout is None
        assert config.default_format == "RDF/XML"
        assert config.check_memory
        assert not config.force_large_file

    def test_request_headers(self):
        headers = LoaderConfig(user_agent="crawler/1.0").request_headers()
        assert headers["Accept"] == "application/rdf+xml,text/turtle,text/n3,application/trix"
        assert headers["Accept-Charset"] == "utf-8"
        assert headers["Accept-Encoding"] == "gzip"
        assert headers["User-Agent"] == "crawler/1.0"

    @pytest.mark.parametrize("kwargs", [
        {"timeout": 0},
        {"timeout": -5},
        {"max_safe_file_mb": 0},
        {"user_agent": ""},
        {"accept": "   "},
        {"default_format": ""},
        {"resource_package": None},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            LoaderConfig(**kwargs)

    def test_from_dict(self):
        config = LoaderConfig.from_dict({"timeout": 12.5, "default_format": "Turtle"})
        assert config.timeout == 12.5
        assert config.default_format == "Turtle"
        assert LoaderConfig.from_dict(None) == LoaderConfig()

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="retries"):
            LoaderConfig.from_dict({"timeout": 5, "retries": 3})

    def test_to_dict_round_trip(self):
        config = LoaderConfig(timeout=3, resource_package="tests.resources")
        assert LoaderConfig.from_dict(config.to_dict()) == config


@pytest.mark.unit
class TestLoaderConfigFile:

    def test_from_file(self, tmp_path):
        path = tmp_path / "loader.json"
        path.write_text(json.dumps({"timeout": 30, "user_agent": "my-crawler/2.0"}), encoding="utf-8")
        config = LoaderConfig.from_file(path)
        assert config.timeout == 30
        assert config.user_agent == "my-crawler/2.0"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LoaderConfig.from_file(tmp_path / "missing.json")

    def test_empty_path(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            LoaderConfig.from_file("")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"timeout": ', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            LoaderConfig.from_file(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            LoaderConfig.from_file(path)
