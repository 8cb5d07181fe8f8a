"""Tests for persist_models.toml loading."""

from pathlib import Path

import pytest

from persist_models.core.errors import ConfigError
from persist_models.core.manifest import (
    MANIFEST_NAME,
    ModelsManifest,
    find_manifest,
    load_manifest,
)
from persist_models.core.parser_impl import DEFAULT_CLOSE_MARKER, DEFAULT_OPEN_MARKERS


def write_manifest(directory: Path, content: str) -> Path:
    path = directory / MANIFEST_NAME
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadManifest:
    def test_full_manifest(self, tmp_path):
        path = write_manifest(
            tmp_path,
            """
[parser]
open_markers = ["[models|"]
close_marker = "|]"

[files]
paths = ["config/models", "src"]
model_names = ["models", "schema"]
embedded_suffixes = [".hs", ".lhs"]
""",
        )
        manifest = load_manifest(path)

        assert manifest.root == tmp_path
        assert manifest.parser.open_markers == ["[models|"]
        assert manifest.files.model_names == ["models", "schema"]
        assert manifest.files.embedded_suffixes == [".hs", ".lhs"]
        assert manifest.resolved_paths() == [tmp_path / "config/models", tmp_path / "src"]

    def test_defaults(self, tmp_path):
        manifest = load_manifest(write_manifest(tmp_path, ""))
        assert manifest.parser.open_markers == list(DEFAULT_OPEN_MARKERS)
        assert manifest.parser.close_marker == DEFAULT_CLOSE_MARKER
        assert manifest.files.paths == []
        assert manifest.files.model_names == ["models"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_manifest(tmp_path / MANIFEST_NAME)

    def test_invalid_toml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_manifest(write_manifest(tmp_path, "[parser\n"))

    def test_wrong_types(self, tmp_path):
        with pytest.raises(ConfigError, match="close_marker"):
            load_manifest(write_manifest(tmp_path, "[parser]\nclose_marker = 3\n"))
        with pytest.raises(ConfigError, match="paths"):
            load_manifest(write_manifest(tmp_path, '[files]\npaths = "config/models"\n'))

    def test_empty_open_markers(self, tmp_path):
        with pytest.raises(ConfigError, match="open_markers"):
            load_manifest(write_manifest(tmp_path, "[parser]\nopen_markers = []\n"))


class TestModelsManifest:
    def test_is_embedded(self):
        manifest = ModelsManifest()
        assert manifest.is_embedded(Path("src/Model.hs")) is True
        assert manifest.is_embedded(Path("config/models")) is False

    def test_is_model_file(self):
        manifest = ModelsManifest()
        assert manifest.is_model_file(Path("config/models")) is True
        assert manifest.is_model_file(Path("db/billing.persistentmodels")) is True
        assert manifest.is_model_file(Path("src/Model.hs")) is True
        assert manifest.is_model_file(Path("LICENSE")) is False
        assert manifest.is_model_file(Path("Makefile")) is False


class TestFindManifest:
    def test_walks_up(self, tmp_path):
        path = write_manifest(tmp_path, "")
        nested = tmp_path / "src" / "App"
        nested.mkdir(parents=True)
        (nested / "Model.hs").write_text("", encoding="utf-8")

        assert find_manifest(nested) == path.resolve()
        assert find_manifest(nested / "Model.hs") == path.resolve()
