"""Tests for reading model files from disk."""

import logging

import pytest

from persist_models.core.errors import ParseError
from persist_models.core.loader import (
    collect_model_files,
    load_models_file,
    parse_model_files,
)
from persist_models.core.manifest import FilesConfig, ModelsManifest, ParserConfig


class TestLoadModelsFile:
    def test_models_file(self, models_dir):
        result = load_models_file(models_dir / "config" / "models")
        assert result.embedded is False
        assert [e.name for e in result.models.entities] == ["User", "Email", "Post"]

    def test_haskell_file_is_embedded_by_suffix(self, models_dir):
        result = load_models_file(models_dir / "src" / "Model.hs")
        assert result.embedded is True
        assert len(result.models.entities) == 3

    def test_forced_full_mode_reads_nothing_from_host_source(self, models_dir):
        result = load_models_file(models_dir / "src" / "Model.hs", embedded=False)
        assert result.embedded is False
        assert result.models.items == []

    def test_manifest_markers(self, tmp_path):
        path = tmp_path / "Schema.hs"
        path.write_text("x = [models|\nPerson\n  name Text\n|]\n", encoding="utf-8")
        manifest = ModelsManifest(root=tmp_path, parser=ParserConfig(open_markers=["[models|"]))

        result = load_models_file(path, manifest)
        assert result.models.entities[0].name == "Person"

    def test_error_names_file_and_is_logged(self, tmp_path, caplog):
        path = tmp_path / "models"
        path.write_text("Person\n  name Text maxlen=abc\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="persist_models.core.loader"):
            with pytest.raises(ParseError) as exc_info:
                load_models_file(path)

        assert exc_info.value.context.file == path
        assert str(exc_info.value).startswith(f"{path}:2:20")
        assert "Failed to parse" in caplog.text


class TestCollectModelFiles:
    def test_expands_directories(self, models_dir):
        (models_dir / "README.md").write_text("# docs\n", encoding="utf-8")

        files = collect_model_files([models_dir])

        assert files == [models_dir / "config" / "models", models_dir / "src" / "Model.hs"]

    def test_skips_hidden_and_unrelated_files(self, models_dir):
        (models_dir / ".gitignore").write_text("*.pyc\n", encoding="utf-8")
        (models_dir / "LICENSE").write_text("MIT\n", encoding="utf-8")
        (models_dir / "Makefile").write_text("all:\n", encoding="utf-8")
        git_dir = models_dir / ".git"
        git_dir.mkdir()
        (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
        (git_dir / "models").write_text("Stale\n", encoding="utf-8")
        (models_dir / ".stack-work").mkdir()
        (models_dir / ".stack-work" / "Model.hs").write_text("", encoding="utf-8")

        files = collect_model_files([models_dir])

        assert files == [models_dir / "config" / "models", models_dir / "src" / "Model.hs"]

    def test_model_names_and_suffix(self, tmp_path):
        (tmp_path / "schema").write_text("Person\n", encoding="utf-8")
        (tmp_path / "billing.persistentmodels").write_text("Invoice\n", encoding="utf-8")
        (tmp_path / "models").write_text("Car\n", encoding="utf-8")
        manifest = ModelsManifest(root=tmp_path, files=FilesConfig(model_names=["schema"]))

        files = collect_model_files([tmp_path], manifest)

        assert files == [tmp_path / "billing.persistentmodels", tmp_path / "schema"]

    def test_embedded_suffixes_from_manifest(self, models_dir):
        manifest = ModelsManifest(root=models_dir, files=FilesConfig(embedded_suffixes=[]))
        assert collect_model_files([models_dir], manifest) == [models_dir / "config" / "models"]

    def test_explicit_files_kept(self, models_dir):
        path = models_dir / "README.md"
        assert collect_model_files([path]) == [path]


class TestParseModelFiles:
    def test_parses_in_order(self, models_dir):
        results = parse_model_files([models_dir / "src", models_dir / "config"])
        assert [r.file.name for r in results] == ["Model.hs", "models"]
        assert [r.embedded for r in results] == [True, False]
