"""Tests for the persist-models command line."""

import json

from typer.testing import CliRunner

from persist_models.cli import app

runner = CliRunner()


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "persist-models" in result.output


class TestParseCommand:
    def test_summary_table(self, models_dir):
        result = runner.invoke(app, ["parse", str(models_dir / "config" / "models")])
        assert result.exit_code == 0
        for name in ("User", "Email", "Post"):
            assert name in result.output

    def test_json_output(self, models_dir):
        result = runner.invoke(
            app, ["parse", "--json", str(models_dir / "config" / "models")]
        )
        assert result.exit_code == 0

        payload = json.loads(result.stdout)
        assert len(payload) == 1
        assert payload[0]["embedded"] is False
        items = payload[0]["models"]["items"]
        assert [item["kind"] for item in items] == ["comment", "entity", "entity", "entity"]
        assert items[1]["children"][0] == {
            "kind": "field",
            "name": "ident",
            "type": {
                "type_name": "Text",
                "strictness": "strict",
                "is_list": False,
                "is_maybe": False,
            },
            "migration_only": False,
            "safe_to_remove": False,
            "default_value": None,
            "sql_row": None,
            "sql_type": None,
            "max_len": None,
        }

    def test_directory_with_embedded_source(self, models_dir):
        result = runner.invoke(app, ["parse", "--json", str(models_dir / "src")])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["embedded"] is True

    def test_parse_error_exits_1(self, tmp_path):
        path = tmp_path / "models"
        path.write_text("Person\n  age Int maxlen=old\n", encoding="utf-8")

        result = runner.invoke(app, ["parse", str(path)])
        assert result.exit_code == 1
        assert "Parse error" in result.output

    def test_no_files_and_no_manifest(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["parse"])
        assert result.exit_code == 1

    def test_unreadable_manifest(self, tmp_path):
        result = runner.invoke(app, ["parse", "--manifest", str(tmp_path / "missing.toml")])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCheckCommand:
    def test_all_ok(self, models_dir):
        result = runner.invoke(
            app, ["check", str(models_dir / "config" / "models"), str(models_dir / "src")]
        )
        assert result.exit_code == 0
        assert result.output.count("OK") == 2

    def test_failure_exits_1(self, models_dir):
        bad = models_dir / "broken"
        bad.write_text("Person\n  name Text maxlen=abc\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(models_dir / "config" / "models"), str(bad)])
        assert result.exit_code == 1
        assert "OK" in result.output
        assert "FAIL" in result.output

    def test_paths_from_manifest(self, models_dir):
        manifest = models_dir / "persist_models.toml"
        manifest.write_text('[files]\npaths = ["config/models", "src"]\n', encoding="utf-8")

        result = runner.invoke(app, ["check", "--manifest", str(manifest)])
        assert result.exit_code == 0
        assert result.output.count("OK") == 2
