"""
Tests for the command line entry point
"""
import io
import json

import pytest

from cardguard.cli import main


@pytest.fixture
def write_json(tmp_path):
    def _write(data, name="card.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)
    return _write


class TestValidateCommand:
    """Test cases for 'cardguard validate'"""

    def test_all_valid(self, write_json, capsys):
        path = write_json({"question": "Capital of Peru?", "answer": "Lima", "description": ""})

        assert main(["validate", path]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["valid"] is True
        assert output["fields"]["answer"] == {"is_valid": True, "sanitized": "Lima"}
        assert output["fields"]["description"] == {"is_valid": True, "sanitized": ""}
        assert output["security"]["total_events"] == 0

    def test_invalid_field(self, write_json, capsys):
        path = write_json({"title": "<script>x</script>", "nickname": "ignored"})

        assert main(["validate", path, "--user-id", "u1"]) == 1

        output = json.loads(capsys.readouterr().out)
        assert output["valid"] is False
        assert output["fields"] == {
            "title": {"is_valid": False, "error": "Title contains potentially dangerous content"}
        }
        assert output["security"]["counts"]["validation_failure"] == 1
        assert output["security"]["recent"][0]["user_id"] == "u1"

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps({"title": "Algebra"})))

        assert main(["validate", "-"]) == 0
        assert json.loads(capsys.readouterr().out)["fields"]["title"]["sanitized"] == "Algebra"

    def test_config_limits_apply(self, write_json, capsys):
        config = write_json({"security": {"field_limits": {"title": 3}}}, name="config.json")
        path = write_json({"title": "Algebra"})

        assert main(["validate", path, "--config", config]) == 1
        output = json.loads(capsys.readouterr().out)
        assert output["fields"]["title"]["error"] == "Title must be 3 characters or less"

    def test_bad_input_returns_error_code(self, write_json, tmp_path):
        assert main(["validate", write_json(["not", "an", "object"])]) == 2
        assert main(["validate", write_json({"title": 5})]) == 2
        assert main(["validate", str(tmp_path / "missing.json")]) == 2

    def test_bad_config_returns_error_code(self, write_json):
        config = write_json({"security": {"unknown": 1}}, name="config.json")

        assert main(["validate", write_json({"title": "x"}), "--config", config]) == 2


class TestDecodeCommand:
    """Test cases for 'cardguard decode'"""

    def test_decode(self, capsys):
        assert main(["decode", "Tom &amp; Jerry &lt;3"]) == 0
        assert capsys.readouterr().out == "Tom & Jerry <3\n"
