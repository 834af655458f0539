"""
Tests for the petra-designer command line.
"""
import json

import pytest
import yaml

from petra_designer.cli.cli_interface import main
from petra_designer.features.connections.domain.connection import Edge
from petra_designer.features.documents.domain.document import Document
from petra_designer.features.documents.infrastructure.document_io import load_document, save_document


@pytest.fixture
def design_file(tmp_path, make_signal, make_block):
    document = Document(
        [make_signal("s1", "Tank Level"), make_signal("s2", "Sum"), make_block("b1", label="Adder")],
        [Edge("e1", "s1", "b1", None, "a"), Edge("e2", "b1", "s2", "out", None)],
    )
    return save_document(document, tmp_path / "design.json")


class TestGenerate:

    def test_to_stdout(self, design_file, capsys):
        assert main(["generate", str(design_file)]) == 0
        config = yaml.safe_load(capsys.readouterr().out)
        assert [s["name"] for s in config["signals"]] == ["tank_level", "sum"]
        assert config["blocks"][0]["outputs"] == {"out": "sum"}

    def test_to_file_with_settings(self, design_file, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"scan_time_ms": 25}), encoding="utf-8")
        output = tmp_path / "out" / "petra.yaml"
        assert main(["--settings", str(settings), "generate", str(design_file), "-o", str(output)]) == 0
        assert yaml.safe_load(output.read_text(encoding="utf-8"))["scan_time_ms"] == 25

    def test_duplicate_names_fail(self, tmp_path, make_signal):
        path = save_document(Document([make_signal("a", "X"), make_signal("b", "x")]), tmp_path / "d.json")
        assert main(["generate", str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main(["generate", str(tmp_path / "missing.json")]) == 1


class TestParse:

    def test_writes_document(self, tmp_path):
        config = tmp_path / "petra.yaml"
        config.write_text("signals:\n  - name: x\n    type: bool\nblocks: []\n", encoding="utf-8")
        output = tmp_path / "design.json"
        assert main(["parse", str(config), "-o", str(output)]) == 0
        document = load_document(output)
        assert [n.id for n in document.nodes] == ["signal_0"]

    def test_malformed_config(self, tmp_path):
        config = tmp_path / "petra.yaml"
        config.write_text("signals: [\n", encoding="utf-8")
        assert main(["parse", str(config)]) == 1


class TestCheck:

    def test_valid_document(self, design_file, capsys):
        assert main(["check", str(design_file)]) == 0
        assert capsys.readouterr().out.strip().endswith(": OK")

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / "petra.yaml"
        config.write_text("signals: []\n", encoding="utf-8")
        assert main(["check", str(config)]) == 1
        out = capsys.readouterr().out
        assert "Missing 'blocks' section" in out
        assert "scan_time_ms is required" in out

    @pytest.mark.parametrize("command", ["check", "parse"])
    def test_binary_file(self, tmp_path, command):
        config = tmp_path / "petra.yaml"
        config.write_bytes(b"\xff\xfe\x00\x81")
        assert main([command, str(config)]) == 1

    def test_requires_subcommand(self):
        with pytest.raises(SystemExit):
            main([])
