"""
Tests for the configuration text checker.
"""
from petra_designer.features.config.application.config_checker import validate_config_text


VALID = """\
signals:
  - name: x
    type: bool
blocks:
  - name: inv
    type: NOT
    inputs:
      in: x
scan_time_ms: 100
"""


class TestValidateConfigText:

    def test_valid(self):
        assert validate_config_text(VALID).valid

    def test_missing_sections(self):
        result = validate_config_text("scan_time_ms: 100\n")
        assert result.errors == ["Missing 'signals' section", "Missing 'blocks' section"]

    def test_collects_every_problem(self):
        text = (
            "signals:\n"
            "  - name: x\n"
            "    type: string\n"
            "  - type: bool\n"
            "blocks:\n"
            "  - name: b\n"
            "    inputs: [x]\n"
            "scan_time_ms: 0\n"
        )
        errors = validate_config_text(text).errors
        assert any(e.startswith("signals[0].type") for e in errors)
        assert "signals[1].name is required" in errors
        assert "blocks[0].type is required" in errors
        assert "blocks[0].inputs must be a mapping" in errors
        assert "scan_time_ms must be at least 1" in errors

    def test_scan_time_required(self):
        result = validate_config_text("signals: []\nblocks: []\n")
        assert result.errors == ["scan_time_ms is required"]

    def test_malformed_yaml(self):
        result = validate_config_text("signals: [\n")
        assert not result.valid
        assert result.error.startswith("Malformed YAML")

    def test_not_a_mapping(self):
        assert validate_config_text("- 1\n- 2\n").error == \
            "Configuration must be a mapping at the top level"
