"""Tests for Config loading."""

import pytest
from pydantic import ValidationError

from examcell.config import Config, WorkflowConfig


class TestConfig:
    def test_default_exam_types(self):
        assert WorkflowConfig().exam_types == ["IA1", "IA2", "IA3", "SEE"]

    def test_empty_exam_types_rejected(self):
        with pytest.raises(ValidationError):
            WorkflowConfig(exam_types=[" "])

    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("EXAMCELL_DATABASE__URL", "postgresql+asyncpg://u:p@db/exams")
        monkeypatch.setenv("EXAMCELL_AUTH__JWT__AUDIENCE", "examcell")

        config = Config()
        assert config.database.url == "postgresql+asyncpg://u:p@db/exams"
        assert config.auth.jwt.audience == "examcell"

    def test_yaml_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / "examcell.yaml"
        config_file.write_text("workflow:\n  exam_types: [CAT1, CAT2, ESE]\n")
        monkeypatch.setenv("EXAMCELL_CONFIG_FILE", str(config_file))

        assert Config().workflow.exam_types == ["CAT1", "CAT2", "ESE"]

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        config_file = tmp_path / "examcell.yaml"
        config_file.write_text("server:\n  port: 9000\n")
        monkeypatch.setenv("EXAMCELL_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("EXAMCELL_SERVER__PORT", "9100")

        assert Config().server.port == 9100
