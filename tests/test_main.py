"""Tests for the command-line entry point."""

from cs_inspector.src.cs_inspector.config import JSON_ENV, PROJECT_PATH_ENV
from cs_inspector.src.cs_inspector.main import main


class TestMain:
    def test_scans_project(self, tmp_path, monkeypatch, capsys):
        monkeypatch.delenv(JSON_ENV, raising=False)
        (tmp_path / "obj").mkdir()
        (tmp_path / "obj" / "Gen.cs").write_text("class Gen { }")
        (tmp_path / "HealthCheckController.cs").write_text(
            "public class HealthCheckController { public bool CheckDb() { return db.Ping(); } }"
        )

        assert main([str(tmp_path)]) == 0

        out = capsys.readouterr().out
        assert "O diretório contém 1 arquivos" in out
        assert "Estrutura do projeto:" in out
        assert "|-- Classe: HealthCheckController" in out
        assert "Chama método: db.Ping()" in out
        assert "Gen.cs" not in out
        assert "=== JSON ===" not in out

    def test_json_output(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setenv(JSON_ENV, "1")
        (tmp_path / "A.cs").write_text("class A { }")
        assert main([str(tmp_path)]) == 0
        assert "=== JSON ===" in capsys.readouterr().out

    def test_missing_configuration(self, monkeypatch, capsys):
        monkeypatch.delenv(PROJECT_PATH_ENV, raising=False)
        assert main([]) == 1
        captured = capsys.readouterr()
        assert captured.err.startswith("Erro:")
        assert captured.out == ""

    def test_missing_directory(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing")]) == 1
        assert "não existe" in capsys.readouterr().err
