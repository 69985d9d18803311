"""
tests/test_cli.py
=================
The `singlehtml` command line.
"""

from pathlib import Path

from typer.testing import CliRunner

from singlehtml import __version__
from singlehtml.cli import app

runner = CliRunner()


def deny_reading(name, monkeypatch):
    """Makes every Path.open of a file called `name` fail with EACCES."""
    real_open = Path.open

    def guarded_open(self, *args, **kwargs):
        if self.name == name:
            raise PermissionError(13, "Permission denied", str(self))
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", guarded_open)


class TestExportCommand:

    def test_export_positional_arguments(self, report_dir, tmp_path):
        out = tmp_path / "nested" / "dir" / "Report.html"
        result = runner.invoke(app, ["export", str(report_dir), str(out)])
        assert result.exit_code == 0, result.output
        assert out.is_file()
        assert "Single-file report ready" in result.output
        assert "Embedded 7 data files, inlined 3 assets." in result.output

    def test_default_paths(self, report_dir, monkeypatch):
        monkeypatch.chdir(report_dir.parent)
        result = runner.invoke(app, ["export"])
        assert result.exit_code == 0, result.output
        assert (report_dir.parent / "AllureReport.html").is_file()

    def test_missing_entry_document_exits_non_zero(self, tmp_path):
        (tmp_path / "allure-report").mkdir()
        out = tmp_path / "AllureReport.html"
        result = runner.invoke(app, ["export", str(tmp_path / "allure-report"), str(out)])
        assert result.exit_code == 1
        assert not out.exists()

    def test_unreadable_file_reported_as_error(self, report_dir, tmp_path, monkeypatch):
        deny_reading("suites.json", monkeypatch)
        out = tmp_path / "o.html"
        result = runner.invoke(app, ["export", str(report_dir), str(out)])
        assert result.exit_code == 1
        assert "Error: Could not read" in result.output
        assert "suites.json" in result.output
        assert not isinstance(result.exception, PermissionError)
        assert not out.exists()

    def test_verbose(self, report_dir, tmp_path):
        result = runner.invoke(app, ["export", str(report_dir), str(tmp_path / "o.html"), "--verbose"])
        assert result.exit_code == 0, result.output


class TestBareInvocation:

    def test_exports_default_paths(self, report_dir, monkeypatch):
        monkeypatch.chdir(report_dir.parent)
        result = runner.invoke(app, [])
        assert result.exit_code == 0, result.output
        assert "Single-file report ready" in result.output
        assert (report_dir.parent / "AllureReport.html").is_file()

    def test_missing_default_report_exits_non_zero(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [])
        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not (tmp_path / "AllureReport.html").exists()


class TestVersionCommand:

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"singlehtml {__version__}" in result.output


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "export" in result.output
