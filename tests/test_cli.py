"""Tests for the command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from hlextract import __version__
from hlextract.cli import build_parser, main


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A Scala project, used as the working directory."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "build.sbt").write_text("")
    (tmp_path / "README.md").write_text("```scala\nval a = 1\n```\n")
    return tmp_path


class TestMain:
    def test_prints_generated_paths(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out = project / "gen"
        assert main([str(project), "-o", str(out)]) == 0
        printed = capsys.readouterr().out.splitlines()
        assert printed == [str(out / "README-md-1-0.scala"), str(out / "package0.scala")]
        assert (out / "package0.scala").is_file()

    def test_logs_progress_to_stderr(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main([str(project), "-o", str(project / "gen")])
        assert "Processing" in capsys.readouterr().err

    def test_quiet(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main([str(project), "-o", str(project / "gen"), "-q"])
        assert capsys.readouterr().err == ""

    def test_verbose(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main([str(project), "-o", str(project / "gen"), "-v"])
        assert "Generating the sample #0" in capsys.readouterr().err

    def test_custom_tokens(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "notes.txt").write_text("~~~scala\nval a = 1\n~~~\n")
        code = main([
            str(tmp_path),
            "-o",
            str(tmp_path / "gen"),
            "--start-token",
            "~~~scala",
            "--end-token",
            "~~~",
            "--include",
            "*.txt",
            "--force",
        ])
        assert code == 0
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_non_scala_project_skipped(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "README.md").write_text("```scala\nval a = 1\n```\n")
        assert main([str(tmp_path), "-o", str(tmp_path / "gen")]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Skip highlight extraction" in captured.err

    def test_docs_subdirectory_of_project(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        docs = project / "docs"
        docs.mkdir()
        (docs / "index.md").write_text("```scala\nval b = 2\n```\n")

        assert main(["docs", "-o", "target/hlextract"]) == 0

        printed = capsys.readouterr().out.splitlines()
        expected = Path("target") / "hlextract"
        assert printed == [str(expected / "index-md-1-0.scala"), str(expected / "package0.scala")]
        assert (project / "target" / "hlextract" / "package0.scala").is_file()
        assert not (docs / "target").exists()

    def test_project_dir_option(
        self, project: Path, tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path_factory.mktemp("elsewhere"))
        assert main([str(project), "--project-dir", str(project), "-o", "gen"]) == 0
        assert (project / "gen" / "README-md-1-0.scala").is_file()

    def test_project_dir_not_scala(
        self, project: Path, tmp_path_factory: pytest.TempPathFactory, capsys: pytest.CaptureFixture[str]
    ) -> None:
        other = tmp_path_factory.mktemp("plain")
        assert main([str(project), "--project-dir", str(other), "-o", "gen"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert f"non-Scala project: {other}" in captured.err

    def test_force(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "README.md").write_text("```scala\nval a = 1\n```\n")
        assert main([str(tmp_path), "-o", str(tmp_path / "gen"), "--force"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_disabled_by_activation(
        self, project: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("HL_CHECK_DOCS", raising=False)
        code = main([str(project), "-o", str(project / "gen"), "--activation", "enabled-by-env:HL_CHECK_DOCS"])
        assert code == 0
        assert capsys.readouterr().out == ""
        assert not (project / "gen").exists()

    def test_invalid_activation(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(project), "--activation", "sometimes"])
        assert exc_info.value.code == 2
        assert "Invalid activation" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "missing"), "--force"]) == 1
        assert "hlextract: Could not read document" in capsys.readouterr().err

    def test_unwritable_output(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        blocker = project / "blocker"
        blocker.write_text("")
        assert main([str(project), "-o", str(blocker / "gen")]) == 1
        assert "Could not write generated file" in capsys.readouterr().err


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.directory is None
        assert args.activation == "default"
        assert args.include is None
        assert not args.force

    def test_repeatable_globs(self) -> None:
        args = build_parser().parse_args(["--include", "*.md", "--include", "*.txt", "--exclude", "target"])
        assert args.include == ["*.md", "*.txt"]
        assert args.exclude == ["target"]

    def test_verbose_and_quiet_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-v", "-q"])

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out
