"""Tests for the CLI module."""

import io

import pytest

from request_importer.cli import build_parser, parse_cli, read_input, validate_args


class TestBuildParser:
    """Tests for the argument parser construction."""

    def test_defaults(self):
        parser = build_parser()
        args = parser.parse_args([])
        assert args.input == "-"
        assert args.output_format == "summary"
        assert args.token is None

    def test_input_file_argument(self):
        parser = build_parser()
        args = parser.parse_args(["snippet.txt"])
        assert args.input == "snippet.txt"

    def test_format_argument(self):
        parser = build_parser()
        args = parser.parse_args(["--format", "json"])
        assert args.output_format == "json"

    def test_unknown_format_rejected(self):
        parser = build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--format", "xml"])

    def test_token_argument(self):
        parser = build_parser()
        args = parser.parse_args(["--token", "abc"])
        assert args.token == "abc"

    def test_version_flag(self, capsys):
        parser = build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["--version"])
        assert "request-importer" in capsys.readouterr().out


class TestValidateArgs:
    """Tests for argument validation."""

    def test_nonexistent_file_exits(self):
        parser = build_parser()
        args = parser.parse_args(["/nonexistent/file.txt"])
        with pytest.raises(SystemExit):
            validate_args(args)

    def test_valid_file_passes(self, tmp_path):
        f = tmp_path / "snippet.txt"
        f.write_text("curl https://x.test")
        parser = build_parser()
        args = parser.parse_args([str(f)])
        # Should not raise
        validate_args(args)

    def test_stdin_passes(self):
        parser = build_parser()
        args = parser.parse_args(["-"])
        validate_args(args)

    def test_empty_token_exits(self, capsys):
        parser = build_parser()
        args = parser.parse_args(["--token", "   "])
        with pytest.raises(SystemExit):
            validate_args(args)
        assert "Token cannot be empty" in capsys.readouterr().err


class TestParseCli:
    """Tests for the full parse_cli flow."""

    def test_full_parse_flow(self, tmp_path):
        f = tmp_path / "snippet.txt"
        f.write_text("curl https://x.test")
        args = parse_cli([str(f), "--format", "curl", "--token", "t"])
        assert args.input == str(f)
        assert args.output_format == "curl"
        assert args.token == "t"


class TestReadInput:
    """Tests for read_input function."""

    def test_reads_file(self, tmp_path):
        f = tmp_path / "snippet.txt"
        f.write_text("fetch('https://x.test')", encoding="utf-8")
        assert read_input(str(f)) == "fetch('https://x.test')"

    def test_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("curl https://x.test"))
        assert read_input("-") == "curl https://x.test"

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            read_input("/nonexistent/path/file.txt")
