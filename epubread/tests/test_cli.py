from click.testing import CliRunner

from epubread.cli import cli

from .helpers import sample_files


def test_info(sample_epub):
    result = CliRunner().invoke(cli, ["info", str(sample_epub)])
    assert result.exit_code == 0, result.output
    assert "Title:         Sample Book" in result.output
    assert "Jane Doe, John Roe" in result.output
    assert "Reading order: 3" in result.output
    assert "4 html" in result.output


def test_toc(sample_epub):
    result = CliRunner().invoke(cli, ["--workers", "2", "toc", str(sample_epub)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "[toc] Contents"
    assert "  - Chapter 1  [Text/ch1.xhtml]" in lines
    assert "    - Section 1.2" in lines
    assert "[landmarks] Guide" in lines


def test_files(sample_epub):
    result = CliRunner().invoke(cli, ["files", str(sample_epub)])
    assert result.exit_code == 0, result.output
    assert "OEBPS/Images/cover.png\timage/png\timage/png" in result.output


def test_error_is_reported(make_epub):
    files = sample_files()
    del files["META-INF/container.xml"]
    result = CliRunner().invoke(cli, ["info", str(make_epub(files))])
    assert result.exit_code == 1
    assert "container.xml" in result.output


def test_unknown_encoding(sample_epub):
    result = CliRunner().invoke(cli, ["--encoding", "no-such-codec", "info", str(sample_epub)])
    assert result.exit_code == 2
    assert "unknown text encoding" in result.output
    assert not isinstance(result.exception, LookupError)
