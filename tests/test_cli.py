from typer.testing import CliRunner

from stdiolink.cli.main import app

runner = CliRunner()


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "serve" in result.output
    assert "echo" in result.output


def test_invalid_config_fails(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"transport": {"retry_delay": 0}}', encoding="utf-8")
    result = runner.invoke(app, ["echo", "--config", str(path)])
    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)
