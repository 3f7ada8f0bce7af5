import json
from pathlib import Path

from click.testing import CliRunner

from thrift_to_graphql import __version__
from thrift_to_graphql.cli_utils import reconstruct_command_line
from thrift_to_graphql.thrift_to_graphql import thrift_to_graphql

TEST_DATA = Path(__file__).parent / "test_data"


def test_reconstruct_command_line_without_context():
    # No active Click context outside of an invocation
    assert reconstruct_command_line(thrift_to_graphql) == "thrift_to_graphql"


def test_writes_sdl_file(tmp_path):
    output = tmp_path / "schema.graphql"
    result = CliRunner().invoke(thrift_to_graphql, [str(TEST_DATA / "service.thrift"), str(output)])
    assert result.exit_code == 0, result.output

    sdl = output.read_text()
    assert sdl.startswith(f"# Generated by thrift_to_graphql v{__version__} : thrift_to_graphql service.thrift ")
    assert "type Query" in sdl
    assert "Calculator_calculate(work: CalcInput): Int" in sdl
    assert '  """Apply an operation"""\n  Calculator_calculate' in sdl
    assert "Calculator_ping: Boolean" in sdl
    assert "enum Op" in sdl


def test_stdout_and_flags():
    result = CliRunner().invoke(thrift_to_graphql, ["--convert-enum-to-int", str(TEST_DATA / "service.thrift"), "-"])
    assert result.exit_code == 0, result.output
    assert "--convert-enum-to-int" in result.output.splitlines()[0]
    assert "enum Op" not in result.output
    assert "op: Int" in result.output


def test_config_file(tmp_path):
    config = tmp_path / "gateway.json"
    config.write_text(
        json.dumps(
            {
                "add_generation_comment": False,
                "services": {"calculator": {"file": "service.thrift", "methods": ["echo"]}},
            }
        )
    )
    result = CliRunner().invoke(thrift_to_graphql, ["--config", str(config), str(TEST_DATA), "-"])
    assert result.exit_code == 0, result.output
    assert not result.output.startswith("#")
    assert "Calculator_echo" in result.output
    assert "Calculator_calculate" not in result.output


def test_config_file_all_methods(tmp_path):
    config = tmp_path / "gateway.json"
    config.write_text(json.dumps({"services": {"calculator": {"file": "service.thrift", "methods": ["echo"]}}}))
    result = CliRunner().invoke(thrift_to_graphql, ["--config", str(config), "--all-methods", str(TEST_DATA / "service.thrift"), "-"])
    assert result.exit_code == 0, result.output
    assert "Calculator_calculate" in result.output


def test_parse_error_exit_code():
    result = CliRunner().invoke(thrift_to_graphql, [str(TEST_DATA / "bad.thrift"), "-"])
    assert result.exit_code != 0
    assert "bad.thrift" in str(result.exception)
