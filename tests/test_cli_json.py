import json

from typer.testing import CliRunner

from selectorkit.main import app

runner = CliRunner()


def test_resolve_json_output(local_case_name):
    result = runner.invoke(app, ["resolve", local_case_name, f"{local_case_name}#test4(str)"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [item["resolved"] for item in payload] == [True, True]
    assert payload[1]["target"] == f"{local_case_name}#test4(str)"


def test_resolve_reports_failures(local_case_name):
    result = runner.invoke(app, ["resolve", f"{local_case_name}#test4", "pkg.Case#m(", local_case_name])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload[0]["error_type"] == "AmbiguousSymbol"
    assert payload[1]["kind"] == "invalid"
    assert payload[1]["error_type"] == "MalformedSelector"
    assert payload[2]["resolved"] is True


def test_classify_json_output(local_case_name):
    result = runner.invoke(app, ["classify", local_case_name, f"{local_case_name}#test1", "a.b.pkg"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [item["kind"] for item in payload] == ["class", "method", "package"]


def test_human_mode_table(local_case_name):
    result = runner.invoke(app, ["--human", "resolve", local_case_name])
    assert result.exit_code == 0
    assert "Selector resolution" in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.startswith("selectorkit v")
