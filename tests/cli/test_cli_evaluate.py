"""CLI tests for the evaluate and validate commands."""

import json

from screener_engine.cli import app


class TestEvaluateCommand:
    """screener evaluate DEFINITION ANSWERS."""

    def test_json_output(self, runner, write_json, statin_screener_json, complete_statin_answers):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", complete_statin_answers)

        result = runner.invoke(app, ["--json", "evaluate", str(definition), str(answers)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["result"] == {
            "outcome": "ok_to_use",
            "matchedRule": {"condition": "ldl >= 130 && liver != 'past'"},
        }
        assert payload["final"] is True
        assert payload["summary"].startswith("Based on your answers, this medication may be")

    def test_incomplete_answers(self, runner, write_json, statin_screener_json):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", {"answers": {"pregnant": "no", "ldl": "abc"}})

        result = runner.invoke(app, ["--json", "evaluate", str(definition), str(answers)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["result"] == {
            "outcome": "ask_a_doctor",
            "missingRequired": ["age", "liver"],
            "validationErrors": {"ldl": "Must be a valid number"},
        }
        assert payload["final"] is False
        assert payload["summary"] == "Please complete all required questions correctly."

    def test_human_output(self, runner, write_json, statin_screener_json, complete_statin_answers):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", {**complete_statin_answers, "pregnant": "yes"})

        result = runner.invoke(app, ["evaluate", str(definition), str(answers)])

        assert result.exit_code == 0
        assert "Outcome: do_not_use" in result.output
        assert "Statins must not be used during pregnancy." in result.output

    def test_human_output_incomplete(self, runner, write_json, statin_screener_json):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", {"pregnant": "no", "age": 40, "ldl": "abc"})

        result = runner.invoke(app, ["evaluate", str(definition), str(answers)])

        assert result.exit_code == 0
        assert "Outcome undetermined (answers incomplete): ask_a_doctor" in result.output
        assert "Missing: liver" in result.output
        assert "Invalid: ldl: Must be a valid number" in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("screener-engine ")

    def test_yaml_definition(self, runner, write_yaml, write_json, yes_no_definition):
        definition = write_yaml("screener.yaml", yes_no_definition.to_dict())
        answers = write_json("answers.json", {"q1": "no"})

        result = runner.invoke(app, ["--json", "evaluate", str(definition), str(answers)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["result"] == {"outcome": "ok_to_use"}

    def test_missing_definition_file(self, runner, write_json):
        answers = write_json("answers.json", {})

        result = runner.invoke(app, ["evaluate", "missing.json", str(answers)])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_definition(self, runner, write_json):
        definition = write_json("screener.json", {"title": "No logic"})
        answers = write_json("answers.json", {})

        result = runner.invoke(app, ["evaluate", str(definition), str(answers)])

        assert result.exit_code == 1
        assert "Invalid screener definition" in result.output


class TestValidateCommand:
    """screener validate DEFINITION ANSWERS."""

    def test_valid_answers(self, runner, write_json, statin_screener_json, complete_statin_answers):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", complete_statin_answers)

        result = runner.invoke(app, ["--json", "validate", str(definition), str(answers)])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"valid": True}

    def test_invalid_answers_exit_non_zero(self, runner, write_json, statin_screener_json):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", {"pregnant": "no", "age": 12, "ldl": 100})

        result = runner.invoke(app, ["--json", "validate", str(definition), str(answers)])

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {
            "valid": False,
            "missingRequired": ["liver"],
            "validationErrors": {"age": "Must be at least 18"},
        }

    def test_human_output(self, runner, write_json, statin_screener_json):
        definition = write_json("screener.json", statin_screener_json)
        answers = write_json("answers.json", {})

        result = runner.invoke(app, ["validate", str(definition), str(answers)])

        assert result.exit_code == 1
        assert "Missing: pregnant" in result.output
