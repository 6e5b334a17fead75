"""Tests for the lexis command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lexis_core import DictionaryLoadError, DictionaryPatternError

from lexis.__main__ import app
from lexis.cli import CLIError
from lexis.cli.errors import describe_error
from lexis.pipeline import PipelineParseError

runner = CliRunner()


@pytest.fixture
def pipeline_file(tmp_path: Path) -> Path:
    """Pipeline with one file-backed and one inline translate filter."""
    (tmp_path / "codes.yml").write_text(
        '"200": OK\n"404": Not Found\n"500":\n  text: Server Error\n  retry: true\n',
        encoding="utf-8",
    )
    pipeline = tmp_path / "pipeline.yaml"
    pipeline.write_text(
        """
name: statuses
config:
  workers: 2
filters:
  - name: status_text
    type: translate
    properties:
      source: "[http][status]"
      target: "[http][status_text]"
      dictionary_path: codes.yml
      refresh_interval: 60
      fallback: "unknown"
      add_tag: [status_translated]
  - name: method
    type: translate
    properties:
      source: method
      dictionary:
        GET: read
        POST: write
""",
        encoding="utf-8",
    )
    return pipeline


class TestRunCommand:
    """Tests for 'lexis run'."""

    def test_run_translates_input_file(self, tmp_path: Path, pipeline_file: Path) -> None:
        """Records from --input are translated into --output in order."""
        input_file = tmp_path / "events.jsonl"
        input_file.write_text(
            "\n".join(
                [
                    '{"http": {"status": "200"}, "method": "GET"}',
                    '{"http": {"status": "418"}}',
                    '{"http": {"status": "500"}, "method": "DELETE"}',
                ]
            ),
            encoding="utf-8",
        )
        output_file = tmp_path / "out" / "translated.jsonl"

        result = runner.invoke(
            app,
            [
                "run",
                str(pipeline_file),
                "--input",
                str(input_file),
                "--output",
                str(output_file),
                "--workers",
                "3",
            ],
        )

        assert result.exit_code == 0, result.output
        records = [
            json.loads(line) for line in output_file.read_text().splitlines()
        ]
        assert records == [
            {
                "http": {"status": "200", "status_text": "OK"},
                "method": "GET",
                "translation": "read",
                "tags": ["status_translated"],
            },
            {
                "http": {"status": "418", "status_text": "unknown"},
                "tags": ["status_translated"],
            },
            {
                "http": {
                    "status": "500",
                    "status_text": {"text": "Server Error", "retry": True},
                },
                "method": "DELETE",
                "tags": ["status_translated"],
            },
        ]

    def test_run_reads_stdin(self, tmp_path: Path, pipeline_file: Path) -> None:
        """Without --input, records are read from stdin."""
        output_file = tmp_path / "translated.jsonl"

        result = runner.invoke(
            app,
            ["run", str(pipeline_file), "--output", str(output_file)],
            input='{"method": "POST"}\n',
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output_file.read_text()) == {
            "method": "POST",
            "translation": "write",
        }

    def test_run_writes_date_like_translations(self, tmp_path: Path) -> None:
        """Unquoted dates in a YAML dictionary are written out as strings."""
        (tmp_path / "releases.yml").write_text(
            "v1: 2020-01-01\nv2: 2021-06-30 12:00:00\n", encoding="utf-8"
        )
        pipeline = tmp_path / "pipeline.yaml"
        pipeline.write_text(
            "name: releases\nfilters:\n  - name: released\n    type: translate\n"
            "    properties:\n      source: version\n"
            "      dictionary_path: releases.yml\n",
            encoding="utf-8",
        )
        output_file = tmp_path / "out.jsonl"

        result = runner.invoke(
            app,
            ["run", str(pipeline), "--output", str(output_file)],
            input='{"version": "v1"}\n{"version": "v2"}\n',
        )

        assert result.exit_code == 0, result.output
        records = [json.loads(line) for line in output_file.read_text().splitlines()]
        assert records == [
            {"version": "v1", "translation": "2020-01-01"},
            {"version": "v2", "translation": "2021-06-30 12:00:00"},
        ]

    def test_run_with_invalid_pipeline_fails(self, tmp_path: Path) -> None:
        """Pipeline errors exit with status 1."""
        pipeline = tmp_path / "bad.yaml"
        pipeline.write_text("name: bad\nfilters: []\n", encoding="utf-8")

        result = runner.invoke(app, ["run", str(pipeline)], input="")

        assert result.exit_code == 1

    def test_run_with_broken_dictionary_fails(self, tmp_path: Path) -> None:
        """A dictionary that cannot be loaded aborts the run."""
        (tmp_path / "codes.json").write_text("{broken", encoding="utf-8")
        pipeline = tmp_path / "pipeline.yaml"
        pipeline.write_text(
            "name: broken\nfilters:\n  - name: t\n    type: translate\n"
            "    properties:\n      source: s\n      dictionary_path: codes.json\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["run", str(pipeline)], input='{"s": "a"}\n')

        assert result.exit_code == 1


class TestValidateCommand:
    """Tests for 'lexis validate'."""

    def test_validate_valid_pipeline(self, pipeline_file: Path) -> None:
        """A valid pipeline exits cleanly and lists its filters."""
        result = runner.invoke(app, ["validate", str(pipeline_file)])

        assert result.exit_code == 0, result.output
        assert "status_text" in result.output
        assert "Pipeline is valid" in result.output

    def test_validate_reports_configuration_errors(self, tmp_path: Path) -> None:
        """Conflicting dictionary options fail validation."""
        pipeline = tmp_path / "pipeline.yaml"
        pipeline.write_text(
            "name: bad\nfilters:\n  - name: t\n    type: translate\n"
            "    properties:\n      source: s\n      dictionary: {a: 1}\n"
            "      dictionary_path: codes.yml\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["validate", str(pipeline)])

        assert result.exit_code == 1
        assert "mutually exclusive" in result.output


class TestLookupCommand:
    """Tests for 'lexis lookup'."""

    def test_lookup_prints_value_as_json(self, pipeline_file: Path) -> None:
        """A match prints the dictionary value."""
        result = runner.invoke(
            app, ["lookup", str(pipeline_file), "status_text", "500"]
        )

        assert result.exit_code == 0, result.output
        assert '{"text": "Server Error", "retry": true}' in result.stdout

    def test_lookup_in_inline_dictionary(self, pipeline_file: Path) -> None:
        """Inline dictionaries can be queried too."""
        result = runner.invoke(app, ["lookup", str(pipeline_file), "method", "GET"])

        assert result.exit_code == 0, result.output
        assert '"read"' in result.stdout

    def test_lookup_without_match_exits_with_one(self, pipeline_file: Path) -> None:
        """No match is reported with a non-zero status."""
        result = runner.invoke(
            app, ["lookup", str(pipeline_file), "status_text", "999"]
        )

        assert result.exit_code == 1
        assert "No match" in result.output

    def test_lookup_unknown_filter(self, pipeline_file: Path) -> None:
        """Unknown filter names are errors."""
        result = runner.invoke(app, ["lookup", str(pipeline_file), "nope", "200"])

        assert result.exit_code == 1
        assert "No filter named 'nope'" in result.output


def _write_pipeline(
    tmp_path: Path, properties: str, filter_type: str = "translate"
) -> Path:
    pipeline = tmp_path / "pipeline.yaml"
    pipeline.write_text(
        f"name: errors\nfilters:\n  - name: t\n    type: {filter_type}\n"
        f"    properties:\n{properties}",
        encoding="utf-8",
    )
    return pipeline


class TestErrorReporting:
    """Tests for how command failures are titled."""

    def test_invalid_pipeline_file(self, tmp_path: Path) -> None:
        """Pipeline parse errors are reported as an invalid pipeline file."""
        pipeline = tmp_path / "bad.yaml"
        pipeline.write_text("name: bad\nfilters: []\n", encoding="utf-8")

        result = runner.invoke(app, ["validate", str(pipeline)])

        assert result.exit_code == 1
        assert "Invalid pipeline file" in result.output

    def test_unknown_filter_type(self, tmp_path: Path) -> None:
        """Unknown filter types are reported as such, even when wrapped."""
        pipeline = _write_pipeline(tmp_path, "      source: s\n", filter_type="nope")

        result = runner.invoke(app, ["run", str(pipeline)], input="")

        assert result.exit_code == 1
        assert "Unknown filter" in result.output

    def test_invalid_filter_configuration(self, tmp_path: Path) -> None:
        """Rejected filter properties are reported as configuration errors."""
        pipeline = _write_pipeline(
            tmp_path, "      source: s\n      refresh_behaviour: sometimes\n"
        )

        result = runner.invoke(app, ["validate", str(pipeline)])

        assert result.exit_code == 1
        assert "Invalid filter configuration" in result.output

    def test_unloadable_dictionary(self, tmp_path: Path) -> None:
        """A malformed dictionary file is reported as a load failure."""
        (tmp_path / "codes.json").write_text("{broken", encoding="utf-8")
        pipeline = _write_pipeline(
            tmp_path, "      source: s\n      dictionary_path: codes.json\n"
        )

        result = runner.invoke(app, ["validate", str(pipeline)])

        assert result.exit_code == 1
        assert "Dictionary could not be loaded" in result.output

    def test_invalid_dictionary_pattern(self, tmp_path: Path) -> None:
        """A bad regular expression key names the pattern, not just the load."""
        pipeline = _write_pipeline(
            tmp_path,
            "      source: s\n      regex: true\n      dictionary:\n"
            "        '(unclosed': x\n",
        )

        result = runner.invoke(app, ["validate", str(pipeline)])

        assert result.exit_code == 1
        assert "Invalid dictionary pattern" in result.output


class TestDescribeError:
    """Tests for describe_error()."""

    def test_deepest_known_cause_decides(self) -> None:
        """A load failure caused by a bad pattern is described by the pattern."""
        try:
            try:
                raise DictionaryPatternError("bad key")
            except DictionaryPatternError as e:
                raise DictionaryLoadError("load failed") from e
        except DictionaryLoadError as e:
            error = e

        report = describe_error(error)

        assert report is not None
        assert report.title == "Invalid dictionary pattern"

    def test_wrapped_pipeline_errors_keep_their_kind(self) -> None:
        """A CLIError raised from a pipeline error is described by that error."""
        cause = PipelineParseError("no filters")
        error = CLIError("Failed to load pipeline", command="run")
        error.__cause__ = cause

        report = describe_error(error)

        assert report is not None
        assert report.title == "Invalid pipeline file"

    def test_unknown_errors_have_no_report(self) -> None:
        """Errors of no known kind fall back to the command's own title."""
        assert describe_error(OSError("disk full")) is None
        assert describe_error(CLIError("No filter named 'x'")) is None
