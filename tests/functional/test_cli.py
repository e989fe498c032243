"""
test_cli.py - Command-line client tests

Runs every command through click's CliRunner with a batch on stdin.
"""

import pytest
from click.testing import CliRunner

from bourse.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def lines(result):
    return result.output.splitlines()


class TestListings:

    def test_report(self, runner):
        result = runner.invoke(cli, ["listings"], input="Acme NYSE 10 5\nAcme LSE 3 2\nGlobex NYSE 4 1\n")
        assert result.exit_code == 0, result.output
        assert lines(result) == [
            "Acme", "- LSE", "- NYSE",
            "Globex", "- NYSE",
            "LSE", "- Acme",
            "NYSE", "- Acme", "- Globex",
        ]

    def test_bad_price_fails(self, runner):
        result = runner.invoke(cli, ["listings"], input="Acme NYSE 10 0\n")
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_malformed_line_fails(self, runner):
        result = runner.invoke(cli, ["listings"], input="Acme NYSE\n")
        assert result.exit_code == 1
        assert "fields" in result.output


class TestQuote:

    def test_report(self, runner):
        result = runner.invoke(cli, ["quote", "NYSE"], input="Globex 4 1\nAcme 10 5\n")
        assert result.exit_code == 0, result.output
        assert lines(result) == ["Acme, 5, 10", "Globex, 1, 4"]


class TestSession:

    def test_report(self, runner):
        text = "Acme NYSE 10 5\n--\nBob 12\nAlice 10\n--\nBob b NYSE Acme 12\nAlice b NYSE Acme 5\n"
        result = runner.invoke(cli, ["session"], input=text)
        assert result.exit_code == 0, result.output
        assert lines(result) == ["NYSE", "- Acme 7", "= Alice 1", "= Bob 2"]

    def test_verbose_traces_trades(self, runner):
        text = "Acme NYSE 10 5\n--\nBob 12\n--\nBob b NYSE Acme 12\n"
        result = runner.invoke(cli, ["--verbose", "session"], input=text)
        assert result.exit_code == 0, result.output
        assert "[NYSE] listed Acme: 10 @ 5" in result.output
        assert "[NYSE] buy Bob Acme 2/2 price 5 -> 5" in result.output

    def test_failure_reports_error(self, runner):
        text = "Acme NYSE 10 5\n--\nBob 12\n--\nBob s NYSE Acme 1\n"
        result = runner.invoke(cli, ["session"], input=text)
        assert result.exit_code == 1
        assert "holds no Acme" in result.output


class TestThreshold:

    def test_report(self, runner):
        result = runner.invoke(
            cli, ["threshold", "X", "3", "Carol", "100"],
            input="Widget 10 4\nGizmo 10 4\n--\nb Widget 20\nb Gizmo 8\n",
        )
        assert result.exit_code == 0, result.output
        assert lines(result) == ["Gizmo, 4", "Widget, 8"]

    def test_negative_threshold_fails(self, runner):
        result = runner.invoke(cli, ["threshold", "X", "-1", "Carol", "100"], input="")
        assert result.exit_code != 0
