"""Tests for CLI interface."""

import json
import sys

import pytest
from click.testing import CliRunner

from wiremeta.cli import cli

MODULE = "wiremeta_cli_models"

MODELS = """
from dataclasses import dataclass

from wiremeta.resolver import wire_field


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Clash:
    a: int = wire_field("v")
    b: int = wire_field("v")


class Outer:
    class Inner:
        value_count: int


not_a_class = 42
"""


@pytest.fixture(autouse=True)
def models(tmp_path, monkeypatch):
    (tmp_path / f"{MODULE}.py").write_text(MODELS)
    monkeypatch.syspath_prepend(str(tmp_path))
    yield
    sys.modules.pop(MODULE, None)


def describe_describe_command():
    def shows_members_and_constructor(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Point"])

        expect(result.exit_code) == 0
        expect("Members" in result.output) == True
        expect("Point(x, y)" in result.output) == True

    def outputs_json(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Point", "--json"])

        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["type"]) == f"{MODULE}.Point"
        expect(data["kind"]) == "reference"
        expect([m["wire_name"] for m in data["members"]]) == ["x", "y"]
        expect(data["constructor"]) == "Point(x, y)"
        expect([p["member"] for p in data["parameters"]]) == ["x", "y"]

    def resolves_nested_classes(expect):
        result = CliRunner().invoke(
            cli, ["describe", f"{MODULE}:Outer.Inner", "--naming", "camel", "--json"]
        )

        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["members"][0]["wire_name"]) == "valueCount"
        expect(data["constructor"]) == None

    def logs_resolution_when_verbose(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Point", "--verbose"])

        expect(result.exit_code) == 0
        expect("type_resolved" in result.output) == True

    def fails_on_resolution_error(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Clash"])

        expect(result.exit_code) == 1
        expect("Duplicate wire name" in result.output) == True

    def rejects_malformed_target(expect):
        result = CliRunner().invoke(cli, ["describe", MODULE])

        expect(result.exit_code) == 2
        expect("module:ClassName" in result.output) == True

    def rejects_missing_attribute(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Nope"])
        expect(result.exit_code) == 2

    def rejects_non_class_target(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:not_a_class"])

        expect(result.exit_code) == 2
        expect("is not a class" in result.output) == True

    def rejects_unknown_naming_policy(expect):
        result = CliRunner().invoke(cli, ["describe", f"{MODULE}:Point", "--naming", "kebab"])
        expect(result.exit_code) == 2


def describe_main_group():
    def shows_help(expect):
        result = CliRunner().invoke(cli, ["--help"])

        expect(result.exit_code) == 0
        expect("describe" in result.output) == True
