"""Tests for logging setup"""

from dataclasses import dataclass

from wiremeta.logging import setup_logging
from wiremeta.resolver import TypeRegistry


@dataclass
class Reading:
    sensor: str
    value: float


def describe_library_logging():
    def is_silent_until_configured(expect, capsys):
        TypeRegistry().get(Reading)

        captured = capsys.readouterr()
        expect(captured.out) == ""
        expect(captured.err) == ""

    def follows_setup_logging(expect, capsys):
        setup_logging(log_level="DEBUG")
        TypeRegistry().get(Reading)

        err = capsys.readouterr().err
        expect("type_described" in err) == True
        expect("type_resolved" in err) == True
        expect("type_registered" in err) == True

    def filters_below_configured_level(expect, capsys):
        setup_logging(log_level="WARNING")
        TypeRegistry().get(Reading)

        expect(capsys.readouterr().err) == ""

    def renders_json(expect, capsys):
        setup_logging(json_output=True, log_level="INFO")
        TypeRegistry().get(Reading)

        err = capsys.readouterr().err
        expect('"event": "type_registered"' in err) == True
        expect("type_resolved" in err) == False
