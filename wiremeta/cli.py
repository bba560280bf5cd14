"""Command-line interface for inspecting resolved type metadata."""

import importlib
import sys
from dataclasses import dataclass

import click
from dataclasses_json import DataClassJsonMixin
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wiremeta.logging import setup_logging
from wiremeta.resolver import ResolutionError, ResolverOptions, TypeMetadata, TypeResolver
from wiremeta.resolver.naming import get_policy, policy_names
from wiremeta.resolver.types import type_label


@dataclass
class MemberReport(DataClassJsonMixin):
    """A member as shown by `describe --json`."""

    wire_name: str
    attribute: str
    kind: str
    type: str
    readable: bool
    writable: bool


@dataclass
class ParameterReport(DataClassJsonMixin):
    """A constructor parameter and the member bound to it."""

    name: str
    type: str
    member: str


@dataclass
class TypeReport(DataClassJsonMixin):
    """Resolved metadata in a serializable shape."""

    type: str
    kind: str
    members: list[MemberReport]
    constructor: str | None
    parameters: list[ParameterReport]

    @classmethod
    def from_metadata(cls, metadata: TypeMetadata) -> "TypeReport":
        parameters = []
        if metadata.constructor is not None and metadata.binding is not None:
            parameters = [
                ParameterReport(name=p.name, type=type_label(p.value_type), member=m.wire_name)
                for p, m in zip(metadata.constructor.parameters, metadata.binding)
            ]

        return cls(
            type=f"{metadata.type.__module__}.{metadata.type.__qualname__}",
            kind=metadata.kind.value,
            members=[
                MemberReport(
                    wire_name=m.wire_name,
                    attribute=m.attribute,
                    kind=m.kind.value,
                    type=type_label(m.value_type),
                    readable=m.readable,
                    writable=m.writable,
                )
                for m in metadata.members
            ],
            constructor=metadata.constructor.signature if metadata.constructor else None,
            parameters=parameters,
        )


def load_target(target: str) -> type:
    """Import `module:QualifiedName` and return the class it names."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise click.BadParameter(f"expected module:ClassName, got {target!r}")

    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import {module_name!r}: {exc}") from exc

    for part in qualname.split("."):
        if not hasattr(obj, part):
            raise click.BadParameter(f"{module_name!r} has no attribute {qualname!r}")
        obj = getattr(obj, part)

    if not isinstance(obj, type):
        raise click.BadParameter(f"{target!r} is not a class")
    return obj


@click.group()
def cli() -> None:
    """Type metadata resolver."""


@cli.command()
@click.argument("target")
@click.option(
    "--naming",
    "-n",
    type=click.Choice(policy_names()),
    default="original",
    help="Naming policy for members without an explicit wire name",
)
@click.option("--allow-private", is_flag=True, default=False, help="Count non-public accessors")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution steps")
def describe(
    target: str, naming: str, allow_private: bool, output_json: bool, verbose: bool
) -> None:
    """Resolve TARGET (module:ClassName) and show its serialization metadata."""
    setup_logging(log_level="DEBUG" if verbose else "WARNING")

    cls = load_target(target)
    resolver = TypeResolver(
        ResolverOptions(name_mutator=get_policy(naming), allow_private=allow_private)
    )
    try:
        metadata = resolver.resolve(cls)
    except ResolutionError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    report = TypeReport.from_metadata(metadata)
    if output_json:
        print(report.to_json(indent=2))
    else:
        _output_plain(report)


def _output_plain(report: TypeReport) -> None:
    """Output type metadata using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]{escape(report.type)}[/bold cyan] [dim]({report.kind})[/dim]")
    console.print()

    member_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    member_table.add_column("Wire name", style="white")
    member_table.add_column("Attribute", style="dim")
    member_table.add_column("Kind", style="dim")
    member_table.add_column("Type", style="yellow")
    member_table.add_column("Access", style="green")

    for m in report.members:
        access = ("r" if m.readable else "-") + ("w" if m.writable else "-")
        member_table.add_row(escape(m.wire_name), m.attribute, m.kind, escape(m.type), access)

    console.print("[bold cyan]Members[/bold cyan]")
    console.print(member_table)
    console.print()

    console.print("[bold cyan]Constructor[/bold cyan]")
    if report.constructor is None:
        console.print("  parameterless, members applied via setters")
        return

    console.print(f"  {escape(report.constructor)}")
    param_table = Table(show_header=True, box=None, padding=(0, 2, 0, 2))
    param_table.add_column("Parameter", style="white")
    param_table.add_column("Type", style="yellow")
    param_table.add_column("Member", style="green")
    for p in report.parameters:
        param_table.add_row(p.name, escape(p.type), escape(p.member))
    console.print(param_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
