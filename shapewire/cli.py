"""Command-line interface for shapewire.

Commands:
- compile: Parse → propagate shapes → report, without building anything
"""
from __future__ import annotations

import argparse
from pathlib import Path

from shapewire.command import Command, CompileCommand
from shapewire.compiler import Compiler
from shapewire.config.network import NetworkConfig
from shapewire.console import logger


class _Args(argparse.Namespace):
    """Typed namespace for CLI arguments."""

    command: str | None = None
    compile_manifest: Path | None = None
    print_plan: bool = False
    plain: bool = False
    override_n_in: bool = False
    verbose: bool = False


class CLI(argparse.ArgumentParser):
    """Minimal command-line interface with one subcommand per intent."""

    def __init__(self) -> None:
        super().__init__(
            prog="shapewire",
            description="shapewire - shape inference for feed-forward networks.",
        )

        _ = self.add_argument(
            "--version",
            action="version",
            version="%(prog)s 0.1.0",
            help="Show the version and exit.",
        )

        subparsers = self.add_subparsers(
            dest="command",
            parser_class=argparse.ArgumentParser,
        )

        compile_parser = subparsers.add_parser(
            "compile",
            help="Compile a manifest (parse → propagate shapes → validate).",
        )
        _ = compile_parser.add_argument(
            "compile_manifest",
            type=Path,
            metavar="manifest",
            help="Manifest path (.json, .yml, or .yaml).",
        )
        _ = compile_parser.add_argument(
            "--print-plan",
            action="store_true",
            default=False,
            dest="print_plan",
            help="Print the wired plan.",
        )
        _ = compile_parser.add_argument(
            "--plain",
            action="store_true",
            default=False,
            help="With --print-plan, print plain text instead of a table.",
        )
        _ = compile_parser.add_argument(
            "--override-n-in",
            action="store_true",
            default=False,
            dest="override_n_in",
            help="Re-infer n_in even for layers that set it explicitly.",
        )
        _ = compile_parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            default=False,
            help="Log each layer as it is wired.",
        )

    def parse_command(self, argv: list[str] | None = None) -> Command:
        """Parse CLI arguments into a typed command payload."""
        args = self.parse_args(argv, namespace=_Args())

        match args.command:
            case "compile":
                if args.compile_manifest is None:
                    raise ValueError("compile requires a manifest path.")
                network = NetworkConfig.from_path(args.compile_manifest)
                plan = Compiler(verbose=bool(args.verbose)).compile(
                    network, override_n_in=bool(args.override_n_in)
                )
                return CompileCommand(
                    manifest=args.compile_manifest,
                    plan=plan,
                    print_plan=bool(args.print_plan),
                    plain=bool(args.plain),
                )
            case None:
                raise ValueError("No command given. Try `shapewire compile MANIFEST`.")
            case _:
                raise ValueError(f"Invalid command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns exit code (0 for success, non-zero for failure).
    """
    cli = CLI()

    try:
        command = cli.parse_command(argv)

        match command:
            case CompileCommand() as cmd:
                if cmd.print_plan and cmd.plain:
                    logger.log(Compiler().planner.format(cmd.plan))
                elif cmd.print_plan:
                    logger.header("Shape plan", cmd.plan.name)
                    logger.path(str(cmd.manifest), label="manifest")
                    logger.key_value(
                        {
                            "input": cmd.plan.input_type,
                            "layers": len(cmd.plan.layers),
                            "output": cmd.plan.output_types[0],
                        }
                    )
                    logger.console.print(Compiler().planner.table(cmd.plan))
                logger.success(
                    f"Network wired: {len(cmd.plan.layers)} layers → "
                    f"{cmd.plan.output_types[0]}"
                )
                return 0
            case _:
                raise ValueError(f"Invalid command payload: {type(command)!r}")

    except (ValueError, OSError) as e:
        logger.failure(e)
        return 1
