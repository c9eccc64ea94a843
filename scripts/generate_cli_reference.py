#!/usr/bin/env python3
"""Generate CLI reference documentation from typer app."""

import inspect
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import spendlog
sys.path.insert(0, str(Path(__file__).parent.parent))

from spendlog.cli import app


def format_option(param_name: str, param: Any) -> str:
    """Format an option with its flags and help text."""
    flags = []
    if hasattr(param, "param_decls") and param.param_decls:
        flags = param.param_decls

    if not flags:
        flags = [f"--{param_name.replace('_', '-')}"]

    flag_str = ", ".join(f"`{flag}`" for flag in flags)
    parts = [f"- {flag_str}"]

    if hasattr(param, "help") and param.help:
        parts.append(f": {param.help}")

    # typer uses Ellipsis for required options
    default = getattr(param, "default", None)
    if default not in (None, False, Ellipsis):
        parts.append(f" (default: {default})")

    return "".join(parts)


def generate_command_doc(command_name: str, command_obj: Any) -> str:
    """Generate documentation for a single command."""
    callback = command_obj.callback
    doc = (callback.__doc__ or "No description available.").strip()

    lines = [
        f"### {command_name}",
        "",
        doc,
        "",
        "**Usage:**",
        "",
        "```bash",
        f"spendlog {command_name}",
        "```",
        "",
    ]

    sig = inspect.signature(callback)
    args = []
    options = []

    for param_name, param in sig.parameters.items():
        if param.default == inspect.Parameter.empty:
            args.append(param_name.upper())
        elif hasattr(param.default, "param_decls") and param.default.param_decls:
            options.append((param_name, param.default))
        elif hasattr(param.default, "help"):
            args.append(f"{param_name.upper()} (optional)")

    if args:
        lines.append("**Arguments:**")
        lines.append("")
        for arg in args:
            suffix = "" if arg.endswith("(optional)") else " (required)"
            lines.append(f"- `{arg}`{suffix}")
        lines.append("")

    if options:
        lines.append("**Options:**")
        lines.append("")
        for param_name, option in options:
            lines.append(format_option(param_name, option))
        lines.append("")

    return "\n".join(lines)


def command_name_of(command_obj: Any) -> str:
    return command_obj.name or (command_obj.callback.__name__ if command_obj.callback else "unknown")


def generate_cli_reference() -> str:
    """Generate complete CLI reference documentation."""
    lines = [
        "# CLI Commands Reference",
        "",
        "Complete reference for all spendlog CLI commands and options.",
        "",
        "## Usage",
        "",
        "```bash",
        "spendlog [--verbose] [COMMAND] [OPTIONS]",
        "```",
        "",
        "## Global Options",
        "",
        "| Option | Description |",
        "|--------|-------------|",
        "| `--verbose`, `-v` | Show debug logging |",
        "| `--help` | Show help message and exit |",
        "",
        "## Commands",
        "",
    ]

    for command_obj in sorted(app.registered_commands, key=command_name_of):
        lines.append(generate_command_doc(command_name_of(command_obj), command_obj))
        lines.append("")

    for group in sorted(app.registered_groups, key=lambda g: g.name or ""):
        sub_app = group.typer_instance
        for command_obj in sorted(sub_app.registered_commands, key=command_name_of):
            lines.append(generate_command_doc(f"{group.name} {command_name_of(command_obj)}", command_obj))
            lines.append("")

    return "\n".join(lines)


def main() -> None:
    """Generate and write CLI reference documentation."""
    output_path = Path(__file__).parent.parent / "docs" / "reference" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
