#!/usr/bin/env python3
"""Sprout CLI - Scaffold a Vite project with git and a merged package.json."""

import typer
from rich.console import Console

from sprout.cli_new_commands import register_new_commands

app = typer.Typer(
    name="sprout",
    help="""Sprout - Scaffold a Vite project

Creates the project directory, runs git init, writes .gitignore and
merges scripts and dependencies into package.json.

Quick start:
  sprout new my-app --dep react --dev-dep eslint
""",
    add_completion=False,
)

console = Console()

register_new_commands(app, console)


@app.callback()
def main():
    """Sprout - Scaffold a Vite project."""


if __name__ == "__main__":
    app()
