"""`sprout new` - scaffold a project directory."""
import asyncio
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from sprout.cli_support import (
    handle_cli_error,
    is_mock,
    parse_dependency_spec,
    print_info,
    print_success,
)
from sprout.core.config import WorkspaceConfig
from sprout.core.logger import configure_logging
from sprout.scaffold import Workspace
from sprout.services.shell import LocalShell

# Module-level console instance (will be set by register function)
console: Console = Console()


def new(
    name: str = typer.Argument(..., help="Project name, also used as the directory name"),
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Parent directory (default: current directory)"),
    deps: List[str] = typer.Option([], "--dep", "-d", help="Runtime dependency, name or name@version"),
    dev_deps: List[str] = typer.Option([], "--dev-dep", "-D", help="Dev dependency, name or name@version"),
    typescript: Optional[bool] = typer.Option(None, "--typescript/--javascript", help="Scaffold a TypeScript project"),
    components_dir: Optional[str] = typer.Option(None, "--components-dir", help="Where components live"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with workspace settings"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to this file"),
):
    """Create a project: git init, .gitignore and a merged package.json."""
    configure_logging(verbose=verbose, log_file=log_file)

    try:
        config = WorkspaceConfig.from_env()
        if config_file:
            config = WorkspaceConfig.from_file(config_file, base=config)
        config = config.merged(typescript=typescript, components_directory=components_dir)

        workspace = Workspace(
            path or Path.cwd(),
            config=config,
            shell=LocalShell(mock=is_mock()),
        )
        workspace.name(name)

        for spec in deps:
            dependency, version = parse_dependency_spec(spec)
            workspace.install(dependency, version=version)
        for spec in dev_deps:
            dependency, version = parse_dependency_spec(spec)
            workspace.install(dependency, dev=True, version=version)

        workspace.root().mkdir(parents=True, exist_ok=True)
        asyncio.run(workspace.commit())
    except typer.BadParameter:
        raise
    except Exception as e:
        handle_cli_error(e, console, verbose=verbose)

    print_success(console, f"Created {workspace.name()} in {workspace.root()}")

    if workspace.dependencies:
        table = Table(title="Dependencies", show_header=True)
        table.add_column("Package", style="cyan")
        table.add_column("Version")
        table.add_column("Type")
        for dependency, options in workspace.dependencies.items():
            table.add_row(dependency, options.version or "latest", "dev" if options.dev else "runtime")
        console.print(table)

    print_info(console, f"Next: cd {workspace.root()} && {workspace.package_manager} install")


def register_new_commands(app: typer.Typer, shared_console: Console) -> None:
    """Register the new command with the main app."""
    global console
    console = shared_console
    app.command()(new)
