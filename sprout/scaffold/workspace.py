"""In-memory model of a project being scaffolded, persisted by commit()."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from sprout.core.config import WorkspaceConfig
from sprout.core.logger import get_logger
from sprout.core.merge import deep_merge
from sprout.scaffold.formatter import format_file, infer_parser
from sprout.services.shell import LocalShell

logger = get_logger(__name__)

MANIFEST_FILE = "package.json"
IGNORE_FILE = ".gitignore"
TYPESCRIPT_CONFIG_FILE = "tsconfig.json"
LATEST = "latest"

BASE_SCRIPTS = {
    "dev": "vite",
    "build": "yarn build:client && yarn build:server",
    "build:client": "vite build --outDir dist/client --manifest",
    "build:server": "vite build --outDir dist/server --ssr src/entry-server.jsx",
}

# Linters in the order their clauses appear in the lint script
LINT_COMMANDS = {
    "eslint": "eslint --no-error-on-unmatched-pattern --ext .js,.ts,.jsx,.tsx src",
    "stylelint": "stylelint ./src/**/*.{css,sass,scss}",
}
LINT_SEPARATOR = " && "

PRETTIER_CONFIG_PACKAGE = "@shopify/prettier-config"

IGNORE_PATTERNS = """
    node_modules
    .DS_Store
    dist
    dist-ssr
    *.local
    """

Formatter = Callable[[str], str]


class WorkspaceError(RuntimeError):
    """Raised when a Workspace is used outside its name-then-commit lifecycle."""


@dataclass(frozen=True)
class DependencyOptions:
    """How a dependency should be recorded in the manifest."""

    dev: bool = False
    version: Optional[str] = None


class Workspace:
    """A project to scaffold: name, root, dependencies and settings.

    Calls to install() and name() only change in-memory state. commit()
    performs every side effect once: git init, the ignore file, and the
    merged package.json.
    """

    def __init__(
        self,
        root: Union[str, Path],
        config: Optional[WorkspaceConfig] = None,
        shell: Optional[LocalShell] = None,
        formatter: Optional[Formatter] = None,
    ):
        self._root = Path(root)
        self._name: Optional[str] = None
        self.config = config or WorkspaceConfig()
        self.shell = shell or LocalShell()
        self.formatter = formatter
        self.dependencies: Dict[str, DependencyOptions] = {}
        self._committed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def install(self, dependency: str, dev: bool = False, version: Optional[str] = None) -> None:
        """Register a dependency. The first registration of a name wins."""
        if dependency in self.dependencies:
            logger.debug(f"{dependency} already registered, keeping first options")
            return

        self.dependencies[dependency] = DependencyOptions(dev=dev, version=version)
        logger.debug(f"Registered {'dev ' if dev else ''}dependency {dependency}")

    def name(self, new_name: Optional[str] = None) -> str:
        """Read the project name, or set it and move the root into it.

        The name can be set once. Setting the same name again is a no-op;
        a different name, or any rename after commit(), raises WorkspaceError.
        """
        if new_name:
            if self._committed:
                raise WorkspaceError("Cannot rename a workspace after commit()")
            if self._name is not None and new_name != self._name:
                raise WorkspaceError(
                    f"Workspace is already named '{self._name}', cannot rename to '{new_name}'"
                )
            if self._name is None:
                self._name = new_name
                self._root = self._root / new_name

        return self._name or ""

    def root(self) -> Path:
        return self._root

    @property
    def components_directory(self) -> str:
        return self.config.components_directory

    @property
    def is_typescript(self) -> bool:
        return self.config.typescript or self.has_file(TYPESCRIPT_CONFIG_FILE)

    @property
    def package_manager(self) -> str:
        return self.config.package_manager

    def has_file(self, relative_path: str) -> bool:
        """Check for a file relative to the current root."""
        return self.shell.exists(self._root / relative_path)

    # ------------------------------------------------------------------
    # Manifest assembly
    # ------------------------------------------------------------------

    def build_scripts(self) -> Dict[str, str]:
        """Base scripts plus a lint script for whichever linters are registered."""
        scripts = dict(BASE_SCRIPTS)

        linters = [
            command for package, command in LINT_COMMANDS.items()
            if package in self.dependencies
        ]
        if linters:
            scripts["lint"] = LINT_SEPARATOR.join(linters)

        return scripts

    def build_configs(self) -> Dict[str, str]:
        """Top-level manifest keys that point tools at shared config packages."""
        configs: Dict[str, str] = {}
        if PRETTIER_CONFIG_PACKAGE in self.dependencies:
            configs["prettier"] = PRETTIER_CONFIG_PACKAGE
        return configs

    def partition_dependencies(self) -> Dict[str, Dict[str, str]]:
        """Split registered dependencies into runtime and dev buckets."""
        buckets: Dict[str, Dict[str, str]] = {"dependencies": {}, "devDependencies": {}}

        for dependency, options in self.dependencies.items():
            bucket = "devDependencies" if options.dev else "dependencies"
            buckets[bucket][dependency] = options.version or LATEST

        return buckets

    def build_manifest(self) -> Dict[str, object]:
        """The manifest fields this workspace owns, before merging."""
        return {
            "name": self.name(),
            "scripts": self.build_scripts(),
            **self.partition_dependencies(),
            **self.build_configs(),
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def write_formatted(self, relative_path: str, content: str) -> Path:
        """Format content for its file type and write it under the root."""
        if self.formatter is not None:
            formatted = self.formatter(content)
        else:
            formatted = format_file(content, parser=infer_parser(relative_path))

        path = self._root / relative_path
        self.shell.write_file(path, formatted)
        return path

    async def git_init(self) -> None:
        """Initialize a git repository at the root and write the ignore file."""
        logger.info(f"Initializing git repository in {self._root}")
        await self.shell.run_command(["git", "init"], cwd=self._root)
        self.write_formatted(IGNORE_FILE, IGNORE_PATTERNS)

    def read_manifest(self) -> Dict[str, object]:
        """Existing package.json contents, or an empty dict if there is none."""
        path = self._root / MANIFEST_FILE
        if not self.shell.exists(path):
            return {}
        manifest = json.loads(self.shell.read_file(path, encoding="utf-8"))
        if not isinstance(manifest, dict):
            raise ValueError(
                f"{path}: expected a JSON object, got {type(manifest).__name__}"
            )
        return manifest

    async def commit(self) -> None:
        """Perform all side effects. Any failure propagates and stops the rest."""
        if self._committed:
            raise WorkspaceError("Workspace has already been committed")
        self._committed = True

        await self.git_init()

        manifest = deep_merge(self.build_manifest(), self.read_manifest())
        path = self._root / MANIFEST_FILE
        self.shell.write_file(path, json.dumps(manifest, indent=2, ensure_ascii=False) + "\n")

        logger.info(
            f"Wrote {MANIFEST_FILE} with {len(self.dependencies)} "
            f"dependenc{'y' if len(self.dependencies) == 1 else 'ies'}"
        )

    def __repr__(self) -> str:
        return f"Workspace(root={str(self._root)!r}, name={self.name()!r})"
