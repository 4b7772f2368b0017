"""Sprout workspace configuration and settings."""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

YARN = "yarn"
NPM = "npm"

DEFAULT_COMPONENTS_DIRECTORY = "./src/components"

_TRUTHY = {"1", "true", "yes", "on"}


def detect_package_manager(execpath: Optional[str]) -> str:
    """Return the package manager named by an ``npm_execpath`` value.

    Anything that does not mention yarn falls back to npm.
    """
    if execpath and YARN in execpath:
        return YARN
    return NPM


@dataclass(frozen=True)
class WorkspaceConfig:
    """Settings fixed for the lifetime of a Workspace.

    Attributes:
        typescript: Scaffold a statically-typed project (default: False)
        components_directory: Where component source lives (default: ./src/components)
        package_manager: Package manager that invoked the scaffolder (default: npm)
    """

    typescript: bool = False
    components_directory: str = DEFAULT_COMPONENTS_DIRECTORY
    package_manager: str = NPM

    @classmethod
    def from_env(cls, **overrides) -> "WorkspaceConfig":
        """Create config from environment variables.

        Environment variables:
            npm_execpath: Set by npm/yarn when running a package script
            SPROUT_TYPESCRIPT: Truthy value enables TypeScript
            SPROUT_COMPONENTS_DIR: Components directory

        Explicit keyword overrides take precedence over the environment.
        """
        config = cls(
            typescript=os.getenv("SPROUT_TYPESCRIPT", "").lower() in _TRUTHY,
            components_directory=os.getenv(
                "SPROUT_COMPONENTS_DIR", cls.components_directory
            ),
            package_manager=detect_package_manager(os.getenv("npm_execpath")),
        )
        return config.merged(**overrides)

    @classmethod
    def from_file(cls, path: Path, base: Optional["WorkspaceConfig"] = None) -> "WorkspaceConfig":
        """Load overrides from a YAML file on top of ``base`` (or defaults).

        Raises:
            ValueError: If the file is not a mapping or names unknown settings
        """
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping of settings")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"{path}: unknown settings: {', '.join(unknown)}")

        return (base or cls()).merged(**data)

    def merged(self, **overrides) -> "WorkspaceConfig":
        """Return a copy with every non-None override applied."""
        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied)


# Global config instance (can be overridden)
_config: Optional[WorkspaceConfig] = None


def get_config() -> WorkspaceConfig:
    """Get the global workspace configuration, reading the environment once."""
    global _config
    if _config is None:
        _config = WorkspaceConfig.from_env()
    return _config


def set_config(config: Optional[WorkspaceConfig]):
    """Set the global workspace configuration (None resets it)."""
    global _config
    _config = config
