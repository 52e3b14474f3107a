"""Typed configuration loading and access.

The organization, the manifest repository, host roots and notes options are
read from a TOML file (``relnotes.toml`` by default) into frozen dataclasses.
The resulting ``Config`` is passed explicitly to every component.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GithubConfig",
    "NotesConfig",
    "DEFAULT_CONFIG_FILE",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_FILE = "relnotes.toml"

DEFAULT_ORG = "un-ch"
DEFAULT_MANIFEST_REPO = "manifest"
DEFAULT_SSH_HOST = "git@github.com"
DEFAULT_WEB_URL = "https://github.com"
DEFAULT_REPO_LIST_LIMIT = 500

DEFAULT_NOTES_FILE_NAME = "release_notes.md"
DEFAULT_INCLUDE: tuple[str, ...] = (
    "manifest",
    "last_prj",
    "new_project",
    "b_prj",
    "a_prj",
    "c_prj",
    "release_notes",
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GithubConfig:
    """Where the repositories live.

    Attributes:
        org: Organization that owns every repository
        manifest_repo: Repository that receives the release
        ssh_host: Clone host root, e.g. ``git@github.com``
        web_url: Web root used for commit and repository links
        repo_list_limit: Upper bound passed to ``gh repo list --limit``.
            Organizations with more repositories are not fully listed.
    """

    org: str = DEFAULT_ORG
    manifest_repo: str = DEFAULT_MANIFEST_REPO
    ssh_host: str = DEFAULT_SSH_HOST
    web_url: str = DEFAULT_WEB_URL
    repo_list_limit: int = DEFAULT_REPO_LIST_LIMIT

    @property
    def manifest_slug(self) -> str:
        return f"{self.org}/{self.manifest_repo}"

    def clone_url(self, repo: str) -> str:
        return f"{self.ssh_host}:{self.org}/{repo}.git"

    def repo_url(self, repo: str) -> str:
        return f"{self.web_url.rstrip('/')}/{self.org}/{repo}"

    def commit_url(self, repo: str, sha: str) -> str:
        return f"{self.repo_url(repo)}/commit/{sha}"


@dataclass(frozen=True, slots=True)
class NotesConfig:
    """How the notes are built and published.

    Attributes:
        file_name: Name of the notes file (body and uploaded asset)
        include: Repository names to aggregate. Empty means every repository.
        first_parent: Walk only the first-parent lineage
        mark_latest: Mark the created release as latest
        workspace_parent: Directory under which the temporary workspace is created
    """

    file_name: str = DEFAULT_NOTES_FILE_NAME
    include: tuple[str, ...] = DEFAULT_INCLUDE
    first_parent: bool = True
    mark_latest: bool = True
    workspace_parent: str = "."


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GithubConfig = field(default_factory=GithubConfig)
    notes: NotesConfig = field(default_factory=NotesConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping.

        Raises:
            ValueError: If a present key has the wrong type or value.
        """
        github: StrDict = get_table(data, "github") or {}
        notes: StrDict = get_table(data, "notes") or {}

        limit = get_int(github, "repo_list_limit")
        if limit is None:
            if "repo_list_limit" in github:
                raise ValueError("github.repo_list_limit must be an integer")
            limit = DEFAULT_REPO_LIST_LIMIT
        if limit <= 0:
            raise ValueError("github.repo_list_limit must be positive")

        include = get_str_list(notes, "include")
        if include is None and "include" in notes:
            raise ValueError("notes.include must be a list of strings")

        file_name = get_str(notes, "file_name") or DEFAULT_NOTES_FILE_NAME
        if "/" in file_name or "\\" in file_name:
            raise ValueError(f"notes.file_name must be a plain file name: {file_name}")

        return cls(
            github=GithubConfig(
                org=get_str(github, "org") or DEFAULT_ORG,
                manifest_repo=get_str(github, "manifest_repo") or DEFAULT_MANIFEST_REPO,
                ssh_host=get_str(github, "ssh_host") or DEFAULT_SSH_HOST,
                web_url=get_str(github, "web_url") or DEFAULT_WEB_URL,
                repo_list_limit=limit,
            ),
            notes=NotesConfig(
                file_name=file_name,
                include=tuple(include) if include is not None else DEFAULT_INCLUDE,
                first_parent=_bool_or(notes, "first_parent", True),
                mark_latest=_bool_or(notes, "mark_latest", True),
                workspace_parent=get_str(notes, "workspace_parent") or ".",
            ),
        )


def _bool_or(table: Mapping[str, object], key: str, default: bool) -> bool:
    value = get_bool(table, key)
    if value is None:
        if key in table:
            raise ValueError(f"{key} must be a boolean")
        return default
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from ``path``, or defaults when the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
