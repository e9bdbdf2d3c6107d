"""Reading package.json manifests."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

log = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


class Repository(BaseModel):
    """The `repository` object of a manifest."""

    type: Optional[str] = Field(None, description="VCS kind, e.g. 'git'")
    url: Optional[str] = Field(None, description="Repository URL")


class Manifest(BaseModel):
    """The subset of package.json that depsize displays."""

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    license: Optional[str] = None
    homepage: Optional[str] = None
    repository: Optional[Repository] = None
    dependencies: Optional[dict[str, str]] = None
    dev_dependencies: Optional[dict[str, str]] = Field(None, alias="devDependencies")
    peer_dependencies: Optional[dict[str, str]] = Field(None, alias="peerDependencies")
    optional_dependencies: Optional[dict[str, str]] = Field(
        None, alias="optionalDependencies"
    )

    @field_validator("author", mode="before")
    @classmethod
    def _author_name(cls, value: Any) -> Any:
        # npm also accepts {"name": ..., "email": ..., "url": ...}
        if isinstance(value, dict):
            return value.get("name")
        return value

    @field_validator("repository", mode="before")
    @classmethod
    def _repository_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"url": value}
        return value

    @property
    def repository_url(self) -> Optional[str]:
        """URL of the repository, if one is declared."""
        return self.repository.url if self.repository else None

    @property
    def dependency_count(self) -> int:
        """Total number of declared dependencies across all groups."""
        groups = (
            self.dependencies,
            self.dev_dependencies,
            self.peer_dependencies,
            self.optional_dependencies,
        )
        return sum(len(group) for group in groups if group)


def parse_manifest(text: str) -> Optional[Manifest]:
    """
    Parse manifest text.

    Returns None when the text is not a JSON object with the expected shape.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log.debug("Invalid JSON in manifest: %s", e)
        return None

    if not isinstance(data, dict):
        log.debug("Manifest is not a JSON object")
        return None

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        log.debug("Manifest failed validation: %s", e)
        return None


def read_manifest(package_dir: Path) -> Optional[Manifest]:
    """
    Read the manifest at the top level of a package directory.

    A missing, unreadable or malformed manifest yields None; it never aborts
    the scan of the package.

    Args:
        package_dir: Package directory to look in (not searched recursively)

    Returns:
        Parsed Manifest, or None when no usable manifest exists
    """
    manifest_path = package_dir / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return None

    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.warning("Cannot read %s: %s", manifest_path, e)
        return None

    manifest = parse_manifest(text)
    if manifest is None:
        log.debug("Ignoring malformed manifest %s", manifest_path)
    return manifest
