"""Data models for depsize."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PackageRecord(BaseModel):
    """Size and metadata for one package directory."""

    model_config = ConfigDict(frozen=True)

    # Filesystem facts
    name: str = Field(..., description="Directory base name of the package")
    path: str = Field(..., description="Path of the package directory")
    size_bytes: int = Field(0, ge=0, description="Total apparent size of regular files")
    file_count: int = Field(0, ge=0, description="Number of regular files")
    file_types: list[tuple[str, int]] = Field(
        default_factory=list,
        description="(extension, count) pairs, most common first",
    )
    last_updated: Optional[str] = Field(
        None, description="Relative age of the package directory, e.g. '3 days ago'"
    )

    # Manifest fields (None when absent)
    declared_name: Optional[str] = Field(None, description="Name declared in the manifest")
    version: Optional[str] = Field(None, description="Package version")
    description: Optional[str] = Field(None, description="Package description")
    author: Optional[str] = Field(None, description="Package author")
    license: Optional[str] = Field(None, description="License identifier")
    homepage: Optional[str] = Field(None, description="Project homepage")
    repository: Optional[str] = Field(None, description="Repository URL")
    dependency_count: Optional[int] = Field(
        None, description="Declared dependencies across all dependency groups"
    )

    @property
    def has_manifest(self) -> bool:
        """Whether a manifest was read for this package."""
        return self.dependency_count is not None
