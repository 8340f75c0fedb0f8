"""Typed records for GitHub Pages tool inputs and upstream responses.

Tool arguments are checked against their declarative schemas first
(see ``validators``); the cleaned value is then loaded into one of the
input models below, which is what operation handlers receive.

``model_fields_set`` on an input model tells which optional keys the caller
actually supplied, which matters for ``cname`` where an explicit null
clears the custom domain while an omitted key leaves it untouched.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SourcePath = Literal["/", "/docs"]
BuildType = Literal["legacy", "workflow"]
FileEncoding = Literal["utf-8", "base64"]

VALID_SOURCE_PATHS = ("/", "/docs")
VALID_BUILD_TYPES = ("legacy", "workflow")
VALID_ENCODINGS = ("utf-8", "base64")

DEFAULT_SOURCE_PATH = "/"
DEFAULT_BUILD_TYPE = "legacy"
DEFAULT_COMMIT_MESSAGE = "Deploy to GitHub Pages"


class RepositoryInput(BaseModel):
    """Arguments shared by every tool."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner (username or organization)")
    repo: str = Field(..., description="Repository name")


class PagesSource(BaseModel):
    """Publishing source of a Pages site."""

    model_config = ConfigDict(frozen=True)

    branch: str
    path: Optional[SourcePath] = None


class EnableGithubPagesInput(RepositoryInput):
    source: PagesSource
    build_type: Optional[BuildType] = None


class FileChange(BaseModel):
    """One file in a deployment batch."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="File path in the repository")
    content: str = Field(..., description="File content (base64 for binary files)")
    encoding: FileEncoding = "utf-8"


class DeployToGithubPagesInput(RepositoryInput):
    branch: str
    message: Optional[str] = None
    files: Optional[List[FileChange]] = None


class UpdateSource(BaseModel):
    """Source as accepted by the update tool.

    ``path`` stays a plain string here; the update handler checks it
    against the allowed values itself.
    """

    model_config = ConfigDict(frozen=True)

    branch: str
    path: Optional[str] = None


class UpdateGithubPagesConfigInput(RepositoryInput):
    source: Optional[UpdateSource] = None
    build_type: Optional[BuildType] = None
    cname: Optional[str] = None

    @property
    def cname_provided(self) -> bool:
        return "cname" in self.model_fields_set


class SiteSource(BaseModel):
    """Source as reported by GitHub."""

    branch: Optional[str] = None
    path: Optional[str] = None


class PagesSite(BaseModel):
    """Pages site settings as reported by GitHub (read-only fields included)."""

    model_config = ConfigDict(extra="ignore")

    html_url: Optional[str] = None
    status: Optional[str] = None
    cname: Optional[str] = None
    custom_404: Optional[bool] = None
    source: Optional[SiteSource] = None
    build_type: Optional[str] = None
    public: Optional[bool] = None

    @classmethod
    def from_response(cls, data: Optional[Dict[str, Any]]) -> "PagesSite":
        return cls.model_validate(data or {})

    def source_dict(self) -> Optional[Dict[str, Any]]:
        if self.source is None:
            return None
        return self.source.model_dump()
