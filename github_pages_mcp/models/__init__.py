"""Pydantic models for tool inputs and GitHub Pages entities."""

from .pages import (
    DEFAULT_BUILD_TYPE,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_SOURCE_PATH,
    VALID_BUILD_TYPES,
    VALID_ENCODINGS,
    VALID_SOURCE_PATHS,
    DeployToGithubPagesInput,
    EnableGithubPagesInput,
    FileChange,
    PagesSite,
    PagesSource,
    RepositoryInput,
    SiteSource,
    UpdateGithubPagesConfigInput,
    UpdateSource,
)

__all__ = [
    "DEFAULT_BUILD_TYPE",
    "DEFAULT_COMMIT_MESSAGE",
    "DEFAULT_SOURCE_PATH",
    "VALID_BUILD_TYPES",
    "VALID_ENCODINGS",
    "VALID_SOURCE_PATHS",
    "DeployToGithubPagesInput",
    "EnableGithubPagesInput",
    "FileChange",
    "PagesSite",
    "PagesSource",
    "RepositoryInput",
    "SiteSource",
    "UpdateGithubPagesConfigInput",
    "UpdateSource",
]
