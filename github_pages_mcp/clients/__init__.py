"""Upstream API clients."""

from .github_client import GitHubAPIError, GitHubClient

__all__ = [
    'GitHubAPIError',
    'GitHubClient',
]
