"""Shared fixtures: an in-memory stand-in for the GitHub API."""

from typing import Any, Dict, List, Optional, Tuple

import pytest

from github_pages_mcp.clients.github_client import GitHubAPIError
from github_pages_mcp.tools.pages_tools import PagesTools


def not_found() -> GitHubAPIError:
    body = {
        "message": "Not Found",
        "documentation_url": "https://docs.github.com/rest",
    }
    return GitHubAPIError("Not Found", 404, body)


class FakeGitHubClient:
    """Records every call and models Pages sites, refs, commits and trees."""

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.failures: Dict[str, Exception] = {}
        self.pages: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.refs: Dict[Tuple[str, str, str], str] = {}
        self.commits: Dict[str, Dict[str, Any]] = {}
        self.trees: Dict[str, Dict[str, str]] = {}
        self.blobs: Dict[str, Tuple[str, str]] = {}
        self.update_response: Optional[Dict[str, Any]] = None
        self._counter = 0

    # -- helpers -----------------------------------------------------------

    def fail(self, method: str, error: Exception) -> None:
        """Make every call to ``method`` raise ``error``."""
        self.failures[method] = error

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def _record(self, method: str, **kwargs) -> None:
        self.calls.append((method, kwargs))
        if method in self.failures:
            raise self.failures[method]

    def _sha(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter:039d}"[:40]

    def seed_site(self, owner: str, repo: str, **fields) -> Dict[str, Any]:
        site = {
            "html_url": f"https://{owner}.github.io/{repo}/",
            "status": "built",
            "cname": None,
            "custom_404": False,
            "source": {"branch": "main", "path": "/"},
            "build_type": "legacy",
            "public": True,
        }
        site.update(fields)
        self.pages[(owner, repo)] = site
        return site

    def seed_branch(
        self,
        owner: str,
        repo: str,
        branch: str,
        files: Dict[str, str]
    ) -> Tuple[str, str]:
        """Create a branch whose tip commit holds ``files``; returns (commit, tree)."""
        tree_sha = self._sha("t")
        self.trees[tree_sha] = {}
        for path, content in files.items():
            blob_sha = self._sha("b")
            self.blobs[blob_sha] = (content, "utf-8")
            self.trees[tree_sha][path] = blob_sha
        commit_sha = self._sha("c")
        self.commits[commit_sha] = {
            "sha": commit_sha,
            "tree": tree_sha,
            "parents": [],
            "message": "Initial commit",
        }
        self.refs[(owner, repo, f"heads/{branch}")] = commit_sha
        return commit_sha, tree_sha

    def tree_of(self, commit_sha: str) -> Dict[str, str]:
        return self.trees[self.commits[commit_sha]["tree"]]

    # -- Pages site --------------------------------------------------------

    async def create_pages_site(self, owner, repo, source, build_type):
        self._record("create_pages_site", owner=owner, repo=repo,
                     source=source, build_type=build_type)
        if (owner, repo) in self.pages:
            raise GitHubAPIError(
                "GitHub Pages is already enabled.", 409,
                {"message": "GitHub Pages is already enabled."}
            )
        site = self.seed_site(owner, repo, source=dict(source),
                              build_type=build_type, status=None)
        return dict(site)

    async def get_pages(self, owner, repo):
        self._record("get_pages", owner=owner, repo=repo)
        if (owner, repo) not in self.pages:
            raise not_found()
        return dict(self.pages[(owner, repo)])

    async def update_pages(self, owner, repo, changes):
        self._record("update_pages", owner=owner, repo=repo, changes=changes)
        if (owner, repo) not in self.pages:
            raise not_found()
        self.pages[(owner, repo)].update(changes)
        return self.update_response

    async def delete_pages_site(self, owner, repo):
        self._record("delete_pages_site", owner=owner, repo=repo)
        if (owner, repo) not in self.pages:
            raise not_found()
        del self.pages[(owner, repo)]

    # -- Git database ------------------------------------------------------

    async def get_ref(self, owner, repo, ref):
        self._record("get_ref", owner=owner, repo=repo, ref=ref)
        sha = self.refs.get((owner, repo, ref))
        if sha is None:
            raise not_found()
        return {"ref": f"refs/{ref}", "object": {"sha": sha, "type": "commit"}}

    async def get_commit(self, owner, repo, commit_sha):
        self._record("get_commit", owner=owner, repo=repo, commit_sha=commit_sha)
        commit = self.commits.get(commit_sha)
        if commit is None:
            raise not_found()
        return {
            "sha": commit_sha,
            "tree": {"sha": commit["tree"]},
            "parents": [{"sha": p} for p in commit["parents"]],
            "message": commit["message"],
        }

    async def create_blob(self, owner, repo, content, encoding="utf-8"):
        self._record("create_blob", owner=owner, repo=repo,
                     content=content, encoding=encoding)
        sha = self._sha("b")
        self.blobs[sha] = (content, encoding)
        return {"sha": sha, "url": f"https://api.github.com/blobs/{sha}"}

    async def create_tree(self, owner, repo, tree, base_tree=None):
        self._record("create_tree", owner=owner, repo=repo,
                     tree=tree, base_tree=base_tree)
        entries = dict(self.trees[base_tree]) if base_tree else {}
        for item in tree:
            entries[item["path"]] = item["sha"]
        sha = self._sha("t")
        self.trees[sha] = entries
        return {"sha": sha}

    async def create_commit(self, owner, repo, message, tree, parents):
        self._record("create_commit", owner=owner, repo=repo,
                     message=message, tree=tree, parents=parents)
        sha = self._sha("c")
        self.commits[sha] = {
            "sha": sha,
            "tree": tree,
            "parents": list(parents),
            "message": message,
        }
        return {"sha": sha}

    async def update_ref(self, owner, repo, ref, sha, force=False):
        self._record("update_ref", owner=owner, repo=repo, ref=ref, sha=sha, force=force)
        current = self.refs.get((owner, repo, ref))
        if current is None:
            raise not_found()
        if not force and current not in self.commits[sha]["parents"]:
            raise GitHubAPIError(
                "Update is not a fast forward", 422,
                {"message": "Update is not a fast forward"}
            )
        self.refs[(owner, repo, ref)] = sha
        return {"ref": f"refs/{ref}", "object": {"sha": sha, "type": "commit"}}


@pytest.fixture
def github():
    """Fresh fake GitHub API."""
    return FakeGitHubClient()


@pytest.fixture
def pages_tools(github):
    """Dispatcher wired to the fake GitHub API."""
    return PagesTools(github)
