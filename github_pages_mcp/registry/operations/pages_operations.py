"""
GitHub Pages operation registrations.

Declares the five Pages tools (schema, input model, handler) and
registers them in a fixed order.

Every handler receives the injected GitHub client and a validated input
model and returns an OperationResult; GitHub API failures are caught here
and never propagate to the dispatcher.
"""

import asyncio
import logging
from typing import Any, Dict

from ...clients.github_client import GitHubAPIError
from ...models.pages import (
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
    RepositoryInput,
    UpdateGithubPagesConfigInput,
)
from ...validators import schema as s
from ...validators.validator import FieldViolation, format_enum_violation, format_violations
from ..operation_registry import (
    ErrorKind,
    OperationDescriptor,
    OperationMetadata,
    OperationRegistry,
    OperationResult,
)

logger = logging.getLogger(__name__)

NOT_ENABLED_MESSAGE = "GitHub Pages is not enabled for this repository"
NO_FILES_MESSAGE = "No files provided for deployment"

BLOB_MODE = "100644"


def _upstream_failure(operation: str, error: GitHubAPIError) -> OperationResult:
    logger.warning(
        f"{operation} failed: {error.message} (status: {error.status_code})"
    )
    return OperationResult.failure(
        ErrorKind.UPSTREAM,
        error.message,
        details=error.response_body,
    )


# ============================================================================
# Operation Handlers
# ============================================================================

async def enable_github_pages_handler(
    client: Any,
    params: EnableGithubPagesInput
) -> OperationResult:
    """Create the Pages site, defaulting path to "/" and build type to legacy."""
    source = {
        "branch": params.source.branch,
        "path": DEFAULT_SOURCE_PATH if params.source.path is None else params.source.path,
    }
    build_type = params.build_type or DEFAULT_BUILD_TYPE

    try:
        response = await client.create_pages_site(
            params.owner, params.repo, source=source, build_type=build_type
        )
    except GitHubAPIError as e:
        return _upstream_failure("enable_github_pages", e)

    site = PagesSite.from_response(response)
    logger.info(f"Enabled GitHub Pages for {params.owner}/{params.repo}")
    return OperationResult.ok(
        "GitHub Pages enabled successfully",
        url=site.html_url,
        source=site.source_dict(),
        build_type=site.build_type,
    )


async def get_github_pages_info_handler(
    client: Any,
    params: RepositoryInput
) -> OperationResult:
    """Read Pages settings; a 404 means Pages is simply not enabled."""
    try:
        response = await client.get_pages(params.owner, params.repo)
    except GitHubAPIError as e:
        if e.is_not_found:
            return OperationResult.failure(ErrorKind.NOT_ENABLED, NOT_ENABLED_MESSAGE)
        return _upstream_failure("get_github_pages_info", e)

    site = PagesSite.from_response(response)
    return OperationResult.ok(
        url=site.html_url,
        status=site.status,
        cname=site.cname,
        custom_404=site.custom_404,
        source=site.source_dict(),
        build_type=site.build_type,
        public=site.public,
    )


async def _create_tree_entry(
    client: Any,
    owner: str,
    repo: str,
    file: FileChange
) -> Dict[str, str]:
    blob = await client.create_blob(owner, repo, content=file.content, encoding=file.encoding)
    return {
        "path": file.path,
        "mode": BLOB_MODE,
        "type": "blob",
        "sha": blob["sha"],
    }


async def deploy_to_github_pages_handler(
    client: Any,
    params: DeployToGithubPagesInput
) -> OperationResult:
    """
    Commit files onto the tip of an existing branch.

    Steps: resolve tip -> read its tree -> create blobs (concurrently) ->
    create tree over the base tree -> create commit -> move the branch.
    The final ref update is not forced; if the branch moved in between,
    GitHub rejects it and the failure is returned as is. Objects created
    before a failure stay unreferenced upstream.
    """
    files = params.files or []
    if not files:
        return OperationResult.failure(ErrorKind.PRECONDITION, NO_FILES_MESSAGE)

    owner, repo = params.owner, params.repo
    ref = f"heads/{params.branch}"

    try:
        ref_data = await client.get_ref(owner, repo, ref)
        parent_sha = ref_data["object"]["sha"]

        parent_commit = await client.get_commit(owner, repo, parent_sha)
        base_tree_sha = parent_commit["tree"]["sha"]

        # gather() keeps results in input order
        tree_items = await asyncio.gather(*[
            _create_tree_entry(client, owner, repo, file) for file in files
        ])

        tree = await client.create_tree(
            owner, repo, tree=list(tree_items), base_tree=base_tree_sha
        )

        commit = await client.create_commit(
            owner,
            repo,
            message=params.message or DEFAULT_COMMIT_MESSAGE,
            tree=tree["sha"],
            parents=[parent_sha],
        )

        await client.update_ref(owner, repo, ref, sha=commit["sha"])
    except GitHubAPIError as e:
        return _upstream_failure("deploy_to_github_pages", e)

    logger.info(
        f"Deployed {len(files)} file(s) to {owner}/{repo}@{params.branch} "
        f"as {commit['sha']}"
    )
    return OperationResult.ok(
        "Files deployed successfully",
        commit_sha=commit["sha"],
        files_deployed=len(files),
    )


async def disable_github_pages_handler(
    client: Any,
    params: RepositoryInput
) -> OperationResult:
    try:
        await client.delete_pages_site(params.owner, params.repo)
    except GitHubAPIError as e:
        return _upstream_failure("disable_github_pages", e)

    logger.info(f"Disabled GitHub Pages for {params.owner}/{params.repo}")
    return OperationResult.ok("GitHub Pages disabled successfully")


async def update_github_pages_config_handler(
    client: Any,
    params: UpdateGithubPagesConfigInput
) -> OperationResult:
    """
    Send only the settings the caller supplied.

    ``cname`` is included whenever the key was given; null or "" clears
    the custom domain.
    """
    changes: Dict[str, Any] = {}

    if params.source is not None:
        path = DEFAULT_SOURCE_PATH if params.source.path is None else params.source.path
        if path not in VALID_SOURCE_PATHS:
            violation = FieldViolation(
                "source.path", format_enum_violation(path, VALID_SOURCE_PATHS)
            )
            return OperationResult.failure(
                ErrorKind.PRECONDITION,
                format_violations([violation]),
                details=[violation.to_dict()],
            )
        changes["source"] = {"branch": params.source.branch, "path": path}

    if params.build_type is not None:
        changes["build_type"] = params.build_type

    if params.cname_provided:
        changes["cname"] = params.cname or None

    try:
        response = await client.update_pages(params.owner, params.repo, changes)
    except GitHubAPIError as e:
        return _upstream_failure("update_github_pages_config", e)

    if response:
        site = PagesSite.from_response(response)
        data = {
            "url": site.html_url,
            "source": site.source_dict(),
            "build_type": site.build_type,
            "cname": site.cname,
        }
    else:
        # 204 No Content: echo what was applied
        data = {
            "url": None,
            "source": changes.get("source"),
            "build_type": changes.get("build_type"),
            "cname": changes.get("cname"),
        }

    logger.info(
        f"Updated GitHub Pages for {params.owner}/{params.repo}: {sorted(changes)}"
    )
    return OperationResult.ok("GitHub Pages configuration updated successfully", **data)


# ============================================================================
# Schemas
# ============================================================================

def _repository_fields() -> Dict[str, s.FieldConstraint]:
    return {
        "owner": s.string("Repository owner (username or organization)"),
        "repo": s.string("Repository name"),
    }


ENABLE_SCHEMA = s.ObjectSchema({
    **_repository_fields(),
    "source": s.obj({
        "branch": s.string("Branch to deploy from (e.g., 'main', 'gh-pages')"),
        "path": s.enum(
            *VALID_SOURCE_PATHS,
            description="Path to deploy from ('/' or '/docs')",
            required=False,
        ),
    }),
    "build_type": s.enum(
        *VALID_BUILD_TYPES,
        description="Build type: 'legacy' for Jekyll or 'workflow' for GitHub Actions",
        required=False,
    ),
})

REPOSITORY_SCHEMA = s.ObjectSchema(_repository_fields())

DEPLOY_SCHEMA = s.ObjectSchema({
    **_repository_fields(),
    "branch": s.string("Branch to deploy to (must match GitHub Pages source branch)"),
    "message": s.optional_string("Commit message for the deployment"),
    "files": s.array(
        s.obj({
            "path": s.string("File path in the repository"),
            "content": s.string("File content (can be base64 encoded for binary files)"),
            "encoding": s.enum(
                *VALID_ENCODINGS,
                description="Content encoding (default: utf-8)",
                required=False,
            ),
        }),
        description="Files to deploy",
        required=False,
    ),
})

UPDATE_SCHEMA = s.ObjectSchema({
    **_repository_fields(),
    "source": s.obj(
        {
            "branch": s.string("Branch to deploy from"),
            "path": s.optional_string("Path to deploy from ('/' or '/docs')"),
        },
        required=False,
    ),
    "build_type": s.enum(
        *VALID_BUILD_TYPES,
        description="Build type: 'legacy' or 'workflow'",
        required=False,
    ),
    "cname": s.optional_string(
        "Custom domain name (e.g., 'example.com'); null or empty removes it",
        nullable=True,
    ),
})


# ============================================================================
# Operation Descriptors
# ============================================================================

ENABLE_GITHUB_PAGES = OperationDescriptor(
    name="enable_github_pages",
    description=(
        "Enable GitHub Pages for a repository. Creates or updates the GitHub Pages "
        "configuration with specified source branch and build settings."
    ),
    input_schema=ENABLE_SCHEMA,
    input_model=EnableGithubPagesInput,
    handler=enable_github_pages_handler,
)

GET_GITHUB_PAGES_INFO = OperationDescriptor(
    name="get_github_pages_info",
    description=(
        "Get the current GitHub Pages configuration and deployment status for a "
        "repository. Returns information about the Pages site URL, build status, "
        "source configuration, and custom domain if configured."
    ),
    input_schema=REPOSITORY_SCHEMA,
    input_model=RepositoryInput,
    handler=get_github_pages_info_handler,
    metadata=OperationMetadata(read_only=True, idempotent=True),
)

DEPLOY_TO_GITHUB_PAGES = OperationDescriptor(
    name="deploy_to_github_pages",
    description=(
        "Deploy files to GitHub Pages by creating commits on the specified branch. "
        "This tool allows you to push content directly to the Pages branch. Note: "
        "The branch must exist and GitHub Pages must be enabled for the repository."
    ),
    input_schema=DEPLOY_SCHEMA,
    input_model=DeployToGithubPagesInput,
    handler=deploy_to_github_pages_handler,
)

DISABLE_GITHUB_PAGES = OperationDescriptor(
    name="disable_github_pages",
    description=(
        "Disable GitHub Pages for a repository. This will take down the published "
        "site and remove the GitHub Pages configuration. The repository content "
        "remains unchanged."
    ),
    input_schema=REPOSITORY_SCHEMA,
    input_model=RepositoryInput,
    handler=disable_github_pages_handler,
    metadata=OperationMetadata(destructive=True, idempotent=True),
)

UPDATE_GITHUB_PAGES_CONFIG = OperationDescriptor(
    name="update_github_pages_config",
    description=(
        "Update the GitHub Pages configuration for a repository. This allows you to "
        "change the source branch, path, build type, or custom domain settings "
        "without disabling and re-enabling Pages."
    ),
    input_schema=UPDATE_SCHEMA,
    input_model=UpdateGithubPagesConfigInput,
    handler=update_github_pages_config_handler,
    metadata=OperationMetadata(idempotent=True),
)

PAGES_OPERATIONS = [
    ENABLE_GITHUB_PAGES,
    GET_GITHUB_PAGES_INFO,
    DEPLOY_TO_GITHUB_PAGES,
    DISABLE_GITHUB_PAGES,
    UPDATE_GITHUB_PAGES_CONFIG,
]


def register_pages_operations(registry: OperationRegistry) -> None:
    """Register all GitHub Pages operations with the registry."""
    registry.register_all(PAGES_OPERATIONS)
    logger.info(f"Registered {len(PAGES_OPERATIONS)} GitHub Pages operations")
