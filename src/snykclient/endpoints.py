"""Request templates for the Snyk v1 API endpoints.

Each function maps typed parameters to a RequestDescriptor without
touching the network. Identifiers are required and are encoded as a
single path segment each.

API Documentation: https://snyk.docs.apiary.io/
"""

from typing import Any
from urllib.parse import quote

from snykclient.models import ImportTarget, ManifestFile, RequestDescriptor


def _segment(name: str, value: str) -> str:
    """Validate an identifier and percent-encode it as one path segment."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
    return quote(value, safe="")


def verify_access(org_id: str) -> RequestDescriptor:
    """List organization members, used as an access check."""
    return RequestDescriptor(
        method="GET",
        path=f"org/{_segment('org_id', org_id)}/members",
    )


def import_project(
    org_id: str,
    integration_id: str,
    owner: str,
    name: str,
    branch: str,
) -> RequestDescriptor:
    """Import a repository into an organization through an integration.

    Args:
        org_id: Organization ID.
        integration_id: Integration ID.
        owner: Repository owner.
        name: Repository name.
        branch: Branch to import.

    Returns:
        POST descriptor with the import target as body.
    """
    org = _segment("org_id", org_id)
    integration = _segment("integration_id", integration_id)
    return RequestDescriptor(
        method="POST",
        path=f"org/{org}/integrations/{integration}/import",
        body=ImportTarget(owner=owner, name=name, branch=branch).to_body(),
    )


def import_project_results(org_id: str, integration_id: str, job_id: str) -> RequestDescriptor:
    """Fetch one snapshot of an import job."""
    org = _segment("org_id", org_id)
    integration = _segment("integration_id", integration_id)
    job = _segment("job_id", job_id)
    return RequestDescriptor(
        method="POST",
        path=f"org/{org}/integrations/{integration}/import/{job}",
    )


def list_all_projects(org_id: str) -> RequestDescriptor:
    return RequestDescriptor(
        method="GET",
        path=f"org/{_segment('org_id', org_id)}/projects",
    )


def list_orgs() -> RequestDescriptor:
    return RequestDescriptor(method="GET", path="orgs")


def list_issues(
    org_id: str,
    project_id: str,
    filters: dict[str, Any] | None = None,
) -> RequestDescriptor:
    """List project issues (deprecated endpoint, see list_aggregated_issues)."""
    org = _segment("org_id", org_id)
    project = _segment("project_id", project_id)
    return RequestDescriptor(
        method="POST",
        path=f"org/{org}/project/{project}/issues",
        body=filters or {},
    )


def list_aggregated_issues(
    org_id: str,
    project_id: str,
    filters: dict[str, Any] | None = None,
) -> RequestDescriptor:
    """List project issues in aggregated form."""
    org = _segment("org_id", org_id)
    project = _segment("project_id", project_id)
    return RequestDescriptor(
        method="POST",
        path=f"org/{org}/project/{project}/aggregated-issues",
        body=filters or {},
    )


def test_npm_file(org_id: str, target: str) -> RequestDescriptor:
    """Test the contents of a package.json file.

    Args:
        org_id: Organization to test the package with.
        target: Contents of the primary manifest.

    Returns:
        POST descriptor with the organization as query parameter.
    """
    _segment("org_id", org_id)
    return RequestDescriptor(
        method="POST",
        path="test/npm",
        params={"org": org_id},
        body=ManifestFile(contents=target).to_body(),
    )
