"""Data models for snykclient."""

from snykclient.models.project import ImportTarget, ManifestFile
from snykclient.models.request import RequestDescriptor

__all__ = [
    "ImportTarget",
    "ManifestFile",
    "RequestDescriptor",
]
