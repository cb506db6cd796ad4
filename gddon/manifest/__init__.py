"""Manifest — the persisted list of tracked addon packages.

Packages are immutable values; flows produce updated copies and write them
back into the manifest by name.
"""

from gddon.manifest.models import LATEST, Link, Manifest, Package, Pin, check_folder_name
from gddon.manifest.store import ManifestStore

__all__ = [
    "LATEST",
    "Link",
    "Manifest",
    "ManifestStore",
    "Package",
    "Pin",
    "check_folder_name",
]
