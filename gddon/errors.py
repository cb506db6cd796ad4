"""Error types raised by gddon components.

Components raise these; only the command line catches them, reports the
message and exits non-zero.
"""

from __future__ import annotations


class GddonError(Exception):
    """Base class for every failure gddon reports to the user."""


class FileSystemError(GddonError):
    """A filesystem read, write or permission failure."""


class VCSError(GddonError):
    """A clone, fetch, pull or checkout failed in git."""


class ParseError(GddonError):
    """Structured data could not be parsed."""


class ManifestParseError(ParseError):
    """The manifest file is not valid JSON or does not match the schema."""


class ConfigError(GddonError):
    """Missing or malformed configuration (settings file, git remote)."""


class AmbiguousAddonError(GddonError):
    """Link inference found zero or more than one addon folder."""

    def __init__(self, package_name: str, candidates: list[str]):
        self.package_name = package_name
        self.candidates = list(candidates)
        if not self.candidates:
            message = f"No addon folder found in package '{package_name}'"
        else:
            found = ", ".join(self.candidates)
            message = (
                f"Multiple addons not yet supported in package '{package_name}' "
                f"(found: {found})"
            )
        super().__init__(message)


class DuplicatePackageError(GddonError):
    """A package with the same name, origin or linked folder already exists."""


class PackageNotFoundError(GddonError):
    """No package with the requested name is in the manifest."""


class NotInitializedError(GddonError):
    """Required project scaffolding is missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Project is not initialized for gddon, missing: "
            + ", ".join(self.missing)
            + " (run 'gddon init')"
        )


class ProjectNotFoundError(GddonError):
    """No Godot project marker was found from the working directory upward."""


class InvalidPackageNameError(GddonError):
    """A package or addon name is not a single plain folder name."""
