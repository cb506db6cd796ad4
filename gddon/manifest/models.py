"""Manifest data models — packages, links, and revision pins."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import PurePath

from gddon.errors import DuplicatePackageError, InvalidPackageNameError, PackageNotFoundError

LATEST = "latest"


def check_folder_name(name: str, kind: str = "Addon") -> str:
    """Return ``name`` if it is a single plain folder name.

    Raises:
        InvalidPackageNameError: For empty names, ``.``, ``..`` or anything
            with a path separator.
    """
    if name in ("", ".", "..") or "/" in name or "\\" in name or PurePath(name).name != name:
        raise InvalidPackageNameError(f"{kind} name {name!r} must be a plain folder name")
    return name


@dataclass(frozen=True)
class Pin:
    """The revision a package is locked to: ``latest`` or a concrete id."""

    revision: str | None = None

    @classmethod
    def latest(cls) -> "Pin":
        return cls(None)

    @classmethod
    def at(cls, revision: str) -> "Pin":
        if not revision or revision == LATEST:
            raise ValueError(f"Not a concrete revision: {revision!r}")
        return cls(revision)

    @classmethod
    def parse(cls, value: str) -> "Pin":
        """Parse the manifest form. Empty means latest."""
        value = value.strip()
        if not value or value == LATEST:
            return cls.latest()
        return cls(value)

    @property
    def is_latest(self) -> bool:
        return self.revision is None

    def __str__(self) -> str:
        return LATEST if self.revision is None else self.revision


@dataclass(frozen=True)
class Link:
    """Maps a folder of the cached repository onto a folder of the project."""

    source_folder: str
    target_folder: str


@dataclass(frozen=True)
class Package:
    """One externally-versioned addon tracked by the manifest."""

    name: str
    origin: str = ""
    pin: Pin = field(default_factory=Pin.latest)
    links: tuple[Link, ...] = ()

    def evolve(self, **changes) -> "Package":
        """Return a copy with the given fields replaced."""
        if "links" in changes:
            changes["links"] = tuple(changes["links"])
        return replace(self, **changes)

    def links_target(self, target_folder: str) -> bool:
        return any(link.target_folder == target_folder for link in self.links)


@dataclass(frozen=True)
class Manifest:
    """Ordered collection of packages. Names and origins are unique."""

    packages: tuple[Package, ...] = ()

    def names(self) -> list[str]:
        return [p.name for p in self.packages]

    def find(self, name: str) -> Package | None:
        for package in self.packages:
            if package.name == name:
                return package
        return None

    def get(self, name: str) -> Package:
        package = self.find(name)
        if package is None:
            raise PackageNotFoundError(f"No addon named '{name}' in the manifest")
        return package

    def find_by_origin(self, origin: str) -> Package | None:
        if not origin:
            return None
        for package in self.packages:
            if package.origin == origin:
                return package
        return None

    def find_by_target(self, target_folder: str) -> Package | None:
        for package in self.packages:
            if package.links_target(target_folder):
                return package
        return None

    def with_package(self, package: Package) -> "Manifest":
        """Return a manifest with ``package`` appended."""
        if self.find(package.name) is not None:
            raise DuplicatePackageError(f"Addon name '{package.name}' exists!")
        if self.find_by_origin(package.origin) is not None:
            raise DuplicatePackageError(f"Repository '{package.origin}' already exists!")
        return Manifest(packages=self.packages + (package,))

    def replace(self, package: Package) -> "Manifest":
        """Return a manifest with the same-named package swapped for ``package``."""
        self.get(package.name)
        return Manifest(
            packages=tuple(package if p.name == package.name else p for p in self.packages)
        )
