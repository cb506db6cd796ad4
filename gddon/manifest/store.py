"""Manifest store — reads and writes the project's ``.gddon`` file.

The file is JSON with a single ``packages`` key. Serialization is
deterministic so that saving a freshly loaded manifest reproduces the same
bytes.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from gddon.errors import FileSystemError, InvalidPackageNameError, ManifestParseError
from gddon.manifest.models import Link, Manifest, Package, Pin, check_folder_name

DEFAULT_MANIFEST = Manifest()


class ManifestStore:
    """Loads and persists the manifest at a fixed path."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Manifest:
        """Read the manifest, writing the default one first if absent.

        Raises:
            FileSystemError: If the file cannot be read or created.
            ManifestParseError: If the content is not a valid manifest.
        """
        if not self.path.exists():
            self.save(DEFAULT_MANIFEST)

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Couldn't read {self.path.name} file: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParseError(
                f"Couldn't parse {self.path.name} file (line {e.lineno}, "
                f"column {e.colno}): {e.msg}"
            ) from e
        return manifest_from_dict(data)

    def save(self, manifest: Manifest) -> None:
        """Atomically overwrite the manifest file."""
        text = dumps(manifest)
        temp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f"{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(text)
            os.chmod(temp_path, 0o644)
            os.replace(temp_path, self.path)
        except OSError as e:
            raise FileSystemError(f"Couldn't write {self.path.name} file: {e}") from e
        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)


def dumps(manifest: Manifest) -> str:
    return json.dumps(manifest_to_dict(manifest), indent=2, ensure_ascii=False)


def manifest_to_dict(manifest: Manifest) -> dict:
    return {"packages": [_package_to_dict(p) for p in manifest.packages]}


def manifest_from_dict(data) -> Manifest:
    if not isinstance(data, dict):
        raise ManifestParseError("Manifest must be a JSON object")
    packages = data.get("packages")
    if packages is None:
        return Manifest()
    if not isinstance(packages, list):
        raise ManifestParseError("'packages' must be a list")
    return Manifest(packages=tuple(_dict_to_package(p, i) for i, p in enumerate(packages)))


def _package_to_dict(package: Package) -> dict:
    return {
        "name": package.name,
        "git_repo": package.origin,
        "commit": str(package.pin),
        "links": [
            {"target_folder": link.target_folder, "source_folder": link.source_folder}
            for link in package.links
        ],
    }


def _dict_to_package(data, index: int) -> Package:
    where = f"packages[{index}]"
    if not isinstance(data, dict):
        raise ManifestParseError(f"{where} must be an object")

    name = _string(data, "name", where, required=True)
    try:
        check_folder_name(name, kind="Package")
    except InvalidPackageNameError as e:
        raise ManifestParseError(f"{where}.name: {e}") from e
    links = data.get("links") or []
    if not isinstance(links, list):
        raise ManifestParseError(f"{where}.links must be a list")

    return Package(
        name=name,
        origin=_string(data, "git_repo", where),
        pin=Pin.parse(_string(data, "commit", where)),
        links=tuple(_dict_to_link(link, f"{where}.links[{i}]") for i, link in enumerate(links)),
    )


def _dict_to_link(data, where: str) -> Link:
    if not isinstance(data, dict):
        raise ManifestParseError(f"{where} must be an object")
    return Link(
        source_folder=_string(data, "source_folder", where, required=True),
        target_folder=_string(data, "target_folder", where, required=True),
    )


def _string(data: dict, key: str, where: str, required: bool = False) -> str:
    value = data.get(key)
    if value is None:
        if required:
            raise ManifestParseError(f"{where}.{key} is required")
        return ""
    if not isinstance(value, str):
        raise ManifestParseError(f"{where}.{key} must be a string")
    return value
