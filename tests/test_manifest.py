"""Tests for the manifest models and store."""

import json
import tempfile
from pathlib import Path

import pytest

from gddon.errors import (
    DuplicatePackageError,
    InvalidPackageNameError,
    ManifestParseError,
    PackageNotFoundError,
)
from gddon.manifest import Link, Manifest, ManifestStore, Package, Pin, check_folder_name


def _sample_manifest() -> Manifest:
    return Manifest(
        packages=(
            Package(
                name="dialogue",
                origin="https://example.com/dialogue.git",
                pin=Pin.at("0123456789abcdef0123456789abcdef01234567"),
                links=(Link("addons/dialogue", "addons/dialogue"),),
            ),
            Package(name="local-tool", origin="", pin=Pin.latest(), links=()),
        )
    )


# --- Pin ---


def test_pin_parse():
    assert Pin.parse("latest").is_latest
    assert Pin.parse("").is_latest
    assert Pin.parse("abc123").revision == "abc123"
    assert str(Pin.latest()) == "latest"
    assert str(Pin.at("abc123")) == "abc123"


def test_pin_at_rejects_latest():
    with pytest.raises(ValueError):
        Pin.at("latest")
    with pytest.raises(ValueError):
        Pin.at("")


# --- Manifest ---


def test_check_folder_name():
    assert check_folder_name("my-addon") == "my-addon"
    assert check_folder_name("addon.v2") == "addon.v2"
    for name in ("", ".", "..", "../x", "a/b", "a\\b"):
        with pytest.raises(InvalidPackageNameError):
            check_folder_name(name)


def test_with_package_rejects_duplicate_name():
    manifest = _sample_manifest()
    with pytest.raises(DuplicatePackageError):
        manifest.with_package(Package(name="dialogue", origin="https://other/repo.git"))


def test_with_package_rejects_duplicate_origin():
    manifest = _sample_manifest()
    with pytest.raises(DuplicatePackageError):
        manifest.with_package(Package(name="other", origin="https://example.com/dialogue.git"))


def test_empty_origins_are_not_duplicates():
    manifest = _sample_manifest().with_package(Package(name="another-local"))
    assert manifest.names() == ["dialogue", "local-tool", "another-local"]


def test_replace_keeps_position():
    manifest = _sample_manifest()
    updated = manifest.replace(manifest.get("dialogue").evolve(pin=Pin.at("feedface")))
    assert updated.names() == ["dialogue", "local-tool"]
    assert updated.get("dialogue").pin.revision == "feedface"
    # original untouched
    assert manifest.get("dialogue").pin.revision.startswith("0123")


def test_get_unknown_package():
    with pytest.raises(PackageNotFoundError):
        Manifest().get("missing")


def test_find_by_target():
    manifest = _sample_manifest()
    assert manifest.find_by_target("addons/dialogue").name == "dialogue"
    assert manifest.find_by_target("addons/other") is None


# --- Store ---


def test_load_creates_default_manifest():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        manifest = ManifestStore(path).load()

        assert manifest.packages == ()
        assert path.read_text() == '{\n  "packages": []\n}'


def test_save_load_round_trip_is_byte_identical():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        store = ManifestStore(path)
        store.save(_sample_manifest())
        first = path.read_bytes()

        store.save(store.load())
        assert path.read_bytes() == first
        assert store.load() == _sample_manifest()


def test_save_uses_stable_key_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        ManifestStore(path).save(_sample_manifest())

        data = json.loads(path.read_text())
        package = data["packages"][0]
        assert list(package) == ["name", "git_repo", "commit", "links"]
        assert list(package["links"][0]) == ["target_folder", "source_folder"]
        assert data["packages"][1]["commit"] == "latest"


def test_save_leaves_no_temp_files():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        store = ManifestStore(path)
        store.save(_sample_manifest())
        store.save(Manifest())

        assert [p.name for p in Path(tmpdir).iterdir()] == [".gddon"]


def test_load_tolerates_missing_optional_fields():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        path.write_text('{"packages": [{"name": "bare"}]}')

        package = ManifestStore(path).load().get("bare")
        assert package.origin == ""
        assert package.pin.is_latest
        assert package.links == ()


def test_load_null_packages():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        path.write_text('{"packages": null}')
        assert ManifestStore(path).load() == Manifest()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"packages": {}}',
        '{"packages": [{"git_repo": "x"}]}',
        '{"packages": [{"name": ".."}]}',
        '{"packages": [{"name": "a/b"}]}',
        '{"packages": [{"name": "a", "commit": 5}]}',
        '{"packages": [{"name": "a", "links": [{"target_folder": "addons/a"}]}]}',
    ],
)
def test_load_rejects_malformed_manifest(content):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / ".gddon"
        path.write_text(content)
        with pytest.raises(ManifestParseError):
            ManifestStore(path).load()
