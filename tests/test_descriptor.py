from __future__ import annotations

import json
from pathlib import Path

import pytest

from pkg2html.errors import DescriptorError
from pkg2html.model.descriptor import Dependency, descriptor_from_mapping, load_descriptor


def test_load_descriptor_defaults_root_to_file_dir(tmp_path: Path) -> None:
    path = tmp_path / "descriptor.json"
    path.write_text(
        json.dumps(
            {
                "name": "geometry",
                "description": "Geometry tools.",
                "categories": [{"category": "Shapes", "functions": ["area", "shapes.circle"]}],
                "depends": ["core", {"package": "linear", "constraint": ">= 2.0"}],
                "systemrequirements": "libgeos",
            }
        )
    )

    desc = load_descriptor(path)

    assert desc.name == "geometry"
    assert desc.root == tmp_path
    assert desc.packinfo_dir == tmp_path / "packinfo"
    assert desc.categories[0].functions == ("area", "shapes.circle")
    assert desc.depends == (Dependency("core"), Dependency("linear", ">= 2.0"))
    assert desc.system_requirements == "libgeos"
    assert desc.version == ""


def test_explicit_root_is_relative_to_file(tmp_path: Path) -> None:
    (tmp_path / "installed").mkdir()
    path = tmp_path / "meta" / "descriptor.json"
    path.parent.mkdir()
    path.write_text(json.dumps({"name": "p", "categories": [], "root": "../installed"}))

    assert load_descriptor(path).root == (tmp_path / "installed").resolve()


@pytest.mark.parametrize(
    "data",
    [
        {"categories": []},
        {"name": "p"},
        {"name": "p", "categories": [{"category": "A"}]},
        {"name": "p", "categories": [{"category": "A", "functions": [1]}]},
        {"name": "p", "categories": [], "depends": [3]},
        {"name": "p", "categories": [], "help": ["x"]},
        {"name": "p", "categories": [], "help": {"f": 3}},
    ],
)
def test_malformed_descriptor(data: dict, tmp_path: Path) -> None:
    with pytest.raises(DescriptorError):
        descriptor_from_mapping(data, root=tmp_path)


def test_unreadable_descriptor(tmp_path: Path) -> None:
    with pytest.raises(DescriptorError, match="cannot read"):
        load_descriptor(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{")
    with pytest.raises(DescriptorError, match="invalid JSON"):
        load_descriptor(bad)


def test_null_help_entries_are_dropped(tmp_path: Path) -> None:
    desc = descriptor_from_mapping(
        {"name": "p", "categories": [], "help": {"f": None, "g": "Does g."}},
        root=tmp_path,
    )
    assert dict(desc.help) == {"g": "Does g."}
