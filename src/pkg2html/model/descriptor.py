"""Package descriptor: the parsed function inventory and package metadata."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pkg2html.errors import DescriptorError


@dataclass(frozen=True, slots=True)
class Dependency:
    package: str
    constraint: str = ""  # e.g. ">= 4.0.0"
    url: str | None = None


@dataclass(frozen=True, slots=True)
class Category:
    category: str
    functions: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    name: str
    description: str
    categories: tuple[Category, ...]
    root: Path
    version: str = ""
    date: str = ""
    title: str = ""
    author: str = ""
    maintainer: str = ""
    license: str = ""
    url: str = ""
    depends: tuple[Dependency, ...] = ()
    system_requirements: str = ""
    build_requires: str = ""
    # Help text per qualified name, used by the default page renderer
    help: Mapping[str, str] = field(default_factory=dict)

    @property
    def packinfo_dir(self) -> Path:
        return self.root / "packinfo"

    @property
    def doc_dir(self) -> Path:
        return self.root / "doc"


_STRING_FIELDS = (
    "version",
    "date",
    "title",
    "author",
    "maintainer",
    "license",
    "url",
)


def _expect(data: Mapping[str, Any], key: str, kind: type, path: Path | None) -> Any:
    value = data.get(key)
    if not isinstance(value, kind):
        raise DescriptorError(path, f"'{key}' must be a {kind.__name__}")
    return value


def _parse_dependency(raw: Any, path: Path | None) -> Dependency:
    if isinstance(raw, str):
        return Dependency(package=raw)
    if isinstance(raw, Mapping) and isinstance(raw.get("package"), str):
        return Dependency(
            package=raw["package"],
            constraint=str(raw.get("constraint", "") or ""),
            url=raw.get("url") or None,
        )
    raise DescriptorError(path, f"malformed dependency entry: {raw!r}")


def descriptor_from_mapping(
    data: Mapping[str, Any], *, root: Path, path: Path | None = None
) -> PackageDescriptor:
    """Build a PackageDescriptor from decoded JSON data."""
    name = _expect(data, "name", str, path)
    description = str(data.get("description", "") or "")

    categories: list[Category] = []
    for raw in _expect(data, "categories", list, path):
        if not isinstance(raw, Mapping):
            raise DescriptorError(path, f"malformed category entry: {raw!r}")
        label = _expect(raw, "category", str, path)
        functions = _expect(raw, "functions", list, path)
        if not all(isinstance(fn, str) for fn in functions):
            raise DescriptorError(path, f"function names of category '{label}' must be strings")
        categories.append(Category(category=label, functions=tuple(functions)))

    help_texts = data.get("help", {}) or {}
    if not isinstance(help_texts, Mapping):
        raise DescriptorError(path, "'help' must be an object")
    help_map: dict[str, str] = {}
    for fn, text in help_texts.items():
        if text is None:
            continue
        if not isinstance(text, str):
            raise DescriptorError(path, f"help text of '{fn}' must be a string")
        help_map[str(fn)] = text

    extra = {key: str(data.get(key, "") or "") for key in _STRING_FIELDS}
    return PackageDescriptor(
        name=name,
        description=description,
        categories=tuple(categories),
        root=root,
        depends=tuple(_parse_dependency(dep, path) for dep in data.get("depends", []) or []),
        system_requirements=str(data.get("systemrequirements", "") or ""),
        build_requires=str(data.get("buildrequires", "") or ""),
        help=help_map,
        **extra,
    )


def load_descriptor(path: Path) -> PackageDescriptor:
    """Load a descriptor JSON file.

    ``root`` in the file is resolved against the file's directory; when absent
    the file's directory itself is the package root.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DescriptorError(path, f"cannot read file ({exc})") from exc
    except json.JSONDecodeError as exc:
        raise DescriptorError(path, f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise DescriptorError(path, "top level must be an object")

    root = path.parent
    if data.get("root"):
        root = (path.parent / str(data["root"])).resolve()
    return descriptor_from_mapping(data, root=root, path=path)


__all__ = [
    "Category",
    "Dependency",
    "PackageDescriptor",
    "descriptor_from_mapping",
    "load_descriptor",
]
