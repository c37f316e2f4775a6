import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from pkg2html.model.descriptor import PackageDescriptor, descriptor_from_mapping  # noqa: E402


@pytest.fixture
def isolate_logging():
    """Isolate logging configuration between tests.

    The CLI reconfigures the root logger; restore it afterwards so later
    tests see the handlers pytest installed.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


@pytest.fixture
def package_root(tmp_path: Path) -> Path:
    """An installed-package directory with packinfo/NEWS, packinfo/COPYING and doc/."""
    root = tmp_path / "pkgsrc"
    (root / "packinfo").mkdir(parents=True)
    (root / "doc").mkdir()
    (root / "packinfo" / "NEWS").write_text("Summary of changes\n * fixed <bugs> & more\n")
    (root / "packinfo" / "COPYING").write_text("GNU GENERAL PUBLIC LICENSE\n")
    return root


@pytest.fixture
def make_descriptor(package_root: Path) -> Callable[..., PackageDescriptor]:
    def _make(**overrides: Any) -> PackageDescriptor:
        data: dict[str, Any] = {
            "name": "signal",
            "description": "Signal processing tools. Filters and more.",
            "version": "1.4.5",
            "date": "2024-01-02",
            "author": "A. Author",
            "maintainer": "M. Maintainer <m@example.org>",
            "license": "GPLv3+",
            "url": "https://example.org/signal",
            "depends": [{"package": "core", "constraint": ">= 6.1.0"}],
            "categories": [
                {"category": "Filtering", "functions": ["filter2", "sigproc.medfilt"]},
                {"category": "Classes", "functions": ["sigproc.@Window/apply"]},
            ],
            "help": {
                "filter2": "Apply a 2-D filter.\nWorks on matrices.",
                "sigproc.medfilt": "Median filter.  Removes spikes.",
                "sigproc.@Window/apply": "",
            },
        }
        data.update(overrides)
        return descriptor_from_mapping(data, root=package_root)

    return _make
