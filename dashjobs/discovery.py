"""Package tree scanning for dashboard and job files."""

from __future__ import annotations

import asyncio
import os
from functools import partial
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Union

from .errors import DiscoveryError
from .logging import get_logger
from .models import as_path_list

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}

PackagesPath = Union[str, Path, Sequence[Union[str, Path]]]


def _is_excluded(entry: Path) -> bool:
    return entry.name in _EXCLUDED_DIRS or entry.name.startswith(".")


def _sorted_entries(directory: Path) -> List[Path]:
    return sorted(directory.iterdir(), key=lambda entry: entry.name)


def _iter_packages(root: Path) -> Iterator[Path]:
    for entry in _sorted_entries(root):
        if entry.is_dir() and not _is_excluded(entry):
            yield entry


def _iter_items(package: Path, item_type: str, extension: str) -> Iterator[Path]:
    item_dir = package / item_type
    if not item_dir.is_dir():
        return
    for entry in _sorted_entries(item_dir):
        if entry.is_file() and entry.name.endswith(extension):
            yield entry
        elif entry.is_dir() and not _is_excluded(entry):
            # jobs/<name>/<name>.py layout
            candidate = entry / f"{entry.name}{extension}"
            if candidate.is_file():
                yield candidate


def resolve_candidates(
    items: Iterable[str], name: str, item_type: str, extension: str
) -> List[str]:
    """Return the items that implement ``name``, preserving discovery order.

    ``name`` may be namespaced as ``package#item`` to pick an item from a
    specific package when several packages ship one with the same name.
    """
    if "#" in name:
        package, item_name = name.split("#", 1)
        prefix = f"/{package}/{item_type}/"
    else:
        item_name = name
        prefix = f"/{item_type}/"

    suffixes = (
        f"{prefix}{item_name}/{item_name}{extension}",
        f"{prefix}{item_name}{extension}",
    )
    return [item for item in items if item.replace(os.sep, "/").endswith(suffixes)]


class PackageScanner:
    """Walks package roots to find the files contributed by each package."""

    def __init__(self) -> None:
        self.logger = get_logger("discovery")

    def get(self, packages_path: PackagesPath, item_type: str, extension: str) -> List[str]:
        """Return absolute paths of ``item_type`` files across all packages.

        Roots are scanned in the order given; packages and items within a
        root are sorted by name.
        """
        found: List[str] = []
        for root in as_path_list(packages_path):
            root_path = root.expanduser().resolve()
            if not root_path.is_dir():
                raise DiscoveryError(f"Packages path not found: {root}")
            try:
                for package in _iter_packages(root_path):
                    found.extend(
                        item.as_posix() for item in _iter_items(package, item_type, extension)
                    )
            except OSError as exc:
                raise DiscoveryError(f"Failed to scan {root_path} for {item_type}: {exc}") from exc

        self.logger.debug("Discovered %d %s under %s", len(found), item_type, packages_path)
        return found

    async def get_async(
        self, packages_path: PackagesPath, item_type: str, extension: str
    ) -> List[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(self.get, packages_path, item_type, extension)
        )


__all__ = ["PackageScanner", "PackagesPath", "resolve_candidates"]
