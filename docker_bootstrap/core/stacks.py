"""Compose stack discovery and naming."""

import logging
import re
from pathlib import Path
from typing import Union

import yaml

from .constants import COMPOSE_FILE_PATTERNS
from ..models.stack import ComposeStack
from ..services.exceptions import StackDiscoveryError

logger = logging.getLogger(__name__)

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9_-]+")


def normalize_stack_name(name: str) -> str:
    """Turn an arbitrary string into a valid compose project name.

    Compose project names are lowercase and may only contain letters,
    digits, dashes and underscores, starting with a letter or digit.
    """
    normalized = _INVALID_NAME_CHARS.sub("-", name.lower()).strip("-_")
    return normalized


def derive_stack_name(compose_file: Union[str, Path], top_dir: Union[str, Path]) -> str:
    """Name a stack after the directory holding its compose file.

    Files placed directly in the top-level stack folder are named after
    the file itself instead:

    >>> derive_stack_name("docker/my-app/docker-compose.yml", "docker")
    'my-app'
    >>> derive_stack_name("docker/foo.yml", "docker")
    'foo'
    """
    compose_file = Path(compose_file)
    parent = compose_file.parent
    if parent == Path(top_dir):
        raw_name = compose_file.stem
    else:
        raw_name = parent.name
    name = normalize_stack_name(raw_name)
    if not name:
        raise StackDiscoveryError(f"Cannot derive a stack name for {compose_file}")
    return name


def _is_compose_document(path: Path) -> bool:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise StackDiscoveryError(f"{path} is not valid YAML: {e}") from e
    except OSError as e:
        raise StackDiscoveryError(f"Unable to read {path}: {e}") from e
    return isinstance(data, dict) and isinstance(data.get("services"), dict)


def find_compose_files(stacks_dir: Path) -> list[Path]:
    """All YAML files under ``stacks_dir``, sorted by path."""
    files = set()
    for pattern in COMPOSE_FILE_PATTERNS:
        files.update(p for p in stacks_dir.rglob(pattern) if p.is_file())
    return sorted(files)


def discover_stacks(root: Path, subdir: str) -> list[ComposeStack]:
    """Find the compose stacks under ``root/subdir``.

    Every ``*.yml``/``*.yaml`` file with a top-level ``services`` mapping is a
    stack. Other YAML files (service configs living next to a compose file)
    are skipped. When two files derive the same stack name the first one in
    path order wins.

    Args:
        root: Checkout of the stack repository
        subdir: Top-level folder holding the stacks

    Returns:
        Stacks in path order

    Raises:
        StackDiscoveryError: If the folder is missing or a file is not valid YAML
    """
    stacks_dir = Path(root) / subdir
    if not stacks_dir.is_dir():
        raise StackDiscoveryError(f"Stack directory {stacks_dir} does not exist")

    stacks: list[ComposeStack] = []
    seen: dict[str, Path] = {}
    for path in find_compose_files(stacks_dir):
        if not _is_compose_document(path):
            logger.warning(f"Skipping {path}: no 'services' section")
            continue

        name = derive_stack_name(path, stacks_dir)
        if name in seen:
            logger.warning(f"Skipping {path}: stack name '{name}' already used by {seen[name]}")
            continue

        seen[name] = path
        stacks.append(ComposeStack(name=name, path=path))
    return stacks
