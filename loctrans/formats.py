"""
JSON and YAML codecs for localization files.

The file extension selects the codec:

    .json        -> json
    .yaml, .yml  -> yaml (PyYAML safe loader/dumper)

Anything else raises UnsupportedFormatError.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import yaml

from loctrans.errors import MalformedDocumentError, UnsupportedFormatError
from loctrans.models import Tree

FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def detect_format(path: Union[str, Path]) -> str:
    """Return the codec name for a file path."""
    extension = Path(path).suffix.lower()
    try:
        return FORMATS[extension]
    except KeyError:
        raise UnsupportedFormatError(str(path), extension) from None


def parse(text: str, fmt: str) -> Tree:
    """Parse a document into a tree.
    
    Raises:
        MalformedDocumentError: If the text does not parse or its root
            is not a mapping.
    """
    try:
        if fmt == "json":
            data = json.loads(text)
        elif fmt == "yaml":
            data = yaml.safe_load(text)
        else:
            raise UnsupportedFormatError("<text>", fmt)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedDocumentError(f"Invalid {fmt.upper()} document: {e}") from e
    
    # An empty YAML file loads as None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"Expected a key-value mapping at the document root, got {type(data).__name__}"
        )
    return data


def serialize(tree: Tree, fmt: str) -> str:
    """Render a tree back to text."""
    if fmt == "json":
        return json.dumps(tree, indent=2, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(tree, allow_unicode=True, sort_keys=False)
    raise UnsupportedFormatError("<tree>", fmt)


def load_file(path: Union[str, Path]) -> tuple[Tree, str]:
    """Read and parse a localization file.
    
    The format is detected before the file is read, so unsupported
    files fail without any I/O.
    
    Returns:
        (tree, format name)
    """
    path = Path(path)
    fmt = detect_format(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(f"{path}: not valid UTF-8: {e}") from e
    try:
        return parse(text, fmt), fmt
    except MalformedDocumentError as e:
        raise MalformedDocumentError(f"{path}: {e}") from e


def save_file(path: Union[str, Path], tree: Tree, fmt: str) -> Path:
    """Serialize a tree and write it, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(tree, fmt), encoding="utf-8")
    return path
