"""Reference map loading.

The reference map lists every class, function and constant declared by the
PhpStorm stubs for one PHP edition. It is generated upstream; we only read
it. Two formats are accepted:

- JSON: {"edition": "7.4", "classes": {...}, "functions": {...}, "constants": {...}}
- PHP: the upstream PhpStormStubsMap.php with its CLASSES / FUNCTIONS /
  CONSTANTS array constants

Anything else fails loudly with StubsMapError. An empty or partial map would
make every built-in look user-defined, and the rewriter would prefix them.
"""
import json
import re
import string
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

KINDS = ('classes', 'functions', 'constants')

# const CLASSES = array ( ... ); or const CLASSES = [ ... ];
PHP_CONST_PATTERN = re.compile(
    r"const\s+(CLASSES|FUNCTIONS|CONSTANTS)\s*=\s*(?:array\s*\(|\[)(.*?)^\s*[\)\]]\s*;",
    re.DOTALL | re.MULTILINE,
)
PHP_ENTRY_PATTERN = re.compile(
    r"'((?:[^'\\]|\\.)*)'\s*=>\s*'((?:[^'\\]|\\.)*)'"
)

# PHP lower-cases function names byte-wise, A-Z only
ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(name: str) -> str:
    """Fold a function name the way PHP does (no Unicode case mapping)."""
    return name.translate(ASCII_LOWER)


class StubsMapError(ValueError):
    """Raised when the reference map is missing or malformed."""


@dataclass(frozen=True)
class StubsMap:
    """Read-only reference map for one PHP edition."""
    classes: Mapping[str, Any]
    functions: Mapping[str, Any]
    constants: Mapping[str, Any]
    edition: Optional[str] = None
    source: Optional[Path] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: Any, source: Optional[Path] = None) -> 'StubsMap':
        """Validate decoded reference data and freeze it.

        Raises:
            StubsMapError: If a kind is missing, is not an object, has a
                non-string key or has no entries
        """
        label = str(source) if source else "<memory>"

        if not isinstance(data, dict):
            raise StubsMapError(
                f"Reference map {label} is malformed "
                f"(expected object, got {type(data).__name__})"
            )

        kinds: Dict[str, Mapping[str, Any]] = {}
        for kind in KINDS:
            symbols = data.get(kind)
            if symbols is None:
                raise StubsMapError(f"Reference map {label} has no '{kind}' section")
            if not isinstance(symbols, dict):
                raise StubsMapError(
                    f"Reference map {label}: '{kind}' must be an object, "
                    f"got {type(symbols).__name__}"
                )
            if not symbols:
                raise StubsMapError(f"Reference map {label}: '{kind}' is empty")
            for name in symbols:
                if not isinstance(name, str) or not name:
                    raise StubsMapError(
                        f"Reference map {label}: invalid {kind} name {name!r}"
                    )
            kinds[kind] = MappingProxyType(dict(symbols))

        edition = data.get('edition')
        return cls(
            classes=kinds['classes'],
            functions=kinds['functions'],
            constants=kinds['constants'],
            edition=str(edition) if edition is not None else None,
            source=source,
        )


def load_stubs_map(path: Optional[Path]) -> StubsMap:
    """Load a reference map from disk.

    No map ships with the package: a partial one would classify real
    built-ins as user code without any error.

    Args:
        path: JSON or PhpStormStubsMap.php file

    Returns:
        Validated StubsMap

    Raises:
        StubsMapError: If no path is given, or the file is missing,
            unreadable or malformed
    """
    if path is None:
        raise StubsMapError(
            "No reference map configured. Set SCOPER_STUBS_MAP to a "
            "PhpStormStubsMap.php or JSON reference map for your PHP edition."
        )
    path = Path(path)

    if not path.is_file():
        raise StubsMapError(f"Reference map not found: {path}")

    try:
        content = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise StubsMapError(f"Cannot read reference map {path}: {e}") from e

    if path.suffix.lower() == '.php':
        data = parse_php_stubs_map(content, path)
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StubsMapError(f"Error decoding JSON in {path.name}: {e}") from e

    return StubsMap.from_dict(data, source=path)


def parse_php_stubs_map(content: str, path: Optional[Path] = None) -> Dict[str, Dict[str, str]]:
    """Read the array constants out of an upstream PhpStormStubsMap.php.

    Only single-quoted 'name' => 'file' pairs are understood, which is the
    only form the upstream generator writes.
    """
    data: Dict[str, Dict[str, str]] = {}

    for match in PHP_CONST_PATTERN.finditer(content):
        kind = match.group(1).lower()
        data[kind] = {
            _unquote(name): _unquote(stub_file)
            for name, stub_file in PHP_ENTRY_PATTERN.findall(match.group(2))
        }

    if not data:
        label = path.name if path else "<memory>"
        raise StubsMapError(f"No CLASSES/FUNCTIONS/CONSTANTS arrays found in {label}")

    return data


def _unquote(value: str) -> str:
    """Undo PHP single-quoted string escapes (\\\\ and \\')."""
    return re.sub(r"\\([\\'])", r"\1", value)
