"""Symbol tables built from the reference map and its corrections."""
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Mapping

from .corrections import MISSING_CLASSES, MISSING_CONSTANTS, MISSING_FUNCTIONS, flatten
from .stubs_map import StubsMap, ascii_lower


@dataclass(frozen=True)
class SymbolTable:
    """Immutable set of built-in names for one symbol kind.

    Case-insensitive tables fold keys and probes with ASCII-only lower-casing.
    """
    names: FrozenSet[str]
    case_sensitive: bool = True

    @classmethod
    def build(cls, reference: Iterable[str], corrections: Iterable[str],
              case_sensitive: bool = True) -> 'SymbolTable':
        names = set(reference)
        names.update(corrections)
        if not case_sensitive:
            names = {ascii_lower(name) for name in names}
        return cls(names=frozenset(names), case_sensitive=case_sensitive)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if not self.case_sensitive:
            name = ascii_lower(name)
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)


class SymbolRegistry:
    """The three symbol tables for one PHP edition.

    Class and constant names match exactly. PHP resolves class names
    case-insensitively too, but the stubs map is keyed verbatim so class
    lookups stay exact. Function names fold case, as PHP does.
    """

    def __init__(self, stubs_map: StubsMap, classes: SymbolTable,
                 functions: SymbolTable, constants: SymbolTable):
        self.stubs_map = stubs_map
        self.classes = classes
        self.functions = functions
        self.constants = constants

    @classmethod
    def build(cls, stubs_map: StubsMap,
              missing_classes: Mapping[str, Iterable[str]] = MISSING_CLASSES,
              missing_functions: Mapping[str, Iterable[str]] = MISSING_FUNCTIONS,
              missing_constants: Mapping[str, Iterable[str]] = MISSING_CONSTANTS) -> 'SymbolRegistry':
        """Union each reference map kind with its correction list."""
        return cls(
            stubs_map=stubs_map,
            classes=SymbolTable.build(stubs_map.classes, flatten(missing_classes)),
            functions=SymbolTable.build(stubs_map.functions, flatten(missing_functions),
                                        case_sensitive=False),
            constants=SymbolTable.build(stubs_map.constants, flatten(missing_constants)),
        )

    def is_class_internal(self, name: str) -> bool:
        return name in self.classes

    def is_function_internal(self, name: str) -> bool:
        return name in self.functions

    def is_constant_internal(self, name: str) -> bool:
        return name in self.constants

    def stats(self) -> dict:
        """Table sizes and where the reference data came from.

        Returns:
            Dictionary with per-kind counts, edition and source path
        """
        source = self.stubs_map.source
        return {
            "classes": len(self.classes),
            "functions": len(self.functions),
            "constants": len(self.constants),
            "edition": self.stubs_map.edition,
            "source": str(source) if source else None,
        }
