# Symbol types answered by a semantic provider: declared types and their members.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from disposegen.findings.models import Location
from disposegen.work.models import Accessibility


class TypeKind(str, Enum):
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    RECORD = "record"
    ENUM = "enum"


class MemberKind(str, Enum):
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    EVENT = "event"
    OTHER = "other"


@dataclass(frozen=True)
class TypeSymbol:
    """
    A named type in the analyzed universe.

    base_names holds the qualified names of the base list entries, in
    declaration order. Names that could not be resolved are kept as written
    and simply never match a known type.
    """

    name: str
    namespace: str = ""
    kind: TypeKind = TypeKind.CLASS
    accessibility: Accessibility = Accessibility.NOT_SPECIFIED
    base_names: Tuple[str, ...] = ()
    is_partial: bool = False
    containing_type: Optional[str] = None
    location: Optional[Location] = field(default=None, compare=False)

    @property
    def qualified_name(self) -> str:
        if self.containing_type:
            return f"{self.containing_type}.{self.name}"
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name


@dataclass(frozen=True)
class MemberSymbol:
    """A member declared directly on a type."""

    name: str
    kind: MemberKind
    parameter_count: int = 0
    type_parameter_count: int = 0
    returns_void: bool = False
    declared_type: Optional[str] = None
    is_static: bool = False
    location: Optional[Location] = field(default=None, compare=False)

    @property
    def is_instance_data(self) -> bool:
        """True for non-static fields and properties."""
        return self.kind in (MemberKind.FIELD, MemberKind.PROPERTY) and not self.is_static
