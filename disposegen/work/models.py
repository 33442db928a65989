# Pydantic model for the work item handed from the resolver to the emitter.

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Accessibility(str, Enum):
    """Declared accessibility of a type, as written in front of `partial class`."""

    PUBLIC = "public"
    INTERNAL = "internal"
    PROTECTED = "protected"
    PRIVATE = "private"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED = "private protected"
    NOT_SPECIFIED = ""

    @classmethod
    def from_modifiers(cls, modifiers: list[str]) -> "Accessibility":
        """
        Pick the accessibility out of a declaration's modifier keywords.

        Other modifiers (static, sealed, partial, ...) are ignored. Returns
        NOT_SPECIFIED when no access keyword is present.
        """
        access = [m for m in modifiers if m in ("public", "internal", "protected", "private")]
        if not access:
            return cls.NOT_SPECIFIED
        keywords = set(access)
        if keywords == {"protected", "internal"}:
            return cls.PROTECTED_INTERNAL
        if keywords == {"private", "protected"}:
            return cls.PRIVATE_PROTECTED
        return cls(access[0])


class WorkItem(BaseModel):
    """
    What dispose-pattern code one type needs.

    Built once per qualifying type per pass by the resolver and rendered
    once by the emitter. Member names keep declaration order and are not
    deduplicated.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    namespace_name: str = ""
    class_name: str = ""
    declared_accessibility: Accessibility = Accessibility.NOT_SPECIFIED
    disposable_member_names: Tuple[str, ...] = Field(default_factory=tuple)
    implement_managed: bool = False
    implement_unmanaged: bool = False

    @property
    def has_work(self) -> bool:
        return self.implement_unmanaged or self.implement_managed or len(self.disposable_member_names) > 0

    @property
    def qualified_name(self) -> str:
        if self.namespace_name:
            return f"{self.namespace_name}.{self.class_name}"
        return self.class_name
