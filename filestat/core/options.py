from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import ValidationError

DEFAULT_OUTPUT_FORMAT = "%Y-%m-%d %H:%M:%S"


class UnitMode(str, Enum):
    EPOCH = "e"
    HUMAN = "h"
    BOTH = "a"

    @classmethod
    def parse(cls, value: str) -> "UnitMode":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                code="options.invalid",
                message=f"units must be one of e, h, a (got {value!r})",
            ) from None


class TimeKind(str, Enum):
    MODIFIED = "modified"
    CREATED = "created"
    ACCESSED = "accessed"


# Fixed reporting order when several kinds are requested.
KIND_ORDER = (TimeKind.MODIFIED, TimeKind.CREATED, TimeKind.ACCESSED)


@dataclass(frozen=True)
class Options:
    """
    Display options for one run.

    When none of the want_* flags is set every kind is reported.
    """

    files: tuple[str, ...]
    want_creation: bool = False
    want_modified: bool = False
    want_accessed: bool = False
    unit_mode: UnitMode = UnitMode.HUMAN
    output_format: str = DEFAULT_OUTPUT_FORMAT

    def __post_init__(self) -> None:
        if not self.files:
            raise ValidationError(code="options.invalid", message="at least one path is required")
        if any(not isinstance(f, str) for f in self.files):
            raise ValidationError(code="options.invalid", message="paths must be strings")
        if not isinstance(self.unit_mode, UnitMode):
            object.__setattr__(self, "unit_mode", UnitMode.parse(self.unit_mode))

    @classmethod
    def build(cls, files: Iterable[str], **kwargs) -> "Options":
        return cls(files=tuple(files), **kwargs)

    def selected_kinds(self) -> list[TimeKind]:
        wanted = {
            TimeKind.MODIFIED: self.want_modified,
            TimeKind.CREATED: self.want_creation,
            TimeKind.ACCESSED: self.want_accessed,
        }
        if not any(wanted.values()):
            return list(KIND_ORDER)
        return [k for k in KIND_ORDER if wanted[k]]
