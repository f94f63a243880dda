"""SWIFT code value object."""

import enum
from dataclasses import dataclass

from domain.validators import (
    HEADQUARTERS_SUFFIX,
    SWIFT_CODE_BASE_LENGTH,
    validate_swift_code,
)


class SwiftCodeEntity(str, enum.Enum):
    """
    Kind of institution a SWIFT code identifies.

    Attributes:
        HEADQUARTERS: Code whose branch segment is "XXX"
        BRANCH: Any other code; shares its base with a headquarters
    """

    HEADQUARTERS = "HEADQUARTERS"
    BRANCH = "BRANCH"


@dataclass(frozen=True)
class SwiftCode:
    """
    SWIFT/BIC code value object.

    Immutable, uppercase-normalized and always valid: construction fails
    with FieldValidationError for anything that is not an 8 or 11 character
    BIC. The base code and the entity type are derived from the value and
    can never disagree with it.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate code format and normalize."""
        object.__setattr__(self, "value", validate_swift_code(self.value))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"SwiftCode(value={self.value!r})"

    @property
    def base(self) -> str:
        """First 8 characters, grouping a headquarters with its branches."""
        return self.value[:SWIFT_CODE_BASE_LENGTH]

    @property
    def branch_code(self) -> str | None:
        """3-character branch segment, None for 8-character codes."""
        return self.value[SWIFT_CODE_BASE_LENGTH:] or None

    @property
    def entity_type(self) -> SwiftCodeEntity:
        if self.value.endswith(HEADQUARTERS_SUFFIX):
            return SwiftCodeEntity.HEADQUARTERS
        return SwiftCodeEntity.BRANCH

    @property
    def is_headquarters(self) -> bool:
        return self.entity_type is SwiftCodeEntity.HEADQUARTERS
