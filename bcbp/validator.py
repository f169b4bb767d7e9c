"""Length and content checks for BCBP fields."""

# Standard imports
from enum import StrEnum

# Project imports
from bcbp.errors import FieldValidationFailed
from bcbp.fields import CharClass, FieldSpec

class Mode(StrEnum):
    """
    Decode policy.

    Both modes check field lengths and declared block sizes. Only strict
    mode checks field content against character classes and allowed
    values.
    """
    STRICT = "strict"
    LENIENT = "lenient"

    @classmethod
    def from_value(cls, value) -> "Mode":
        """Gets a Mode from a Mode or a case-insensitive string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown decode mode {value!r}. "
                f"Use one of: {', '.join(m.value for m in cls)}."
            ) from None


def validate(spec: FieldSpec, raw: str, mode: Mode, offset: int) -> str:
    """
    Checks a raw field value and returns it for the result model.

    Fixed-length fields must always have exactly their declared length.
    In strict mode the content must also match the field's character
    class and, where the field has them, its allowed values.
    """
    if spec.length is not None and len(raw) != spec.length:
        raise FieldValidationFailed(
            spec.key, offset,
            f"Expected {spec.length} characters, got {len(raw)}"
        )
    if mode == Mode.STRICT:
        if not spec.char_class.matches(raw):
            raise FieldValidationFailed(
                spec.key, offset,
                f"{raw!r} is not valid {spec.char_class.name.lower()} data"
            )
        if spec.allowed is not None and raw not in spec.allowed:
            raise FieldValidationFailed(
                spec.key, offset, f"{raw!r} is not an allowed value"
            )
    if spec.strip:
        return raw.strip()
    return raw

def parse_hex(spec: FieldSpec, raw: str, offset: int) -> int:
    """
    Parses a hexadecimal size field.

    Sizes decide where every following field starts, so they are
    checked in every mode. Signs and whitespace are rejected even
    though int() would accept them.
    """
    if len(raw) != spec.length or not CharClass.HEX.matches(raw):
        raise FieldValidationFailed(
            spec.key, offset, f"{raw!r} is not a hexadecimal size"
        )
    return int(raw, 16)

def parse_number(
    spec: FieldSpec, raw: str, mode: Mode, offset: int
) -> int | None:
    """
    Parses an unsigned decimal field.

    In lenient mode content that is not all digits gives None rather
    than an error.
    """
    if raw and CharClass.DIGIT.matches(raw):
        return int(raw)
    if mode == Mode.STRICT:
        raise FieldValidationFailed(
            spec.key, offset, f"{raw!r} is not an unsigned number"
        )
    return None
