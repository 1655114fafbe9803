"""
Exceptions raised while decoding an HTML document into a record.

Every error raised by soupstruct itself derives from PopulateError.
Errors from bs4, soupsieve or aiohttp are never wrapped.
"""


class PopulateError(Exception):
    """Base class for all soupstruct errors."""
    pass


class InvalidTarget(PopulateError):
    """Raised when the populate target is not a record instance or record type."""

    def __init__(self, target):
        self.target = target
        super().__init__(
            f"target {target!r} must be a dataclass instance or a dataclass type"
        )


class CoercionError(PopulateError):
    """
    Raised when matched text can't be converted to the field's kind.

    Carries the target kind and the offending text.
    """

    def __init__(self, kind, text: str):
        self.kind = kind
        self.text = text
        super().__init__(f"cannot coerce {text!r} to {kind}")


class UnsupportedType(PopulateError):
    """Raised when a field's annotation has no coercion rule."""

    def __init__(self, annotation):
        self.annotation = annotation
        super().__init__(f"unsupported field type: {annotation!r}")
