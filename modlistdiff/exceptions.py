from __future__ import annotations


class ModlistDiffError(ValueError):
    """Base class for every failure raised by the modlist pipeline."""


class ParseError(ModlistDiffError):
    """The input is not a supported launcher export."""


class ValidationError(ModlistDiffError):
    """Merge or format options are invalid."""


class SchemaError(ModlistDiffError):
    """A snapshot payload is malformed or uses an unsupported version."""


__all__ = ["ModlistDiffError", "ParseError", "ValidationError", "SchemaError"]
