"""Exceptions raised by entity generation and runtime type synthesis."""


class EntityGenError(Exception):
    """Base class for all entitygen errors."""


class TypeLookupError(EntityGenError, LookupError):
    """A storage type, custom type or referenced entity could not be found."""


class ColumnCollisionError(EntityGenError, ValueError):
    """Two fields of one entity map to the same column."""


class InvalidIdentifierError(EntityGenError, ValueError):
    """A name cannot be rendered as a Python identifier."""


class SynthesisError(EntityGenError):
    """A synthesized wrapper type could not be loaded."""


class FileSystemError(EntityGenError, OSError):
    """A temporary source file could not be created, written or removed."""


class TypeRegistrationError(EntityGenError):
    """A type name is already registered to a different implementation."""
