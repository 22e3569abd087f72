"""Base class of every synthesized wrapper type."""
from sqlalchemy import types as sa_types

from entitygen.types.catalog import TypeCatalog


class GeneratedType(sa_types.TypeDecorator):
    """Column type registered under its own name but stored as ``base_type``.

    Subclasses only declare ``base_type`` and ``type_name``; the SQLAlchemy
    ``impl`` is looked up in the catalog when the subclass is created, so an
    unknown base type fails at definition time.
    """

    impl = sa_types.String
    cache_ok = True

    base_type: str = "string"
    type_name: str = ""

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.impl = TypeCatalog.implementation(cls.base_type)

    @classmethod
    def service_name(cls) -> str:
        return cls.type_name
