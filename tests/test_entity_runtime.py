"""Tests for the runtime support used by generated entities."""
import pytest
from sqlalchemy import MetaData
from sqlalchemy import types as sa_types

from entitygen.core.errors import TypeLookupError
from entitygen.db.metadata_builder import MetadataBuilder
from entitygen.entity.base import EntityMixin
from entitygen.entity.definition import Definition, DefinitionCollection, TypeTag
from entitygen.types.registry import TypeRegistry


class Book(EntityMixin):
    __slots__ = (
        "_isbn",
        "_pages",
        "_subtitle",
    )

    def isbn(self) -> str:
        return self._isbn

    def pages(self) -> int:
        return self._pages

    def subtitle(self):
        return self._subtitle

    @staticmethod
    def create_definitions() -> DefinitionCollection:
        return DefinitionCollection([
            Definition("isbn", TypeTag.STRING, False, True),
            Definition("pages", TypeTag.INT, False, True),
            Definition("subtitle", TypeTag.STRING, True, True),
        ])

    @staticmethod
    def load_metadata(builder: MetadataBuilder):
        builder.set_table("books")

        builder.create_field("isbn", "string").make_primary_key().build()
        builder.create_field("pages", "integer").nullable(False).build()
        builder.create_field("subtitle", "string").nullable(True).build()


def test_entity_construction_and_accessors():
    book = Book(isbn="978-0", pages=120)
    assert book.isbn() == "978-0"
    assert book.pages() == 120
    assert book.subtitle() is None
    assert book.to_dict() == {"isbn": "978-0", "pages": 120, "subtitle": None}
    assert repr(book) == "Book(isbn='978-0', pages=120, subtitle=None)"


def test_entity_is_immutable():
    """Changes only happen through with_, which returns a new instance."""
    book = Book(isbn="978-0", pages=120)
    with pytest.raises(AttributeError):
        book._pages = 1
    with pytest.raises(AttributeError):
        book.extra = 1

    changed = book.with_("pages", 300)
    assert changed.pages() == 300
    assert book.pages() == 120
    assert changed != book
    assert changed == Book(isbn="978-0", pages=300)


def test_entity_validation():
    with pytest.raises(ValueError):
        Book(isbn="978-0")
    with pytest.raises(TypeError):
        Book(isbn="978-0", pages="many")
    with pytest.raises(TypeError):
        Book(isbn="978-0", pages=True)
    with pytest.raises(TypeError):
        Book(isbn="978-0", pages=1, author="x")


def test_definition_collection():
    definitions = Book.create_definitions()
    assert len(definitions) == 3
    assert "pages" in definitions
    assert "author" not in definitions
    assert definitions.get("subtitle").nullable
    assert all(d.filterable for d in definitions)
    with pytest.raises(KeyError):
        definitions.get("author")
    with pytest.raises(ValueError):
        DefinitionCollection([Definition("a", TypeTag.INT, False), Definition("a", TypeTag.INT, False)])


def test_float_definition_accepts_int():
    definition = Definition("total", TypeTag.FLOAT, False)
    definition.check(3)
    definition.check(2.5)
    with pytest.raises(TypeError):
        definition.check("2.5")


def test_metadata_builder_builds_table():
    table = MetadataBuilder.for_entity(Book, MetaData(), TypeRegistry.default())
    assert table.name == "books"
    assert [c.name for c in table.primary_key.columns] == ["isbn"]
    assert not table.c.pages.nullable
    assert table.c.subtitle.nullable
    assert isinstance(table.c.pages.type, sa_types.Integer)


def test_metadata_builder_errors():
    builder = MetadataBuilder(MetaData(), TypeRegistry.default())
    with pytest.raises(TypeLookupError):
        builder.create_field("at", "datetime").build()
    with pytest.raises(ValueError):
        builder.build()
