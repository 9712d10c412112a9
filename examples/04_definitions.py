"""
Example 04: Mapper Definitions

This example demonstrates grouping maps into MapperDefinition classes and
installing them as the process-wide configuration.
"""

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel

import shape_map
from shape_map import MapperConfiguration, MapperDefinition, MappingBuilder
from shape_map import same_name_ignore_separators


@dataclass
class Book:
    title: str = ""
    author_name: str = ""
    published_on: date = date(2000, 1, 1)


class BookOut(BaseModel):
    Title: str
    AuthorName: str
    PublishedOn: str


class CatalogDefinition(MapperDefinition):
    """Subclasses are discovered automatically when no definitions are given."""

    def setup(self, mapping: MappingBuilder) -> None:
        mapping.use_convention(same_name_ignore_separators)
        mapping.map(Book, BookOut)


def main():
    # Discovers CatalogDefinition and activates it
    shape_map.configure(MapperConfiguration())

    print("=== Mapper Definitions ===\n")

    book = Book(title="Dune", author_name="Frank Herbert", published_on=date(1965, 8, 1))
    out = shape_map.map_to(book, BookOut)
    print(f"   Data: {out}\n")

    config = shape_map.current_configuration()
    print(f"   Registered maps: {config.plans.pairs}")


if __name__ == "__main__":
    main()
