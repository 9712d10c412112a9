"""
Example 02: Conversions

This example demonstrates the built-in date/text and integer/text
conversions, custom conversions and explicit text formats.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from shape_map import MapperConfiguration, MapperSettings, ObjectMapper


@dataclass
class Invoice:
    number: int = 0
    issued: datetime = datetime(2000, 1, 1)
    amount: Decimal = Decimal("0")


@dataclass
class InvoiceRow:
    number: str = ""
    issued: str = ""
    amount: str = ""


def main():
    # Text format for every datetime conversion in this configuration
    settings = MapperSettings(datetime_format="%d.%m.%Y %H:%M")
    config = MapperConfiguration(settings, definitions=[])

    # Decimal has no built-in conversion, so register one
    config.add_conversion(Decimal, str, lambda value: f"{value:.2f}")
    config.add_conversion(str, Decimal, Decimal)

    mapper = ObjectMapper(config.initialize())

    print("=== Conversions ===\n")

    invoice = Invoice(number=1042, issued=datetime(2024, 5, 17, 9, 30), amount=Decimal("99.5"))
    row = mapper.map_to(invoice, InvoiceRow)
    print(f"1. Outbound: {row}")

    back = mapper.map_to(row, Invoice)
    print(f"2. Inbound:  {back}")
    print(f"   Equal: {back == invoice}\n")


if __name__ == "__main__":
    main()
