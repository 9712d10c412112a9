"""
Example 03: Manual Maps

This example demonstrates declaring maps by hand: a transform layered
over convention mapping, ignored fields, custom construction and a map
shared with a subclass.
"""

from dataclasses import dataclass

from shape_map import MapperConfiguration, MappingBuilder, ObjectMapper


@dataclass
class Account:
    owner: str = ""
    balance: int = 0
    pin: str = ""


@dataclass
class SavingsAccount(Account):
    rate: float = 0.0


@dataclass
class AccountView:
    owner: str = ""
    balance: int = 0
    pin: str = "****"
    label: str = ""


def describe(source: Account, destination: AccountView) -> None:
    destination.label = f"{source.owner} ({type(source).__name__})"


def main():
    config = MapperConfiguration(definitions=[])
    mapping = MappingBuilder(config)

    (
        mapping.map(Account, AccountView)
        .set_manually(describe)
        .ignore("pin")
        .include_from(SavingsAccount)
    )

    mapper = ObjectMapper(config.initialize())

    print("=== Manual Maps ===\n")

    print("1. Base Type:")
    print(f"   {mapper.map_to(Account(owner='Alice', balance=10, pin='1234'), AccountView)}\n")

    print("2. Shared With Subclass:")
    print(f"   {mapper.map_to(SavingsAccount(owner='Bob', balance=500, rate=0.03), AccountView)}\n")

    # Typed mapper for one destination type
    print("3. Typed Mapper:")
    views = mapper.mapper_for(AccountView)
    for view in views.map_many([Account(owner="Carol"), None]):
        print(f"   - {view}")
    print()


if __name__ == "__main__":
    main()
