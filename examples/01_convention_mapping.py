"""
Example 01: Convention Mapping

This example demonstrates mapping between dataclasses and Pydantic models
with no configuration at all: fields are matched by name, ignoring case.
"""

from dataclasses import dataclass
from pydantic import BaseModel

import shape_map


@dataclass
class User:
    """Domain entity"""
    Id: int
    Name: str
    Email: str


class UserOut(BaseModel):
    """API response model"""
    id: int
    name: str
    email: str


def main():
    print("=== Convention Mapping ===\n")

    # Map one object
    print("1. Single Object:")
    user = User(Id=1, Name="Alice", Email="alice@example.com")
    out = shape_map.map_to(user, UserOut)
    print(f"   Type: {type(out).__name__}")
    print(f"   Data: {out}\n")

    # Map a list
    print("2. Sequence:")
    users = [user, User(Id=2, Name="Bob", Email="bob@example.com")]
    for u in shape_map.map_many(users, UserOut):
        print(f"   - {u.name}: {u.email}")
    print()

    # Copy onto an existing object
    print("3. Existing Destination:")
    existing = UserOut(id=0, name="", email="")
    shape_map.map_into(user, existing)
    print(f"   Data: {existing}\n")


if __name__ == "__main__":
    main()
