from carnet.services.schemas.persons import (
    PersonCreate,
    PersonRead,
    PersonUpdate,
)

__all__ = [
    "PersonCreate",
    "PersonRead",
    "PersonUpdate",
]
