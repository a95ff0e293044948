# carnet/database/models/__init__.py

from carnet.database.core.main import Base
from carnet.database.models.person import Person

__all__ = [
    "Base",
    "Person",
]
