"""Repository adapters for the Order and User aggregates.

Two families implement the repository ports:
- In-memory repositories over plain dicts, for tests and ephemeral use.
- SQLAlchemy Core repositories over the ``users``/``orders``/``order_line_items``
  tables, sharing the unit of work's Connection.
"""

from .memory import InMemoryData, InMemoryOrderRepository, InMemoryUserRepository
from .sqlalchemy_orders import SqlAlchemyOrderRepository
from .sqlalchemy_users import SqlAlchemyUserRepository

__all__ = [
    "InMemoryData",
    "InMemoryOrderRepository",
    "InMemoryUserRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyUserRepository",
]
