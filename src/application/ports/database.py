"""Database ports for the projection engine.

This module defines the application-layer protocol for accessing the database
engine that stores projection assumptions. Infrastructure implementations are
expected to provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the projection database engine.

    Application use cases can depend on this protocol instead of concrete
    database drivers or configuration details.
    """

    def get_projection_engine(self) -> Engine:
        """Get the engine for the projection database.

        Returns:
            Engine: SQLAlchemy engine connected to the assumptions store.
        """


__all__ = ["DatabaseEnginePort"]
