"""Storage drivers implementing the Queries protocol."""

from chatstore.drivers.mockup import MockupDriver
from chatstore.drivers.mongo import MongoDriver

__all__ = ["MockupDriver", "MongoDriver"]
