from sqlalchemy import Column, Date, Identity, Integer, String

from .database import Base # Import the Base class from our database setup

# Namespace created at startup; the juice table itself lives in the default one.
INVENTORY_SCHEMA = "inventory"


# Defines the ORM model for a stock unit of juice.
class Juice(Base):
    # The name of the database table.
    __tablename__ = "juice"

    # Define the table columns.
    id = Column(Integer, Identity(always=False), primary_key=True) # Assigned by the store, never reused.
    name = Column(String, nullable=False) # Product name, one per seed line.
    expiration = Column(Date) # Calendar date the unit expires.
