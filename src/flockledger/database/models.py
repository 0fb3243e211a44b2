"""SQLAlchemy models for the flockledger database.

Each collection of the book state gets its own table. Ids are assigned by
the domain layer, never by the database; ``position`` keeps the order in
which records were added.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

# Weight and rate keep three places, so their product fits six exactly.
Money = Numeric(18, 6)


class Customer(Base):
    """Customer model."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")


class Farm(Base):
    """Farm model."""

    __tablename__ = "farms"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    initial_stock = Column(Integer, nullable=False, default=0)


class Account(Base):
    """Money account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="cash")
    initial_balance = Column(Money, nullable=False, default=0)


class Sale(Base):
    """Sale model.

    Customer and farm ids are plain integers; references are resolved by the
    domain layer, which tolerates dangling ones.
    """

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    customer_id = Column(Integer, nullable=False)
    farm_id = Column(Integer, nullable=False)
    vehicle_number = Column(String, nullable=True)
    crates = Column(Integer, nullable=True)
    chickens = Column(Integer, nullable=False)
    weight = Column(Money, nullable=False)
    rate = Column(Money, nullable=False)
    total = Column(Money, nullable=False)


class Receivable(Base):
    """Customer receipt model."""

    __tablename__ = "receivables"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    customer_id = Column(Integer, nullable=False)
    account_id = Column(Integer, nullable=True)
    amount = Column(Money, nullable=False)


class Voucher(Base):
    """Journal voucher model."""

    __tablename__ = "vouchers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    position = Column(Integer, nullable=False, default=0)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    debit_account = Column(String, nullable=False)
    credit_account = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    related_id = Column(Integer, nullable=True)
    related_type = Column(String, nullable=True)


def create_engine_and_session_factory(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    """Create a SQLAlchemy engine and session factory.

    Tables are not created here; see ``SQLAlchemyStateStore.initialize_schema``.
    """
    engine = create_engine(database_url, echo=False)
    return engine, sessionmaker(bind=engine)
