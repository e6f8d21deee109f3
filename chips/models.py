import datetime as dt
from decimal import Decimal
from enum import Enum as PyEnum
from typing import List
from sqlalchemy import (
    Integer, String, DateTime, func, ForeignKey, Numeric, Enum
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .db import Base

STARTING_WALLET = Decimal("250.00")

# Money columns keep 12 digits with 2 after the point; MAX_MONEY is the largest value they hold exactly.
MONEY_PRECISION = 12
MONEY_SCALE = 2
MAX_MONEY = Decimal("9999999999.99")

class Game(str, PyEnum):
    poker = "poker"
    blackjack = "blackjack"
    roulette = "roulette"
    ride_the_bus = "ride-the-bus"

class EntryKind(str, PyEnum):
    bet = "bet"
    win = "win"

def _enum_values(enum_cls):
    # store "ride-the-bus", not the member name
    return [m.value for m in enum_cls]

def _utcnow():
    return dt.datetime.now(dt.timezone.utc)

class Account(Base):
    __tablename__ = "users"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    wallet: Mapped[Decimal] = mapped_column(Numeric(MONEY_PRECISION, MONEY_SCALE), default=STARTING_WALLET)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    history: Mapped[List["LedgerEntry"]] = relationship(
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="LedgerEntry.id",
    )

    # Concurrent saves of the same row fail instead of silently overwriting the wallet.
    __mapper_args__ = {"version_id_col": version}

class LedgerEntry(Base):
    __tablename__ = "ledger_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    game: Mapped[Game] = mapped_column(Enum(Game, values_callable=_enum_values, name="game"))
    kind: Mapped[EntryKind] = mapped_column(Enum(EntryKind, values_callable=_enum_values, name="entry_kind"))
    amount: Mapped[Decimal] = mapped_column(Numeric(MONEY_PRECISION, MONEY_SCALE))
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    account: Mapped[Account] = relationship(back_populates="history")
