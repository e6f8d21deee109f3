import datetime as dt
from decimal import Decimal
from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional
from .models import EntryKind, Game

ZERO = Decimal("0.00")

class LedgerEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    game: Game
    kind: EntryKind
    amount: Decimal
    date: Optional[dt.datetime] = None

class GameTotals(BaseModel):
    spent: Decimal = ZERO
    won: Decimal = ZERO
    net: Decimal = ZERO

class Totals(BaseModel):
    games: Dict[Game, GameTotals]
    total_spent: Decimal = ZERO
    total_won: Decimal = ZERO
    total_net: Decimal = ZERO

# Dashboard view
class DashboardOut(BaseModel):
    name: str
    wallet: Decimal
    totals: Totals
    history: List[LedgerEntryOut]  # most recent first
