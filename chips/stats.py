from decimal import Decimal
from typing import Iterable
from .models import EntryKind, Game
from .schemas import GameTotals, Totals, ZERO

def compute_totals(history: Iterable) -> Totals:
    """Per-game spent/won/net and grand totals for a history.

    Entries only need ``game``, ``kind`` and ``amount`` attributes. Every game
    is present in the result, zeroed when it has no entries.
    """
    spent = {g: ZERO for g in Game}
    won = {g: ZERO for g in Game}
    for entry in history:
        game = Game(entry.game)
        amount = Decimal(str(entry.amount))
        if EntryKind(entry.kind) is EntryKind.bet:
            spent[game] += amount
        else:
            won[game] += amount

    games = {g: GameTotals(spent=spent[g], won=won[g], net=won[g] - spent[g]) for g in Game}
    total_spent = sum(spent.values(), ZERO)
    total_won = sum(won.values(), ZERO)
    return Totals(games=games, total_spent=total_spent, total_won=total_won, total_net=total_won - total_spent)
