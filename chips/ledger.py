"""Wallet transactions.

A bet debits the wallet, a win credits it. Both validate their input before
touching the account, append one entry to its history and persist it with a
single save. Nothing is saved when validation fails.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union
from .errors import InsufficientFunds, InvalidAmount, InvalidGame
from .models import Account, EntryKind, Game, LedgerEntry, MAX_MONEY
from .store import AccountStore

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

def round_cents(value: Decimal) -> Decimal:
    """Round to the nearest cent, halves away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)

def parse_game(raw: Union[Game, str, None]) -> Game:
    if isinstance(raw, Game):
        return raw
    try:
        return Game(raw)
    except ValueError:
        raise InvalidGame() from None

def parse_amount(raw, kind: EntryKind = EntryKind.bet) -> Decimal:
    """Parse a user supplied amount into a positive two-decimal Decimal.

    Missing, non-numeric, non-finite, zero and negative amounts are rejected,
    as is anything that rounds to 0.00 or does not fit a wallet (MAX_MONEY).
    """
    error = InvalidAmount(f"Invalid {kind.value} amount")
    if raw is None or isinstance(raw, bool):
        raise error
    try:
        value = Decimal(str(raw).strip())
        if not value.is_finite() or value > MAX_MONEY:
            raise error
        value = round_cents(value)
    except InvalidOperation:
        raise error from None
    if value <= 0:
        raise error
    return value

def _record(store: AccountStore, account: Account, game: Game, kind: EntryKind,
            amount: Decimal, new_wallet: Decimal) -> Decimal:
    account.wallet = new_wallet
    account.history.append(LedgerEntry(game=game, kind=kind, amount=amount))
    store.save(account)
    logger.info("%s account=%s game=%s amount=%s wallet=%s",
                kind.value, account.id, game.value, amount, account.wallet)
    return account.wallet

def apply_bet(store: AccountStore, account: Account, game, amount) -> Decimal:
    game = parse_game(game)
    bet = parse_amount(amount, EntryKind.bet)
    if bet > account.wallet:
        raise InsufficientFunds()
    return _record(store, account, game, EntryKind.bet, bet, round_cents(account.wallet - bet))

def apply_win(store: AccountStore, account: Account, game, amount) -> Decimal:
    game = parse_game(game)
    win = parse_amount(amount, EntryKind.win)
    new_wallet = round_cents(account.wallet + win)
    if new_wallet > MAX_MONEY:
        raise InvalidAmount("Win would push the wallet past its limit")
    return _record(store, account, game, EntryKind.win, win, new_wallet)
