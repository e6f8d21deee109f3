from fastapi import APIRouter, Depends, Form, Request
from .ledger import apply_bet, apply_win, parse_amount, parse_game
from .models import EntryKind, Game
from .schemas import DashboardOut, LedgerEntryOut
from .security import Identity, current_identity, get_store
from .stats import compute_totals
from .store import AccountStore
from .views import render, redirect

router = APIRouter(tags=["wallet"])

@router.get("/dashboard")
def dashboard(request: Request, identity: Identity = Depends(current_identity),
              store: AccountStore = Depends(get_store)):
    account = store.get(identity.account_id)
    history = [LedgerEntryOut.model_validate(e) for e in account.history]
    view = DashboardOut(
        name=account.name,
        wallet=account.wallet,
        totals=compute_totals(history),
        history=list(reversed(history)),  # recent first
    )
    return render(request, "dashboard.html", {"view": view, "games": list(Game)})

@router.post("/bet")
def bet(game: str = Form(""), amount: str = Form(""), identity: Identity = Depends(current_identity),
        store: AccountStore = Depends(get_store)):
    game, amount = parse_game(game), parse_amount(amount, EntryKind.bet)
    account = store.get(identity.account_id)
    apply_bet(store, account, game, amount)
    return redirect("/dashboard", "success", f"Placed ${amount:.2f} bet on {game.value}")

@router.post("/win")
def win(game: str = Form(""), amount: str = Form(""), identity: Identity = Depends(current_identity),
        store: AccountStore = Depends(get_store)):
    game, amount = parse_game(game), parse_amount(amount, EntryKind.win)
    account = store.get(identity.account_id)
    apply_win(store, account, game, amount)
    return redirect("/dashboard", "success", f"Recorded ${amount:.2f} win on {game.value}")
