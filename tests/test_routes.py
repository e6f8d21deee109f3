from decimal import Decimal

from sqlalchemy import func, select

from chips.models import Account, EntryKind, Game


def _location(resp):
    return resp.headers["location"]


def test_root_and_healthz(client):
    assert _location(client.get("/", follow_redirects=False)) == "/dashboard"
    assert client.get("/healthz").json() == {"ok": True}


def test_forms_render(client):
    assert 'action="/signup"' in client.get("/signup").text
    assert 'action="/login"' in client.get("/login").text


def test_dashboard_requires_login(client):
    resp = client.get("/dashboard", follow_redirects=False)
    assert resp.status_code == 303
    assert _location(resp) == "/login"
    assert "You must be logged in." in client.get("/login").text


def test_bet_requires_login(client):
    resp = client.post("/bet", data={"game": "poker", "amount": "10"}, follow_redirects=False)
    assert _location(resp) == "/login"


def test_signup_credits_250_and_logs_in(alice, store):
    page = alice.get("/dashboard")
    assert page.status_code == 200
    assert "Wallet: $250.00" in page.text
    account = store.find_by_name("alice")
    assert account.wallet == Decimal("250.00")
    assert account.history == []
    assert account.password_hash != "hunter2"


def test_signup_flash_is_shown_once(client):
    page = client.post("/signup", data={"name": "erin", "password": "pw"})
    assert "Account created. $250 credited to your wallet!" in page.text
    assert "Account created." not in client.get("/dashboard").text


def test_signup_requires_name_and_password(client, db):
    resp = client.post("/signup", data={"name": "  ", "password": "pw"}, follow_redirects=False)
    assert _location(resp) == "/signup"
    assert "Name and password required" in client.get("/signup").text
    resp = client.post("/signup", data={"name": "frank"}, follow_redirects=False)
    assert _location(resp) == "/signup"
    assert db.scalar(select(func.count()).select_from(Account)) == 0


def test_duplicate_signup_is_rejected(alice, client, db):
    alice.get("/logout")
    resp = client.post("/signup", data={"name": "alice", "password": "other"}, follow_redirects=False)
    assert _location(resp) == "/signup"
    assert "Name already registered" in client.get("/signup").text
    assert db.scalar(select(func.count()).select_from(Account)) == 1

    # the original credentials still work, the new ones do not
    bad = client.post("/login", data={"name": "alice", "password": "other"}, follow_redirects=False)
    assert _location(bad) == "/login"
    good = client.post("/login", data={"name": "alice", "password": "hunter2"}, follow_redirects=False)
    assert _location(good) == "/dashboard"


def test_login_checks_password(alice, client):
    alice.get("/logout")
    resp = client.post("/login", data={"name": "alice", "password": "wrong"}, follow_redirects=False)
    assert _location(resp) == "/login"
    assert "Wrong credentials" in client.get("/login").text
    assert _location(client.get("/dashboard", follow_redirects=False)) == "/login"


def test_login_unknown_name(client):
    resp = client.post("/login", data={"name": "ghost", "password": "x"}, follow_redirects=False)
    assert _location(resp) == "/login"


def test_login_then_logout(alice, client):
    alice.get("/logout")
    page = client.post("/login", data={"name": "alice", "password": "hunter2"})
    assert "Wallet: $250.00" in page.text
    resp = client.get("/logout", follow_redirects=False)
    assert _location(resp) == "/login"
    assert _location(client.get("/dashboard", follow_redirects=False)) == "/login"


def test_bet_win_scenario(alice, store):
    page = alice.post("/bet", data={"game": "poker", "amount": "50"})
    assert "Placed $50.00 bet on poker" in page.text
    assert "Wallet: $200.00" in page.text

    page = alice.post("/win", data={"game": "poker", "amount": "20"})
    assert "Recorded $20.00 win on poker" in page.text
    assert "Wallet: $220.00" in page.text

    account = store.find_by_name("alice")
    assert account.wallet == Decimal("220.00")
    assert [(e.game, e.kind, e.amount) for e in account.history] == [
        (Game.poker, EntryKind.bet, Decimal("50.00")),
        (Game.poker, EntryKind.win, Decimal("20.00")),
    ]


def test_dashboard_lists_history_most_recent_first(alice):
    alice.post("/bet", data={"game": "roulette", "amount": "1"})
    page = alice.post("/win", data={"game": "ride-the-bus", "amount": "2"})
    assert page.text.index("win $2.00 on ride-the-bus") < page.text.index("bet $1.00 on roulette")


def test_bet_errors_redirect_to_dashboard(alice, store):
    cases = [
        ({"game": "slots", "amount": "10"}, "Invalid game"),
        ({"game": "poker", "amount": "abc"}, "Invalid bet amount"),
        ({"game": "poker", "amount": "-3"}, "Invalid bet amount"),
        ({"game": "poker", "amount": "1e30"}, "Invalid bet amount"),
        ({"game": "poker", "amount": "250.01"}, "Not enough funds to place that bet"),
    ]
    for data, message in cases:
        resp = alice.post("/bet", data=data, follow_redirects=False)
        assert resp.status_code == 303
        assert _location(resp) == "/dashboard"
        page = alice.get("/dashboard")
        assert message in page.text
        assert "Wallet: $250.00" in page.text

    assert store.find_by_name("alice").history == []


def test_win_errors(alice):
    page = alice.post("/win", data={"game": "blackjack", "amount": "0"})
    assert "Invalid win amount" in page.text
    page = alice.post("/win", data={"game": "craps", "amount": "5"})
    assert "Invalid game" in page.text
    for amount in ("1e30", "10000000000.00"):
        resp = alice.post("/win", data={"game": "poker", "amount": amount}, follow_redirects=False)
        assert resp.status_code == 303
        assert _location(resp) == "/dashboard"
        assert "Invalid win amount" in alice.get("/dashboard").text
    page = alice.post("/win", data={"game": "blackjack"})
    assert "Invalid win amount" in page.text
    assert "Wallet: $250.00" in page.text


def test_session_for_deleted_account_goes_to_login(alice, db):
    db.execute(Account.__table__.delete())
    db.commit()
    resp = alice.get("/dashboard", follow_redirects=False)
    assert _location(resp) == "/login"
    assert "User not found" in alice.get("/login").text
