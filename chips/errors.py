"""Error taxonomy for the wallet and its HTTP surface.

Every error carries the one-line message shown to the user and the page the
request boundary redirects to when it catches it.
"""


class ChipsError(Exception):
    message = "Server error"
    redirect_to = "/dashboard"

    def __init__(self, message=None, redirect_to=None):
        if message is not None:
            self.message = message
        if redirect_to is not None:
            self.redirect_to = redirect_to
        super().__init__(self.message)


class InvalidGame(ChipsError):
    message = "Invalid game"


class InvalidAmount(ChipsError):
    message = "Invalid amount"


class InsufficientFunds(ChipsError):
    message = "Not enough funds to place that bet"


class AccountNotFound(ChipsError):
    message = "User not found"
    redirect_to = "/login"


class DuplicateName(ChipsError):
    message = "Name already registered"
    redirect_to = "/signup"


class InvalidCredentials(ChipsError):
    message = "Wrong credentials"
    redirect_to = "/login"


class Unauthenticated(ChipsError):
    message = "You must be logged in."
    redirect_to = "/login"


class PersistenceFailure(ChipsError):
    message = "Server error"
