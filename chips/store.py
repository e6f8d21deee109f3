import logging
from decimal import Decimal
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from .errors import AccountNotFound, DuplicateName, PersistenceFailure
from .models import Account, STARTING_WALLET

logger = logging.getLogger(__name__)

class AccountStore:
    """Loads and persists whole accounts (wallet and history together)."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_name(self, name: str) -> Optional[Account]:
        return self.db.scalars(select(Account).where(Account.name == name)).first()

    def find_by_id(self, account_id: int) -> Optional[Account]:
        return self.db.get(Account, account_id)

    def get(self, account_id: int) -> Account:
        account = self.find_by_id(account_id)
        if account is None:
            raise AccountNotFound()
        return account

    def save(self, account: Account) -> Account:
        # One commit covers the wallet update and any appended entries.
        # On failure the rollback expires the instance, so it reloads as persisted.
        try:
            self.db.add(account)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("failed to save account id=%s", account.id)
            raise PersistenceFailure() from exc
        return account

    def create(self, name: str, password_hash: str, wallet: Decimal = STARTING_WALLET) -> Account:
        if self.find_by_name(name) is not None:
            raise DuplicateName()
        account = Account(name=name, password_hash=password_hash, wallet=wallet)
        try:
            self.db.add(account)
            self.db.commit()
        except IntegrityError as exc:
            # lost a race with another signup for the same name
            self.db.rollback()
            raise DuplicateName() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("failed to create account name=%r", name)
            raise PersistenceFailure(redirect_to="/signup") from exc
        self.db.refresh(account)
        logger.info("created account id=%s name=%r wallet=%s", account.id, account.name, account.wallet)
        return account
