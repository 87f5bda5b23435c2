"""
Autenticazione minimale: confronto diretto con le credenziali salvate.
"""
from __future__ import annotations

from typing import Optional

from app.models import User
from app.services.settings_service import get_setting
from app.services.unit_of_work import UnitOfWork


def authenticate(username: str, password: str) -> Optional[User]:
    with UnitOfWork() as uow:
        user = uow.users.get_by_username(username)
        if user is None or not user.is_active or user.password != password:
            return None
        return user


def ensure_default_user() -> bool:
    """Crea l'utente d'ufficio di default se assente. True se creato."""
    username = get_setting("DEFAULT_USERNAME", "ufficio")
    with UnitOfWork() as uow:
        if uow.users.get_by_username(username) is not None:
            return False
        uow.users.add(
            User(
                username=username,
                password=get_setting("DEFAULT_PASSWORD", "password123"),
                full_name="Ufficio",
            )
        )
        uow.commit()
        return True
