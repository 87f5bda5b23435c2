"""
Repository specifico per User.
"""
from typing import Optional

from app.models import User
from app.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        return self.session.query(User).filter_by(username=username).first()
