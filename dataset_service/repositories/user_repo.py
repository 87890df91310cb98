# repositories/user_repo.py
from typing import Optional

from models.user import User
from repositories.base import BaseRepository

class UserRepository(BaseRepository):
    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_ip(self, ip_address: str) -> Optional[User]:
        """Earliest user registered from this address"""
        return (
            self.db.query(User)
            .filter(User.ip_address == ip_address)
            .order_by(User.id)
            .first()
        )

    def create(self, username: str, ip_address: str) -> User:
        db_user = User(username=username, ip_address=ip_address)
        self.db.add(db_user)
        self._commit(db_user)
        return db_user
