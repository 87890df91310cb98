from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from config import settings
from models.user import User
from repositories.user_repo import UserRepository
from utils.db_manager import get_db

def get_client_ip(request: Request) -> str:
    """
    Client address: first X-Forwarded-For hop, then X-Real-IP, then the socket peer
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return settings.DEFAULT_CLIENT_IP

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Resolve the caller from their IP address. This is an identity hint, not authentication.
    """
    user = UserRepository(db).get_by_ip(get_client_ip(request))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or unauthorized."
        )
    return user
