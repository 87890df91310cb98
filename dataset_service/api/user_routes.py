#api/user_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from utils.db_manager import get_db
from models.user import User, UserRegister, UserResponse
from repositories.user_repo import UserRepository
from api.middleware import get_client_ip, get_current_user

router = APIRouter()
logger = logging.getLogger("dataset_service.api.users")

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(
    user_data: UserRegister,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Register a user bound to the caller's IP address
    """
    user_repo = UserRepository(db)

    if user_repo.get_by_username(user_data.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists."
        )

    user = user_repo.create(user_data.username, get_client_ip(request))
    logger.info(f"Registered user {user.id} ({user.username})")
    return user

@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """
    The user registered for the caller's IP address
    """
    return current_user
