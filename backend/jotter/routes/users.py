"""
Jotter Backend: User Route Handlers
====================================

What:  Registration, login, logout and the current-user view.
Who:   Called by clients to obtain the bearer tokens /notes requires.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.auth import Principal, get_current_principal
from jotter.database import get_db_session
from jotter.schemas.note import ErrorResponse
from jotter.schemas.user import AuthResponse, MessageResponse, UserLogin, UserResponse
from jotter.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=201,
    response_model=AuthResponse,
    responses={400: {"description": "Invalid or duplicate registration", "model": ErrorResponse}},
    summary="Register a user",
)
async def register(
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.register(db=db, payload=payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"description": "Unable to login", "model": ErrorResponse}},
    summary="Log in and receive a bearer token",
)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    return await user_service.login(db=db, credentials=credentials)


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
    summary="Revoke the current token",
)
async def logout(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.logout(db=db, principal=principal)
    return MessageResponse(message="Logged out")


@router.post(
    "/logoutAll",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
    summary="Revoke every token of the current user",
)
async def logout_all(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.logout_all(db=db, principal=principal)
    return MessageResponse(message="Logged out of all sessions")


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}},
    summary="Current user",
)
async def me(principal: Principal = Depends(get_current_principal)) -> UserResponse:
    return UserResponse.model_validate(principal.user)
