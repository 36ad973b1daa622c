"""Auth router: register, login, me."""
from fastapi import APIRouter

from gatehouse.interfaces.api.results import to_response
from gatehouse.interfaces.api.v1.schemas.identity import (
    ApiResponse,
    AuthResponse,
    CurrentUserResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
)
from gatehouse.interfaces.dependencies import CurrentSubjectId, Facade

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def register(body: RegisterRequest, facade: Facade):
    result = await facade.register(username=body.username, email=body.email, password=body.password)
    return to_response(result)


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def login(body: LoginRequest, facade: Facade):
    result = await facade.login(username=body.username, password=body.password)
    return to_response(result)


@router.get(
    "/me",
    response_model=ApiResponse[CurrentUserResponse],
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def me(facade: Facade, current_subject_id: CurrentSubjectId):
    result = await facade.get_current_user(current_subject_id)
    return to_response(result)
