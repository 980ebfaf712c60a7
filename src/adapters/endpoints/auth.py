"""Endpoints de autenticación (`/auth/*`, `/me`)."""

from __future__ import annotations

from core.domain.api_types import MeResponse, OkResponse, UserResponse
from core.domain.models import SignInRequest, SignUpRequest
from core.interfaces.api import ApiRequester


class AuthApi:
    """Sesión del usuario. Las cookies de sesión las gestiona el cliente."""

    def __init__(self, client: ApiRequester) -> None:
        self._client = client

    async def signup(self, req: SignUpRequest) -> UserResponse:
        return await self._client.post("/auth/signup", req, response_type=UserResponse)

    async def signin(self, req: SignInRequest) -> UserResponse:
        return await self._client.post("/auth/signin", req, response_type=UserResponse)

    async def logout(self) -> OkResponse:
        return await self._client.post("/auth/logout", response_type=OkResponse)

    async def me(self) -> MeResponse:
        return await self._client.get("/me", response_type=MeResponse)
