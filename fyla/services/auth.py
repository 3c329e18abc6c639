"""Sign-in, registration and token handling.

Tokens are opaque strings to this client. The mock source issues tokens of
the form mock_jwt_token_<role>_<user id> and validates them by parsing that
form back, so a session started on mock data survives until the flag flips.
"""
import itertools
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

from fyla.errors import ErrorKind, ServiceError
from fyla.feature_flags import FeatureFlag
from fyla.logging_config import get_logger
from fyla.mock_data import DEMO_ACCOUNTS
from fyla.models.auth import AuthResponse, LoginRequest, RegisterRequest, User, UserRole
from fyla.services.base import MockDataSource, RemoteDataSource, ServiceFacade

logger = get_logger(__name__)

ACCESS_TOKEN_PREFIX = "mock_jwt_token_"
REFRESH_TOKEN_PREFIX = "mock_refresh_token_"


class AuthDataSource(ABC):

    @abstractmethod
    async def login(self, request: LoginRequest) -> AuthResponse: ...

    @abstractmethod
    async def register(self, request: RegisterRequest) -> AuthResponse: ...

    @abstractmethod
    async def refresh_token(self, refresh_token: str) -> AuthResponse: ...

    @abstractmethod
    async def validate_token(self, token: str) -> User: ...

    @abstractmethod
    async def logout(self, token: str) -> None: ...


class RemoteAuthDataSource(RemoteDataSource, AuthDataSource):
    default_error_message = "Authentication failed"

    async def login(self, request):
        data = await self._request("POST", "/auth/login", body=request.to_api())
        return self._parse(AuthResponse, data)

    async def register(self, request):
        data = await self._request("POST", "/auth/register", body=request.to_backend())
        return self._parse(AuthResponse, data)

    async def refresh_token(self, refresh_token):
        data = await self._request("POST", "/auth/refresh-token", body={"token": refresh_token})
        return self._parse(AuthResponse, data)

    async def validate_token(self, token):
        data = await self._request("GET", "/auth/validate", token=token)
        return self._parse(User, data)

    async def logout(self, token):
        await self._request("POST", "/auth/logout", body={}, token=token)


def _parse_token(token: str, prefix: str) -> Optional[Tuple[UserRole, int]]:
    if not token.startswith(prefix):
        return None
    role, _, user_id = token[len(prefix):].rpartition("_")
    try:
        return UserRole(role), int(user_id)
    except ValueError:
        return None


def _unauthorized(message: str) -> ServiceError:
    return ServiceError(message, ErrorKind.SERVER, 401)


class MockAuthDataSource(MockDataSource, AuthDataSource):
    """Demo accounts plus anything registered during this process."""

    def __init__(self, generator, delay):
        super().__init__(generator, delay)
        self._passwords: Dict[str, str] = {}
        self._users: Dict[int, User] = {}
        for email, password, user_id, role, full_name, phone in DEMO_ACCOUNTS:
            self._add(generator.user(user_id, role, full_name, email, phone), password)
        self._ids = itertools.count(101)

    def _add(self, user: User, password: str) -> None:
        self._passwords[user.email.lower()] = password
        self._users[user.id] = user

    def _session(self, user: User) -> AuthResponse:
        suffix = f"{user.role.value}_{user.id}"
        return AuthResponse(
            user=user,
            token=f"{ACCESS_TOKEN_PREFIX}{suffix}",
            refresh_token=f"{REFRESH_TOKEN_PREFIX}{suffix}",
        )

    def _user_for(self, token: str, prefix: str, message: str) -> User:
        parsed = _parse_token(token, prefix)
        if parsed is None or parsed[1] not in self._users:
            raise _unauthorized(message)
        user = self._users[parsed[1]]
        if user.role != parsed[0]:
            raise _unauthorized(message)
        return user

    async def login(self, request):
        await self._simulate()
        email = request.email.lower()
        if self._passwords.get(email) != request.password:
            raise _unauthorized("Invalid email or password")
        user = next(u for u in self._users.values() if u.email.lower() == email)
        return self._session(user)

    async def register(self, request):
        await self._simulate()
        if request.email.lower() in self._passwords:
            raise ServiceError("A user with this email already exists", ErrorKind.SERVER, 409)
        user = self.generator.user(next(self._ids), request.role, request.full_name, request.email,
                                   request.phone_number)
        self._add(user, request.password)
        return self._session(user)

    async def refresh_token(self, refresh_token):
        await self._simulate()
        return self._session(self._user_for(refresh_token, REFRESH_TOKEN_PREFIX, "Invalid refresh token"))

    async def validate_token(self, token):
        await self._simulate()
        return self._user_for(token, ACCESS_TOKEN_PREFIX, "Invalid token")

    async def logout(self, token):
        await self._simulate()


class AuthService(ServiceFacade[AuthDataSource]):
    """Sessions for clients and providers."""

    flag = FeatureFlag.USE_REAL_AUTH_API

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Raises:
            ServiceError: SERVER with status 401 for wrong credentials
        """
        return await self._source().login(request)

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Raises:
            ServiceError: SERVER with status 409 when the email is taken
        """
        return await self._source().register(request)

    async def refresh_token(self, refresh_token: str) -> AuthResponse:
        return await self._source().refresh_token(refresh_token)

    async def validate_token(self, token: str) -> User:
        return await self._source().validate_token(token)

    async def logout(self, token: str) -> None:
        """
        End the session on the backend. Best effort: a failure is logged
        and the local session is considered over anyway.
        """
        try:
            await self._source().logout(token)
        except ServiceError as exc:
            logger.warning("logout_failed", kind=exc.kind.value, status_code=exc.status_code, error=exc.message)
