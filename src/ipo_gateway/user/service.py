"""Broker login service: password login and token refresh."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.ipo_brokers.domain.models import Broker
from src.ipo_brokers.domain.repository import BrokerRepositoryProtocol
from src.ipo_brokers.infrastructure.persistence import BrokerRepository
from src.ipo_common.errors import InvalidCredentialsError, LoginAccessDisabledError
from src.ipo_gateway.auth.jwt_handler import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from src.ipo_gateway.auth.password import DUMMY_HASH, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Stateless service — instantiate once, reuse across requests."""

    def __init__(self, repo: BrokerRepositoryProtocol | None = None) -> None:
        self._repo: BrokerRepositoryProtocol = repo or BrokerRepository()

    async def login(
        self,
        username: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[Broker, str, str]:
        """Authenticate a broker and return (broker, access_token, refresh_token).

        "Unknown username" and "wrong password" both raise InvalidCredentialsError
        so usernames cannot be enumerated.
        """
        broker = await self._repo.get_by_username(db, username)

        if broker is None:
            verify_password(password, DUMMY_HASH)
            raise InvalidCredentialsError()
        if not verify_password(password, broker.password_hash):
            logger.info("Login failed: username=%s", username)
            raise InvalidCredentialsError()

        if not broker.login_access:
            raise LoginAccessDisabledError()

        logger.info("Login ok: broker=%s role=%s", broker.broker_code, broker.role)
        return (
            broker,
            create_access_token(broker.broker_code, broker.role),
            create_refresh_token(broker.broker_code, broker.role),
        )

    async def refresh(self, refresh_token: str, db: AsyncSession) -> str:
        """Validate a refresh token and return a new access token.

        The broker is reloaded so that a revoked login access or a role change
        takes effect at the next refresh.
        """
        payload = decode_token(refresh_token, expected_type="refresh")
        broker = await self._repo.get_by_code(db, str(payload["sub"]))
        if broker is None:
            raise InvalidCredentialsError()
        if not broker.login_access:
            raise LoginAccessDisabledError()
        return create_access_token(broker.broker_code, broker.role)
