"""Composition root.

Builds every application-scoped service once from Settings and hands out
request-scoped services bound to one database session. There is no
module-level database or cache handle: whoever owns the process calls
``build_container`` and passes the container down.

Usage:
    container = build_container(get_settings())
    async with container.scope() as scope:
        result = await scope.auth_service.login(email, password)
    await container.close()
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from redis.asyncio import ConnectionPool, Redis

from warden.application.services.auth_service import AuthService
from warden.application.services.purge_service import PurgeService
from warden.application.services.token_authority import (
    TokenAuthority,
    TokenLifetimes,
)
from warden.application.services.token_reaper import TokenReaper
from warden.core.clock import Clock, utc_now
from warden.core.config import Settings, get_settings
from warden.domain.protocols import LoggerProtocol
from warden.infrastructure.cache.redis_adapter import RedisAdapter
from warden.infrastructure.cache.session_cache import RedisSessionCache
from warden.infrastructure.jobs.purge_scheduler import PurgeScheduler
from warden.infrastructure.logging.console_adapter import ConsoleAdapter
from warden.infrastructure.persistence.database import Database
from warden.infrastructure.persistence.registry import (
    EntityRegistry,
    default_registry,
)
from warden.infrastructure.persistence.repositories.stored_file_repository import (
    StoredFileRepository,
)
from warden.infrastructure.persistence.repositories.token_repository import (
    TokenRepository,
)
from warden.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)
from warden.infrastructure.persistence.soft_delete import SoftDeleteGateway
from warden.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from warden.infrastructure.security.jwt_service import JWTService


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceScope:
    """Services bound to one database session (one unit of work)."""

    gateway: SoftDeleteGateway
    users: UserRepository
    files: StoredFileRepository
    tokens: TokenRepository
    token_authority: TokenAuthority
    auth_service: AuthService


@dataclass(kw_only=True)
class Container:
    """Application-scoped services."""

    settings: Settings
    logger: LoggerProtocol
    database: Database
    redis: Redis
    cache: RedisAdapter
    session_cache: RedisSessionCache
    token_service: JWTService
    password_service: BcryptPasswordService
    registry: EntityRegistry
    purge_service: PurgeService
    token_reaper: TokenReaper
    purge_scheduler: PurgeScheduler
    lifetimes: TokenLifetimes
    clock: Clock = utc_now

    @asynccontextmanager
    async def scope(self) -> AsyncGenerator[ServiceScope, None]:
        """Open one session; commit on exit, roll back on error."""
        async with self.database.get_session() as session:
            gateway = SoftDeleteGateway(session, self.registry, clock=self.clock)
            users = UserRepository(gateway)
            files = StoredFileRepository(gateway)
            tokens = TokenRepository(session)
            token_authority = TokenAuthority(
                token_service=self.token_service,
                token_repo=tokens,
                user_repo=users,
                session_cache=self.session_cache,
                lifetimes=self.lifetimes,
                clock=self.clock,
            )
            yield ServiceScope(
                gateway=gateway,
                users=users,
                files=files,
                tokens=tokens,
                token_authority=token_authority,
                auth_service=AuthService(
                    token_authority=token_authority,
                    user_repo=users,
                    file_repo=files,
                    password_service=self.password_service,
                    session_cache=self.session_cache,
                    logger=self.logger,
                ),
            )

    async def close(self) -> None:
        """Stop the scheduler and release connections."""
        await self.purge_scheduler.stop()
        await self.redis.aclose()
        await self.database.close()


def build_container(
    settings: Settings | None = None,
    *,
    redis_client: Redis | None = None,
    logger: LoggerProtocol | None = None,
    clock: Clock = utc_now,
) -> Container:
    """Build the container.

    Args:
        settings: Settings to use (default: ``get_settings()``).
        redis_client: Pre-built client (tests pass a fakeredis client).
        logger: Logger to use (default: ConsoleAdapter from settings).
        clock: Source of "now" for every time-dependent service.
    """
    settings = settings or get_settings()
    logger = logger or ConsoleAdapter(
        use_json=settings.use_json_logs, level=settings.log_level
    )

    if redis_client is None:
        pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=50,
            decode_responses=False,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        redis_client = Redis(connection_pool=pool)

    database = Database(database_url=settings.database_url, echo=settings.db_echo)
    cache = RedisAdapter(redis_client, timeout_seconds=settings.cache_timeout_seconds)
    registry = default_registry()

    purge_service = PurgeService(
        database=database,
        registry=registry,
        logger=logger,
        retention_days=settings.purge_retention_days,
        lookback_days=settings.purge_lookback_days,
        clock=clock,
    )
    token_reaper = TokenReaper(database=database, logger=logger, clock=clock)

    return Container(
        settings=settings,
        logger=logger,
        database=database,
        redis=redis_client,
        cache=cache,
        session_cache=RedisSessionCache(
            cache, ttl_seconds=settings.session_cache_ttl_seconds
        ),
        token_service=JWTService(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            clock=clock,
        ),
        password_service=BcryptPasswordService(cost_factor=settings.bcrypt_rounds),
        registry=registry,
        purge_service=purge_service,
        token_reaper=token_reaper,
        purge_scheduler=PurgeScheduler(
            purge_service=purge_service,
            logger=logger,
            token_reaper=token_reaper,
            run_hour=settings.purge_run_hour,
            clock=clock,
        ),
        lifetimes=TokenLifetimes.from_settings(settings),
        clock=clock,
    )
