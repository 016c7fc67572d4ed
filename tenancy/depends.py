from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenancy.adapter.services.email_sender import HttpEmailSender, LoggingEmailSender
from tenancy.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenancy.api.error import ClientError
from tenancy.api.utils.jwt import verify_jwt
from tenancy.app.services.email_sender import IEmailSender
from tenancy.app.services.notification_dispatcher import NotificationDispatcher
from tenancy.app.services.unit_of_work import UnitOfWork
from tenancy.domain.entities import StepOrderingPolicy
from tenancy.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


def build_email_sender() -> IEmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "http" and ApplicationConfig.EMAIL_SERVICE_URL:
        return HttpEmailSender(
            ApplicationConfig.EMAIL_SERVICE_URL,
            timeout_seconds=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
            api_key=ApplicationConfig.EMAIL_SERVICE_API_KEY or None,
        )
    return LoggingEmailSender()


dispatcher = NotificationDispatcher(build_email_sender())


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_unit_of_work_factory() -> Callable[[], UnitOfWork]:
    """Fresh session per unit of work, for work that runs concurrently"""

    def factory() -> UnitOfWork:
        return SqlAlchemyUnitOfWork(AsyncSessionLocal(), owns_session=True)

    return factory


def get_dispatcher() -> NotificationDispatcher:
    return dispatcher


def get_ordering_policy() -> StepOrderingPolicy:
    return StepOrderingPolicy(ApplicationConfig.ONBOARDING_STEP_ORDERING)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Returns:
        Decoded JWT payload containing user_id

    Raises:
        ClientError: 401 NOT_AUTHENTICATED if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Bearer token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    payload = verify_jwt(credentials.credentials)
    if payload is None or "user_id" not in payload:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return payload


async def get_current_user_id(current_user: dict = Depends(get_current_user)) -> UUID:
    try:
        return UUID(current_user["user_id"])
    except ValueError:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Invalid token subject"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
