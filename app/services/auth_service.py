"""Backend auth service: sessions, password sign-in and the reset-code flow.

Every method returns an ``AuthResult``; failures are reported in
``result.error`` and never raised to the caller.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.security import (
    RESET_PURPOSE,
    create_access_token,
    create_reset_token,
    decode_token,
    generate_reset_code,
    get_password_hash,
    verify_password,
)
from app.crud.profile import default_display_name
from app.models.auth_user import AuthSession, AuthUser
from app.schemas.auth import AuthResult, SessionUser
from app.services import email as email_service
from app.services.email_templates import build_password_reset_code_email

logger = logging.getLogger(__name__)

Mailer = Callable[..., None]


def _session_user(user: AuthUser) -> SessionUser:
    return SessionUser(id=user.id, email=user.email, name=user.name, avatar_url=user.avatar_url)


class AuthService:
    """Password auth over the ``auth_users`` / ``auth_sessions`` tables."""

    def __init__(self, db: Session, mailer: Optional[Mailer] = None):
        self.db = db
        self.mailer = mailer or email_service.send_email

    # ----- Lookups -----
    def _get_by_email(self, email: str) -> Optional[AuthUser]:
        stmt = select(AuthUser).where(AuthUser.email == email.strip().lower()).limit(1)
        return self.db.scalars(stmt).first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    # ----- Accounts -----
    def create_user(self, email: str, password: str, name: Optional[str] = None) -> AuthResult:
        """Register a new account (used by seeding and tests)."""
        email = email.strip().lower()
        user = AuthUser(
            email=email,
            password_hash=get_password_hash(password),
            name=name or default_display_name(email),
        )
        self.db.add(user)
        try:
            self._commit()
        except IntegrityError:
            return AuthResult.failure("User already registered", code="user_exists")
        self.db.refresh(user)
        logger.info(f"[AUTH] Created user {user.id}")
        return AuthResult(data=_session_user(user))

    # ----- Sessions -----
    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        user = self._get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"[AUTH] Failed sign-in for {email}")
            return AuthResult.failure("Invalid login credentials", code="invalid_credentials")

        token = create_access_token({"sub": user.id, "email": user.email})
        payload = decode_token(token)
        self.db.add(AuthSession(id=payload["jti"], user_id=user.id))
        try:
            self._commit()
        except SQLAlchemyError as e:
            logger.error(f"[AUTH] Could not store session for {user.id}: {e}")
            return AuthResult.failure("Could not create session", code="session_error")

        logger.info(f"[AUTH] User {user.id} signed in")
        return AuthResult(data={"access_token": token, "user": _session_user(user)})

    def get_session(self, token: Optional[str]) -> AuthResult:
        """Resolve a token to its signed-in user; ``data`` is None when there is no session."""
        if not token:
            return AuthResult()
        try:
            payload = decode_token(token)
        except HTTPException:
            return AuthResult()

        auth_session = self.db.get(AuthSession, payload.get("jti"))
        if auth_session is None or auth_session.revoked_at is not None:
            return AuthResult()
        user = self.db.get(AuthUser, payload.get("sub"))
        if user is None:
            return AuthResult()
        return AuthResult(data={"session_id": auth_session.id, "user": _session_user(user)})

    def sign_out(self, token: Optional[str]) -> AuthResult:
        result = self.get_session(token)
        if result.data is None:
            return AuthResult()
        auth_session = self.db.get(AuthSession, result.data["session_id"])
        auth_session.revoked_at = datetime.utcnow()
        self._commit()
        logger.info(f"[AUTH] Session {auth_session.id} revoked")
        return AuthResult()

    # ----- Password reset -----
    def send_reset_password_email(self, email: str) -> AuthResult:
        """Store a hashed one-time code and email it to the user."""
        user = self._get_by_email(email)
        if not user:
            return AuthResult.failure("User not found", code="user_not_found")

        code = generate_reset_code()
        user.reset_code_hash = get_password_hash(code)
        user.reset_code_expires_at = datetime.utcnow() + timedelta(minutes=settings.RESET_CODE_EXPIRE_MINUTES)
        self._commit()

        subject, html_body, text_body = build_password_reset_code_email(
            name=user.name or default_display_name(user.email),
            code=code,
            expires_in_minutes=settings.RESET_CODE_EXPIRE_MINUTES,
        )
        try:
            self.mailer(to_email=user.email, subject=subject, html_content=html_body, text_content=text_body)
        except email_service.EmailNotConfigured as e:
            logger.error(f"[AUTH] Reset code not sent: {e}")
            return AuthResult.failure(str(e), code="email_not_configured")
        except OSError as e:
            logger.error(f"[AUTH] Reset code email to {user.email} failed: {e}")
            return AuthResult.failure("Failed to send verification email", code="email_failed")

        logger.info(f"[AUTH] Reset code sent to user {user.id}")
        return AuthResult(data={"email": user.email})

    def exchange_reset_code(self, email: str, code: str) -> AuthResult:
        """Trade a valid emailed code for a short-lived reset token."""
        user = self._get_by_email(email)
        if (
            not user
            or not user.reset_code_hash
            or not user.reset_code_expires_at
            or user.reset_code_expires_at < datetime.utcnow()
            or not verify_password(code.strip(), user.reset_code_hash)
        ):
            return AuthResult.failure("Invalid or expired code", code="invalid_code")

        user.reset_code_hash = None
        user.reset_code_expires_at = None
        self._commit()
        return AuthResult(data={"reset_token": create_reset_token(user.id)})

    def reset_password(self, reset_token: str, new_password: str) -> AuthResult:
        try:
            payload = decode_token(reset_token, purpose=RESET_PURPOSE)
        except HTTPException:
            return AuthResult.failure("Invalid or expired reset token", code="invalid_token")

        user = self.db.get(AuthUser, payload.get("sub"))
        if not user:
            return AuthResult.failure("User not found", code="user_not_found")

        user.password_hash = get_password_hash(new_password)
        self._commit()
        logger.info(f"[AUTH] Password updated for user {user.id}")
        return AuthResult(data=_session_user(user))

    # ----- Auth-side profile -----
    def update_user(self, user_id: str, *, name: Optional[str] = None, avatar_url: Optional[str] = None) -> AuthResult:
        user = self.db.get(AuthUser, user_id)
        if not user:
            return AuthResult.failure("User not found", code="user_not_found")
        user.name = name
        user.avatar_url = avatar_url
        self._commit()
        return AuthResult(data=_session_user(user))
