from __future__ import annotations

import json
import logging
import os
import re
import secrets
import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from flask import Request, current_app
from werkzeug.security import check_password_hash, generate_password_hash

from .assessment import Assessment


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
EXTENSION_KEY = "parkinsoncare.sessions"


class AuthError(Exception):
    def __init__(self, code: str, status_code: int = 401):
        super().__init__(code)
        self.code = code
        self.status_code = status_code


@dataclass
class User:
    id: str
    username: str
    email: str
    password_hash: str
    created_at: str
    assessments: List[Assessment] = field(default_factory=list)

    def public_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at,
            "assessmentCount": len(self.assessments),
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "passwordHash": self.password_hash,
            "createdAt": self.created_at,
            "assessments": [a.to_dict() for a in self.assessments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            id=data["id"],
            username=data["username"],
            email=data["email"],
            password_hash=data["passwordHash"],
            created_at=data["createdAt"],
            assessments=[Assessment.from_dict(a) for a in data.get("assessments") or []],
        )


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    created_at: str


class UserStore:
    """Users keyed by email, optionally mirrored to a JSON file after every write."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self._lock = threading.RLock()
        self._users: Dict[str, User] = {}
        if path and os.path.exists(path):
            self._load()

    def _load(self) -> None:
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        for item in raw.get("users", []):
            user = User.from_dict(item)
            self._users[user.email] = user
        logger.info("Loaded %d users from %s", len(self._users), self.path)

    def _save(self) -> None:
        if not self.path:
            return
        payload = {"users": [u.to_dict() for u in self._users.values()]}
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        os.replace(tmp_path, self.path)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._users.get(email)

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.id == user_id:
                    return user
            return None

    def add(self, user: User) -> None:
        with self._lock:
            if user.email in self._users:
                raise AuthError("email_already_registered", 409)
            self._users[user.email] = user
            try:
                self._save()
            except OSError:
                del self._users[user.email]
                raise

    def append_assessment(self, user_id: str, assessment: Assessment) -> None:
        with self._lock:
            user = self.get_by_id(user_id)
            if user is None:
                raise AuthError("unknown_user")
            if any(a.record_id == assessment.record_id for a in user.assessments):
                raise AuthError("duplicate_record_id", 409)
            user.assessments.append(assessment)
            try:
                self._save()
            except OSError:
                user.assessments.pop()
                raise


def _require_strings(*values) -> None:
    if any(v is not None and not isinstance(v, str) for v in values):
        raise AuthError("invalid_fields", 400)


class SessionManager:
    """register / login / logout / current_session over a UserStore.

    The logged-in user is never held globally: callers pass the Session (or its
    bearer token) explicitly.
    """

    def __init__(self, store: Optional[UserStore] = None):
        self.store = store or UserStore()
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}

    def register(self, username: str, email: str, password: str) -> User:
        _require_strings(username, email, password)
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise AuthError("missing_fields", 400)
        if not EMAIL_RE.match(email):
            raise AuthError("invalid_email", 400)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError("password_too_short", 400)

        user = User(
            id=f"{time.time_ns()}",
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self.store.add(user)
        logger.info("register: user_id=%s", user.id)
        return user

    def login(self, email: str, password: str) -> Session:
        _require_strings(email, password)
        email = (email or "").strip()
        if not email or not password:
            raise AuthError("missing_fields", 400)
        user = self.store.get_by_email(email)
        if user is None or not check_password_hash(user.password_hash, password):
            raise AuthError("invalid_credentials")

        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user.id,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._sessions[session.token] = session
        logger.info("login: user_id=%s", user.id)
        return session

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info("logout: user_id=%s", session.user_id)

    def current_session(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def user_for(self, session: Session) -> User:
        user = self.store.get_by_id(session.user_id)
        if user is None:
            raise AuthError("invalid_session")
        return user

    def add_assessment(self, session: Session, assessment: Assessment) -> None:
        self.store.append_assessment(session.user_id, assessment)

    def assessments(self, session: Session) -> List[Assessment]:
        return list(self.user_for(session).assessments)

    def get_assessment(self, session: Session, record_id: str) -> Optional[Assessment]:
        for assessment in self.user_for(session).assessments:
            if assessment.record_id == record_id:
                return assessment
        return None


def extract_bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "").strip()
    if header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip()
    return None


def get_session_manager() -> SessionManager:
    return current_app.extensions[EXTENSION_KEY]


def verify_session(request: Request) -> Session:
    """Resolve the request's bearer token into a Session or raise AuthError."""
    token = extract_bearer_token(request)
    if not token:
        raise AuthError("missing_bearer_token")
    session = get_session_manager().current_session(token)
    if session is None:
        raise AuthError("invalid_session")
    return session
