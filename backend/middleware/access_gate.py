"""
Access gate middleware.

Evaluates an ordered list of path rules before any route runs. Requests
under a protected path must carry valid HTTP Basic credentials; everything
else passes straight through. The user API itself contains no auth logic.
"""

import base64
import binascii
import hmac
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import bcrypt
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from constants import ApiPaths, HTTPStatus

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ('$2a$', '$2b$', '$2y$')


class Requirement(str, Enum):
    """What a matching request must satisfy to reach the application."""

    AUTHENTICATED = 'AUTHENTICATED'
    PERMIT_ALL = 'PERMIT_ALL'


def _compile_pattern(pattern: str) -> re.Pattern:
    """
    Translate an Ant-style path pattern to a regex.

    '**' spans path segments, '*' stays within one segment, '?' is one
    character. A trailing '/**' also matches the bare prefix.
    """
    trailing_any = pattern.endswith('/**')
    body = pattern[:-3] if trailing_any else pattern

    parts = []
    i = 0
    while i < len(body):
        if body.startswith('**', i):
            parts.append('.*')
            i += 2
        elif body[i] == '*':
            parts.append('[^/]*')
            i += 1
        elif body[i] == '?':
            parts.append('[^/]')
            i += 1
        else:
            parts.append(re.escape(body[i]))
            i += 1

    regex = ''.join(parts)
    if trailing_any:
        regex += '(/.*)?'
    return re.compile(f'^{regex}$')


@dataclass(frozen=True)
class AccessRule:
    """A path pattern paired with the requirement for matching requests."""

    pattern: str
    requirement: Requirement
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_regex', _compile_pattern(self.pattern))

    def matches(self, path: str) -> bool:
        return self._regex.match(path) is not None


def default_rules() -> List[AccessRule]:
    """API paths require authentication; everything else is public."""
    return [
        AccessRule(f"{ApiPaths.API_PREFIX}/**", Requirement.AUTHENTICATED),
        AccessRule("/**", Requirement.PERMIT_ALL),
    ]


def resolve_requirement(rules: Sequence[AccessRule], path: str) -> Requirement:
    """
    Return the requirement of the first rule matching path.

    Paths no rule matches are treated as AUTHENTICATED.
    """
    for rule in rules:
        if rule.matches(path):
            return rule.requirement
    return Requirement.AUTHENTICATED


def parse_basic_credentials(authorization: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Extract (username, password) from a Basic Authorization header.

    Returns:
        Credentials tuple, or None when the header is missing or malformed
    """
    if not authorization:
        return None
    scheme, _, encoded = authorization.partition(' ')
    if scheme.lower() != 'basic' or not encoded:
        return None
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(':')
    if not sep:
        return None
    return username, password


def is_bcrypt_hash(value: str) -> bool:
    return value.startswith(BCRYPT_PREFIXES)


def password_matches(candidate: str, configured: str) -> bool:
    """
    Check a presented password against the configured one.

    The configured value is either plaintext or a bcrypt hash such as
    '$2b$12$...'. A malformed hash never matches.
    """
    if is_bcrypt_hash(configured):
        try:
            return bcrypt.checkpw(candidate.encode('utf-8'), configured.encode('utf-8'))
        except ValueError:
            logger.error("Configured password looks like a bcrypt hash but cannot be parsed")
            return False
    return hmac.compare_digest(candidate.encode('utf-8'), configured.encode('utf-8'))


class AccessGateMiddleware(BaseHTTPMiddleware):
    """
    Middleware that rejects unauthenticated requests to protected paths.

    Rejected requests get 401 with a Basic challenge and never reach a route.
    """

    def __init__(
        self,
        app,
        username: str,
        password: str,
        rules: Optional[Sequence[AccessRule]] = None,
        realm: str = "User Management",
    ):
        super().__init__(app)
        self.username = username
        self.password = password
        self.rules = list(rules) if rules is not None else default_rules()
        self.realm = realm

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if resolve_requirement(self.rules, path) == Requirement.PERMIT_ALL:
            return await call_next(request)

        credentials = parse_basic_credentials(request.headers.get('authorization'))
        if credentials is None:
            logger.info(f"Rejected unauthenticated request: {request.method} {path}")
            return self._challenge()

        if not self._check(*credentials):
            logger.warning(f"Rejected bad credentials for {credentials[0]!r}: {request.method} {path}")
            return self._challenge()

        return await call_next(request)

    def _check(self, username: str, password: str) -> bool:
        # Both comparisons always run
        user_ok = hmac.compare_digest(username.encode('utf-8'), self.username.encode('utf-8'))
        pass_ok = password_matches(password, self.password)
        return user_ok and pass_ok

    def _challenge(self) -> JSONResponse:
        return JSONResponse(
            status_code=HTTPStatus.UNAUTHORIZED,
            content={"detail": "Not authenticated"},
            headers={"WWW-Authenticate": f'Basic realm="{self.realm}"'},
        )
