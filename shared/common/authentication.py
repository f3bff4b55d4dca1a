# shared/common/authentication.py
"""
JWT authentication for API requests
"""

import jwt
import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple

from django.conf import settings
from rest_framework import authentication, exceptions
from rest_framework.request import Request

logger = logging.getLogger(__name__)


class JWTAuthentication(authentication.BaseAuthentication):
    """
    Bearer token authentication.

    Requests without an Authorization header stay anonymous, which lets
    views decide whether a guest may proceed. A header that is present
    but invalid always fails.
    """

    keyword = 'Bearer'

    def authenticate(self, request: Request) -> Optional[Tuple[Any, Dict]]:
        auth_header = authentication.get_authorization_header(request)

        if not auth_header:
            return None

        try:
            auth_parts = auth_header.decode('utf-8').split()
        except UnicodeDecodeError:
            raise exceptions.AuthenticationFailed('Invalid token header encoding')

        if len(auth_parts) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header format')

        if auth_parts[0].lower() != self.keyword.lower():
            return None

        return self.authenticate_token(auth_parts[1])

    def authenticate_token(self, token: str) -> Tuple[Any, Dict]:
        """Validate and decode JWT token"""
        jwt_settings = settings.JWT_SETTINGS
        try:
            payload = jwt.decode(
                token,
                jwt_settings['VERIFYING_KEY'],
                algorithms=[jwt_settings['ALGORITHM']],
                issuer=jwt_settings['ISSUER'],
                options={'require': ['exp', 'iat', 'sub', 'iss']}
            )
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired')
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            raise exceptions.AuthenticationFailed('Invalid token')

        return (TokenUser(payload), payload)

    def authenticate_header(self, request: Request) -> str:
        return self.keyword


class TokenUser:
    """
    User object created from JWT token payload.
    The identity provider owns the user record; services only see claims.
    """

    def __init__(self, payload: Dict):
        self.payload = payload
        self.id = payload.get('sub')
        self.email = payload.get('email')
        self.roles = payload.get('roles', [])
        self.is_active = True
        self.is_authenticated = True
        self.is_anonymous = False

    def __str__(self) -> str:
        return f"TokenUser({self.id})"


class JWTTokenGenerator:
    """
    Issue access tokens with the configured signing key.
    Used by the identity provider and by tests.
    """

    @staticmethod
    def generate_access_token(
        user_id: str,
        email: str = None,
        roles: list = None,
        extra_claims: Dict = None
    ) -> str:
        now = datetime.now(timezone.utc)
        jwt_settings = settings.JWT_SETTINGS

        payload = {
            'sub': str(user_id),
            'email': email,
            'roles': roles or [],
            'iat': now,
            'exp': now + jwt_settings['ACCESS_TOKEN_LIFETIME'],
            'iss': jwt_settings['ISSUER'],
            'type': 'access',
        }
        if extra_claims:
            payload.update(extra_claims)

        return jwt.encode(
            payload,
            jwt_settings['SIGNING_KEY'],
            algorithm=jwt_settings['ALGORITHM']
        )
