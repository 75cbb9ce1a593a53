"""Security package for Causeway."""

from __future__ import annotations

from causeway.security.config import (
    api_rate_limit,
    auth_rate_limit,
    configure_secure_session,
    configure_security_headers,
    validate_input_length,
)

__all__ = [
    'configure_security_headers',
    'configure_secure_session',
    'validate_input_length',
    'auth_rate_limit',
    'api_rate_limit',
]
