"""Security configuration and middleware."""

from flask import abort, request


MAX_JSON_BYTES = 1024 * 1024


def configure_security_headers(app):
    """Configure security headers."""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses."""
        # Prevent MIME type sniffing
        response.headers['X-Content-Type-Options'] = 'nosniff'

        # Prevent clickjacking
        response.headers['X-Frame-Options'] = 'DENY'

        # Control referrer information
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        csp_directives = [
            "default-src 'self'",
            "style-src 'self' 'unsafe-inline'",
            "img-src 'self' data: https:",
            "font-src 'self'",
            "connect-src 'self'",
            "frame-ancestors 'none'",
            "base-uri 'self'",
            "form-action 'self'"
        ]
        response.headers['Content-Security-Policy'] = "; ".join(csp_directives)

        # HSTS for HTTPS (only add if using HTTPS)
        if request.is_secure:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    return app


def configure_secure_session(app):
    """Configure secure session settings."""
    app.config.update(
        SESSION_COOKIE_HTTPONLY=True,  # Prevent JavaScript access
        SESSION_COOKIE_SAMESITE='Lax',
        PERMANENT_SESSION_LIFETIME=7200,  # 2 hours
    )
    return app


def validate_input_length(app):
    """Middleware to validate JSON payload size; uploads are bounded by MAX_CONTENT_LENGTH."""
    @app.before_request
    def limit_request_size():
        if (
            request.is_json
            and request.content_length
            and request.content_length > MAX_JSON_BYTES
        ):
            abort(413)  # Payload Too Large

    return app


# Rate limiting decorators
def auth_rate_limit():
    """Rate limit for authentication endpoints."""
    return "5 per minute"


def api_rate_limit():
    """Rate limit for mutating API endpoints."""
    return "100 per hour"


__all__ = [
    'configure_security_headers',
    'configure_secure_session',
    'validate_input_length',
    'auth_rate_limit',
    'api_rate_limit',
]
