"""Session login endpoints for the admin surface."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import jsonify
from flask_login import login_user, logout_user
from sqlalchemy import func, select

from causeway.auth import AuthContext, auth_required
from causeway.errors import Unauthorized
from causeway.extensions import db, limiter
from causeway.models import AuditAction, User
from causeway.schemas import LoginRequest
from causeway.security import auth_rate_limit
from causeway.services.audit import record_action

from . import api_bp
from .helpers import parse_body, success


def serialize_user(user: User) -> dict:
    return {
        'id': user.id,
        'email': user.email,
        'name': user.name,
        'role': user.role.value,
        'lastLoginAt': user.last_login_at.isoformat() if user.last_login_at else None,
    }


@api_bp.route('/auth/login', methods=['POST'])
@limiter.limit(auth_rate_limit)
def login():
    data = parse_body(LoginRequest)
    email = data.email.lower()
    user = db.session.execute(
        select(User).where(func.lower(User.email) == email)
    ).scalar_one_or_none()

    if user is None or not user.is_active or not user.check_password(data.password):
        raise Unauthorized('Invalid email or password')

    user.last_login_at = datetime.now(timezone.utc)
    db.session.commit()
    login_user(user)

    record_action(
        AuditAction.LOGIN,
        entity_type='User',
        entity_id=user.id,
        user_id=user.id,
        details={'email': user.email},
    )
    return success(serialize_user(user))


@api_bp.route('/auth/logout', methods=['POST'])
def logout():
    logout_user()
    return jsonify({'success': True, 'message': 'Logged out'})


@api_bp.route('/auth/me', methods=['GET'])
@auth_required
def me(auth: AuthContext):
    return success(serialize_user(db.session.get(User, auth.user_id)))
