from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidQRCodeError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

# Session keys are written by the hosted auth integration.
SESSION_USER_ID = "user_id"
SESSION_ROLE = "role"


def current_user_id() -> int:
    return int(session[SESSION_USER_ID])


def current_role() -> Role:
    return Role(session.get(SESSION_ROLE))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if SESSION_USER_ID not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if SESSION_USER_ID not in session:
            return jsonify({"success": False, "message": "Please sign in to continue"}), 401
        if session.get(SESSION_ROLE) != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Access denied"}), 403
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate domain errors into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except (ValidationError, InvalidQRCodeError) as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def date_arg(name: str) -> Optional[date]:
    value = (request.args.get(name) or "").strip()
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Invalid date for {name} (YYYY-MM-DD)")
