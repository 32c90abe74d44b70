"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .datetime_utils import parse_optional_date
from .table_state import GoToPage, SetPageSize, TableState, update

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Please sign in to continue"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"error": "You do not have permission"}), 403
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Translate domain errors into JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"error": str(e)}), 403
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"error": "Failed to load data"}), 500

    return wrapper


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    try:
        return Role(session.get("role"))
    except ValueError:
        raise AuthorizationError("Unknown role")


def page_args() -> tuple[int, int]:
    try:
        page = int(request.args.get("page", 1))
        page_size = int(request.args.get("page_size", DEFAULT_PAGE_SIZE))
    except ValueError:
        raise ValidationError("page and page_size must be integers")
    state = update(TableState(), SetPageSize(page_size))
    state = update(state, GoToPage(page))
    return state.page, state.page_size


def date_arg(name: str):
    try:
        return parse_optional_date(request.args.get(name))
    except ValueError:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)")


def form_data() -> dict:
    """Accept either a JSON body or a submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
