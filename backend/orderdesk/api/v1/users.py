"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from orderdesk.api.deps import (
    json_response,
    parse_page_request,
    require_auth,
    service_kwargs,
    timing,
)
from orderdesk.schemas import UserCreateSchema, UserQuerySchema, UserSchema, UserUpdateSchema
from orderdesk.services.users.dto import UserCreateIn, UserListIn, UserUpdateIn
from orderdesk.services.users.service import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_query_schema = UserQuerySchema()
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()


@bp.get("")
@require_auth
@timing
def list_users():
    """Return paginated users."""

    params = user_query_schema.load(request.args)
    dto = UserListIn(page=parse_page_request(params), role=params["role"])
    page = UserService(**service_kwargs()).list(dto)
    return json_response(page.map(user_schema.dump).to_dict())


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    user = UserService(**service_kwargs()).get(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.post("")
@require_auth
@timing
def create_user():
    """Register a user; answers 409 when the email is taken."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = UserService(**service_kwargs()).create(UserCreateIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.patch("/<int:user_id>")
@require_auth
@timing
def update_user(user_id: int):
    payload = user_update_schema.load(request.get_json(silent=True) or {})
    user = UserService(**service_kwargs()).update(UserUpdateIn(user_id=user_id, **payload))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@require_auth
@timing
def delete_user(user_id: int):
    UserService(**service_kwargs()).delete(user_id)
    return "", 204
