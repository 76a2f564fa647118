"""Membership and invite endpoints."""

from typing import Any

from core.api import caller_id, dispatch, parse_body, path_param
from core.clients import get_document_store
from core.models import InviteRequest
from core.services import members


def _list_members(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, members.list_members(get_document_store(), caller_id(event), path_param(event, "tripId"))


def _list_pending(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, members.list_pending_invites(get_document_store(), caller_id(event), path_param(event, "tripId"))


def _my_invites(event: dict[str, Any]) -> tuple[int, Any]:
    return 200, members.get_my_invites(get_document_store(), caller_id(event))


def _invite(event: dict[str, Any]) -> tuple[int, Any]:
    result = members.invite(
        get_document_store(),
        caller_id(event),
        path_param(event, "tripId"),
        parse_body(event, InviteRequest),
    )
    return 201, result


def _accept(event: dict[str, Any]) -> tuple[int, Any]:
    trip_id = members.accept_invite(get_document_store(), caller_id(event), path_param(event, "inviteId"))
    return 200, {"tripId": trip_id}


def _decline(event: dict[str, Any]) -> tuple[int, Any]:
    members.decline_invite(get_document_store(), caller_id(event), path_param(event, "inviteId"))
    return 200, {"success": True}


def _cancel(event: dict[str, Any]) -> tuple[int, Any]:
    members.cancel_invite(get_document_store(), caller_id(event), path_param(event, "inviteId"))
    return 200, {"success": True}


def _remove_member(event: dict[str, Any]) -> tuple[int, Any]:
    members.remove_member(get_document_store(), caller_id(event), path_param(event, "memberId"))
    return 200, {"success": True}


def _leave(event: dict[str, Any]) -> tuple[int, Any]:
    members.leave_trip(get_document_store(), caller_id(event), path_param(event, "tripId"))
    return 200, {"success": True}


ROUTES = {
    "GET /trips/{tripId}/members": _list_members,
    "GET /trips/{tripId}/invites": _list_pending,
    "POST /trips/{tripId}/invites": _invite,
    "POST /trips/{tripId}/leave": _leave,
    "GET /invites": _my_invites,
    "POST /invites/{inviteId}/accept": _accept,
    "POST /invites/{inviteId}/decline": _decline,
    "DELETE /invites/{inviteId}": _cancel,
    "DELETE /members/{memberId}": _remove_member,
}


def handler(event: dict[str, Any], context: object) -> dict[str, Any]:
    return dispatch(event, ROUTES)
