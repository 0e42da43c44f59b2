"""
Admin events endpoint: list/create/delete over the whole table.
"""
import logging
from flask import Blueprint, request, jsonify
from marshmallow import ValidationError

from ...store import StoreError
from ..auth import session_required
from ..schemas.models import EventSchema, EventCreateSchema, EventDeleteSchema
from ..utils import error_response, success_response, get_store

logger = logging.getLogger(__name__)

admin_api_bp = Blueprint('admin_api', __name__, url_prefix='/api/admin')

_events_schema = EventSchema(many=True)
_create_schema = EventCreateSchema()
_delete_schema = EventDeleteSchema()


@admin_api_bp.route('/events', methods=['GET'])
@session_required
def list_events():
    """Every event, ascending by date, no cap."""
    try:
        events = get_store().list_all()
    except StoreError as e:
        logger.error(f"Error listing events: {e}")
        return error_response(str(e), 500)
    return jsonify(_events_schema.dump(events))


@admin_api_bp.route('/events', methods=['POST'])
@session_required
def create_event():
    """
    Creates an event.

    Body: ``{event_date, title, time?, venue?}``. Returns the created
    record(s) with HTTP 201.
    """
    try:
        data = _create_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"errors": e.messages}), 400

    try:
        created = get_store().create(data)
    except StoreError as e:
        logger.error(f"Error creating event: {e}")
        return error_response(str(e), 500)
    return jsonify(_events_schema.dump(created)), 201


@admin_api_bp.route('/events', methods=['DELETE'])
@session_required
def delete_event():
    """
    Deletes an event by id.

    Unknown ids are acknowledged like existing ones, so repeated deletes of
    the same id all succeed.
    """
    try:
        data = _delete_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"errors": e.messages}), 400

    try:
        get_store().delete(data["id"])
    except StoreError as e:
        logger.error(f"Error deleting event {data['id']}: {e}")
        return error_response(str(e), 500)
    return success_response()
