"""
Request/response schemas for the API.
"""
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE


def _blank_to_none(data, keys):
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and not value.strip():
            data[key] = None
    return data


class EventSchema(Schema):
    """Event as returned by the feeds"""
    id = fields.Integer(required=True)
    event_date = fields.Date(required=True)
    title = fields.String(required=True)
    time = fields.String(allow_none=True)
    venue = fields.String(allow_none=True)


class EventCreateSchema(Schema):
    """Body of POST /api/admin/events"""
    class Meta:
        unknown = EXCLUDE

    event_date = fields.Date(required=True)
    title = fields.String(required=True, validate=validate.Length(min=1, max=200))
    time = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=20))
    venue = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=200))

    @pre_load
    def normalize_optional(self, data, **kwargs):
        data = _blank_to_none(data, ("time", "venue"))
        if isinstance(data, dict) and isinstance(data.get("title"), str):
            data["title"] = data["title"].strip()
        return data


class EventDeleteSchema(Schema):
    """Body of DELETE /api/admin/events"""
    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True, strict=False)


class LoginSchema(Schema):
    """Login credentials"""
    username = fields.String(required=True)
    password = fields.String(required=True)
