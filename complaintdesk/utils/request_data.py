"""
Request body helpers shared by the JSON routes
"""

from flask import request
from complaintdesk.services.errors import ValidationError


def get_json_body():
    """
    The request's JSON object, or {} when no JSON was sent.

    Raises ValidationError when the body is JSON but not an object.
    """
    data = request.get_json(silent=True)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')

    return data


def get_str_field(data, field, strip=True):
    """String value of a field, '' when missing"""
    value = data.get(field)

    if value is None:
        return ''

    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string.')

    return value.strip() if strip else value
