from email_validator import validate_email, EmailNotValidError
from flask import request

from utils.errors import ValidationError

ROLES = ('driver', 'maid')


def not_empty(value):
    return isinstance(value, str) and value.strip() != ''


def is_email(value):
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def min_length(n):
    def check(value):
        return isinstance(value, str) and len(value) >= n
    return check


def one_of(choices):
    def check(value):
        return value in choices
    return check


def int_between(low, high):
    def check(value):
        # bool is an int subclass; a JSON true is not a rating
        if isinstance(value, bool):
            return False
        if isinstance(value, str) and value.strip().lstrip("-").isdecimal():
            try:
                value = int(value)
            except ValueError:
                return False
        return isinstance(value, int) and low <= value <= high
    return check


def optional(check):
    def wrapped(value):
        return value is None or check(value)
    return wrapped


def is_string(value):
    return isinstance(value, str)


def is_boolean(value):
    return isinstance(value, bool)


def validate(data, rules):
    """Run ``(field, check, message)`` rules against a JSON body.

    Raises ValidationError listing every failing field.
    """
    details = [
        {"field": field, "msg": message}
        for field, check, message in rules
        if not check(data.get(field))
    ]
    if details:
        raise ValidationError(details[0]["msg"], details=details)
    return data


def json_body():
    """The request's JSON object, ``{}`` when there is no usable body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
