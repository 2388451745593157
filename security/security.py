"""
Request input helpers: JSON body parsing, sanitizing, schema checks.
"""

import re

from flask import current_app, request
from jsonschema import validate
from jsonschema import ValidationError as SchemaError

from core.errors import ValidationError


# C0 control characters except \t \n \r
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


# -------------------- utils --------------------
def _sanitize_payload(value):
    """Strip control characters from strings, recursing into lists and dicts."""
    if isinstance(value, str):
        return _CONTROL_RE.sub("", value)
    elif isinstance(value, list):
        return [_sanitize_payload(v) for v in value]
    elif isinstance(value, dict):
        return {k: _sanitize_payload(v) for k, v in value.items()}
    return value


def _coerce_arrays(data, schema):
    # a lone string where an array is expected becomes a one-item array
    for key, prop in (schema or {}).get("properties", {}).items():
        if key in data and prop.get("type") == "array":
            val = data[key]
            if isinstance(val, str):
                data[key] = [val]
            elif val is None:
                data[key] = []
    return data


def validate_schema(data, schema):
    """JSON Schema check; failures become ValidationError (400)."""
    if not schema:
        return data
    try:
        validate(instance=data, schema=schema)
    except SchemaError as e:
        if e.validator == "maxLength":
            # e.message echoes the whole value back
            field = e.absolute_path[0] if e.absolute_path else "value"
            raise ValidationError(
                f"Invalid request: '{field}' is too long (max {e.validator_value} characters)"
            ) from e
        raise ValidationError(f"Invalid request: {e.message}") from e
    return data


def clean_payload(payload, schema=None):
    """Sanitize + array coercion + schema check for an already parsed body."""
    if not isinstance(payload, dict):
        raise ValidationError("JSON object body required")
    safe = {k: _sanitize_payload(v) for k, v in payload.items()}
    safe = _coerce_arrays(safe, schema)
    return validate_schema(safe, schema)


def json_body():
    """Parsed JSON body, or None when absent/invalid. Never aborts."""
    cl = request.content_length
    limit = current_app.config.get("MAX_CONTENT_LENGTH")
    if limit and cl and cl > limit:
        return None
    return request.get_json(silent=True, force=True)


def safe_args(schema=None):
    """GET query parameters, stripped and schema-checked."""
    args = {}
    for k, v in request.args.items():
        v = v.strip()
        if v:
            args[k] = v
    return validate_schema(args, schema)
