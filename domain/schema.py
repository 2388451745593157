# ===== Input shapes (JSON Schema) =====
# Types and id lengths are checked here. Emptiness, text length and target
# count are enforced by the generation pipeline so the same rules apply
# outside HTTP.
from domain.policies import MAX_ID_CHARS

_id_string = {"type": "string", "maxLength": MAX_ID_CHARS}

# ===== JSON API ( /api/generate ) POST schema =====
api_generate_schema = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "targets": {"type": "array", "items": _id_string},
        "tone": _id_string,
        # field names of the original web client
        "content": {"type": "string"},
        "platforms": {"type": "array", "items": _id_string},
    },
    "additionalProperties": True,
}

# ===== /api/history GET query =====
history_query_schema = {
    "type": "object",
    "properties": {
        "limit": {"type": "string", "pattern": r"^\d{1,4}$"},
    },
    "additionalProperties": True,
}
