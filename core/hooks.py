from flask import abort, current_app, request

from auth.entitlements import get_current_user_id


# -------------------- security hooks --------------------

def guard_payload_size():
    limit = current_app.config.get("MAX_CONTENT_LENGTH")
    if limit and request.content_length and request.content_length > limit:
        abort(413)


# -------------------- request logging --------------------

def log_client_errors(resp):
    # 4xx bodies are already {"error": ...}; never log headers (bearer tokens)
    if 400 <= resp.status_code < 500:
        current_app.logger.info(
            "[HTTP] %s %s -> %s user=%s body=%s",
            request.method,
            request.path,
            resp.status_code,
            get_current_user_id(),
            resp.get_data(as_text=True)[:300] if resp.is_json else "",
        )
    return resp


def register_hooks(app):
    app.before_request(guard_payload_size)
    app.after_request(log_client_errors)
