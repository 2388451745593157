"""Application error taxonomy.

Every error raised on purpose by the request pipeline is an ``AppError``.
The Flask error handlers in ``register_error_handlers`` turn them into the
flat ``{"error": message}`` JSON body; internal causes are logged, never
returned to the caller.
"""
from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException


class AppError(Exception):
    status = 500
    default_message = "An error occurred"

    def __init__(self, message=None, *, stage=None, cause=None):
        self.message = message or self.default_message
        self.stage = stage
        self.cause = cause
        super().__init__(self.message)

    def payload(self) -> dict:
        return {"error": self.message}


class AuthError(AppError):
    status = 401
    default_message = "Authorization required"


class ValidationError(AppError):
    status = 400
    default_message = "Missing required fields"


class QuotaExceededError(AppError):
    status = 429
    default_message = "Daily limit reached. Upgrade to Pro for unlimited generations."

    def payload(self) -> dict:
        return {"error": self.message, "limitReached": True}


class ProviderError(AppError):
    status = 502
    default_message = "Failed to generate content"

    def __init__(self, message=None, *, target=None, stage=None, cause=None, detail=None):
        if message is None and target:
            message = f"Failed to generate content for {target}"
        super().__init__(message, stage=stage, cause=cause)
        self.target = target
        # status code / body of the upstream response, for logs only
        self.detail = detail


class NotFoundError(AppError):
    status = 404
    default_message = "Not found"


class PersistenceError(AppError):
    status = 500
    default_message = "Could not save generation"


def register_error_handlers(app):
    @app.errorhandler(AppError)
    def _handle_app_error(err: AppError):
        if err.status >= 500:
            current_app.logger.error(
                "[ERROR] %s stage=%s path=%s cause=%r",
                type(err).__name__, err.stage, request.path, err.cause,
            )
        return jsonify(err.payload()), err.status

    @app.errorhandler(HTTPException)
    def _handle_http_error(err: HTTPException):
        return jsonify({"error": err.description or err.name}), err.code

    @app.errorhandler(Exception)
    def _handle_unexpected(err: Exception):
        current_app.logger.exception("[ERROR] unhandled path=%s", request.path)
        return jsonify({"error": AppError.default_message}), 500
