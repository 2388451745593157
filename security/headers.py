from flask import request


def init_security_headers(app):

    @app.after_request
    def add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
        resp.headers.setdefault(
            "Strict-Transport-Security",
            "max-age=15552000; includeSubDomains; preload"
        )
        resp.headers.setdefault("X-Frame-Options", "DENY")
        # JSON only, nothing to load
        resp.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")

        # generation results and history are per-user
        if request.path.startswith("/api/"):
            resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
            resp.headers["Pragma"] = "no-cache"
            resp.headers["Expires"] = "0"
        return resp
