from flask import Flask, request

ALLOWED_METHODS = 'GET, HEAD, POST, PUT, DELETE, OPTIONS'
DEFAULT_ALLOWED_HEADERS = 'Content-Type, If-None-Match'
EXPOSED_HEADERS = 'ETag, Cache-Control'


def init_cors(app: Flask):
    """Reflect the caller's Origin and allow credentialed (cookie) requests."""

    @app.after_request
    def apply_cors(response):
        origin = request.headers.get('Origin')
        if not origin or not app.config.get('CORS_ALLOW_CREDENTIALS'):
            return response
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers['Access-Control-Allow-Credentials'] = 'true'
        response.headers['Access-Control-Expose-Headers'] = EXPOSED_HEADERS
        response.vary.add('Origin')
        if request.method == 'OPTIONS':
            response.headers['Access-Control-Allow-Methods'] = ALLOWED_METHODS
            response.headers['Access-Control-Allow-Headers'] = request.headers.get(
                'Access-Control-Request-Headers', DEFAULT_ALLOWED_HEADERS
            )
        return response

    return app
