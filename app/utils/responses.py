from flask import jsonify


def ok(data=None, message="success", status=200):
    payload = {"status": "success", "message": message}
    if data is not None:
        payload["data"] = data
    return jsonify(payload), status


def error(message, status=400, code=None, errors=None):
    payload = {
        "status": "error",
        "message": message,
        "code": code or status
    }
    if errors:
        payload["errors"] = errors
    return jsonify(payload), status


def validation_error_response(errors):
    """Shape pydantic ``errors()`` output as field-level messages."""
    fields = [
        {
            "field": ".".join(str(part) for part in e.get("loc", ())),
            "message": e.get("msg", "Invalid value"),
        }
        for e in errors
    ]
    return error("Validation error", status=400, code="VALIDATION_ERROR", errors=fields)


def internal_error_response():
    return error("An unexpected error occurred, please try again later", status=500, code="INTERNAL_ERROR")
