from .responses import ok, error, validation_error_response, internal_error_response
from .auth import auth_required, optional_auth, role_required, vendor_required
from .validation import validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    decode_token,
    issue_tokens,
    TokenError,
)
from .pagination import page_params, paginate
from .phone import normalize_phone

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'internal_error_response',
    'auth_required',
    'optional_auth',
    'role_required',
    'vendor_required',
    'create_access_token',
    'create_refresh_token',
    'decode_token',
    'issue_tokens',
    'TokenError',
    'validate_schema',
    'transactional',
    'page_params',
    'paginate',
    'normalize_phone',
]
