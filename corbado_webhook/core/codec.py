"""Request codec for the two webhook actions.

Decoding turns a raw body into a request DTO in three stages:

1. Reject an empty body.
2. Parse JSON and check its shape (objects where objects are expected,
   strings where strings are expected). Missing keys and JSON null count
   as empty strings; keys match case-insensitively when there is no
   exact match.
3. Validate field contents, collecting every violation in a fixed order
   (id, projectID, action, then the action-specific fields) before
   failing.

Encoding builds a response DTO and serializes it as compact UTF-8 JSON.
"""

import json
from typing import Any

from .errors import (
    ConstructionError,
    EmptyBodyError,
    MalformedJSONError,
    ValidationFailedError,
)
from .models import (
    Action,
    AuthMethodsRequest,
    AuthMethodsResponse,
    AuthMethodsStatus,
    PasswordVerifyRequest,
    PasswordVerifyResponse,
)

_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "number",
    float: "number",
    str: "string",
    list: "array",
    dict: "object",
}


def _json_type(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


def _lookup(obj: dict[str, Any], key: str) -> Any:
    """Return obj[key], falling back to a case-insensitive key match."""
    if key in obj:
        return obj[key]
    folded = key.casefold()
    for candidate, value in obj.items():
        if candidate.casefold() == folded:
            return value
    return None


def _load_object(body: bytes) -> dict[str, Any]:
    """Parse body into a JSON object.

    Raises:
        EmptyBodyError: If body has zero length.
        MalformedJSONError: If body is not JSON or not a JSON object.
    """
    if not body:
        raise EmptyBodyError()

    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedJSONError(str(e)) from e

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise MalformedJSONError(
            f"cannot decode {_json_type(payload)} into request object"
        )
    return payload


def _object_field(obj: dict[str, Any], key: str) -> dict[str, Any]:
    value = _lookup(obj, key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise MalformedJSONError(
            f"field '{key}' must be an object, got {_json_type(value)}"
        )
    return value


def _string_field(obj: dict[str, Any], key: str, path: str) -> str:
    value = _lookup(obj, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedJSONError(
            f"field '{path}' must be a string, got {_json_type(value)}"
        )
    return value


def _envelope_violations(
    request_id: str, project_id: str, action: str, expected: Action
) -> list[str]:
    violations = []
    if not request_id:
        violations.append("field 'id' is empty")
    if not project_id:
        violations.append("field 'projectID' is empty")
    if action != expected.value:
        violations.append(f"field 'action' must be '{expected.value}'")
    return violations


def decode_auth_methods_request(body: bytes) -> AuthMethodsRequest:
    """Decode and validate the body of an 'authMethods' call.

    Args:
        body: Raw request body.

    Returns:
        Validated AuthMethodsRequest.

    Raises:
        EmptyBodyError: If body is empty.
        MalformedJSONError: If body is not a well-shaped JSON object.
        ValidationFailedError: Listing every violated field rule.
    """
    payload = _load_object(body)
    data = _object_field(payload, "data")

    request = AuthMethodsRequest(
        id=_string_field(payload, "id", "id"),
        project_id=_string_field(payload, "projectID", "projectID"),
        action=_string_field(payload, "action", "action"),
        username=_string_field(data, "username", "data.username"),
    )

    violations = _envelope_violations(
        request.id, request.project_id, request.action, Action.AUTH_METHODS
    )
    if not request.username:
        violations.append("field 'data.username' is empty")

    if violations:
        raise ValidationFailedError(violations)

    return request


def decode_password_verify_request(body: bytes) -> PasswordVerifyRequest:
    """Decode and validate the body of a 'passwordVerify' call.

    Raises:
        EmptyBodyError: If body is empty.
        MalformedJSONError: If body is not a well-shaped JSON object.
        ValidationFailedError: Listing every violated field rule.
    """
    payload = _load_object(body)
    data = _object_field(payload, "data")

    request = PasswordVerifyRequest(
        id=_string_field(payload, "id", "id"),
        project_id=_string_field(payload, "projectID", "projectID"),
        action=_string_field(payload, "action", "action"),
        username=_string_field(data, "username", "data.username"),
        password=_string_field(data, "password", "data.password"),
    )

    violations = _envelope_violations(
        request.id, request.project_id, request.action, Action.PASSWORD_VERIFY
    )
    if not request.username:
        violations.append("field 'data.username' is empty")
    if not request.password:
        violations.append("field 'data.password' is empty")

    if violations:
        raise ValidationFailedError(violations)

    return request


def build_auth_methods_response(
    response_id: str, status: AuthMethodsStatus | str
) -> AuthMethodsResponse:
    """Construct an 'authMethods' response.

    The status may be given as the enum member or its wire value.

    Raises:
        ConstructionError: If status is neither 'exists' nor 'not_exists'.
    """
    try:
        status = AuthMethodsStatus(status)
    except ValueError as e:
        raise ConstructionError(
            f"status must be either '{AuthMethodsStatus.EXISTS.value}' "
            f"or '{AuthMethodsStatus.NOT_EXISTS.value}'"
        ) from e

    return AuthMethodsResponse(response_id=response_id, status=status)


def build_password_verify_response(
    response_id: str, success: bool
) -> PasswordVerifyResponse:
    """Construct a 'passwordVerify' response.

    Raises:
        ConstructionError: If success is not a boolean.
    """
    if not isinstance(success, bool):
        raise ConstructionError(
            f"success must be a boolean, got {type(success).__name__}"
        )

    return PasswordVerifyResponse(response_id=response_id, success=success)


def _dumps(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


def encode_auth_methods_response(
    response_id: str, status: AuthMethodsStatus | str
) -> bytes:
    """Serialize an 'authMethods' response to JSON bytes.

    Raises:
        ConstructionError: If status is outside the AuthMethodsStatus enum.
    """
    return _dumps(build_auth_methods_response(response_id, status).to_dict())


def encode_password_verify_response(response_id: str, success: bool) -> bytes:
    """Serialize a 'passwordVerify' response to JSON bytes.

    Raises:
        ConstructionError: If success is not a boolean.
    """
    return _dumps(build_password_verify_response(response_id, success).to_dict())
