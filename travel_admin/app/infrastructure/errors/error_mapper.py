from travel_admin.app.infrastructure.errors.exceptions import FetchFailed, ListControllerError, MutationFailed
from travel_admin.clients.errors import ApiError


class ErrorMapper:
    _KNOWN_CODES = {
        "FETCH_FAILED": ("Could not load the list.", "Press retry to load it again."),
        "MUTATION_FAILED": ("Failed delete data", "The list was reloaded; check whether the record still exists."),
        "DUPLICATE_MUTATION": ("A delete for this record is already in progress.", "Wait for it to finish."),
        "CONFIRMATION_REQUIRED": ("Delete must be confirmed first.", "Use the delete button and confirm the dialog."),
        "TIMEOUT_ERROR": ("The data store took too long to respond.", "Retry in a few seconds."),
        "NETWORK_ERROR": ("The data store is unreachable.", "Check your network and retry."),
    }

    _STATUS_HINTS = {
        401: ("UNAUTHORIZED", "Your session is no longer valid.", "Log in again."),
        403: ("PERMISSION_DENIED", "Permission denied for this operation.", "Ask an administrator for access."),
        404: ("NOT_FOUND", "The record no longer exists.", "Reload the list."),
        500: ("INTERNAL_ERROR", "The data store failed.", "Retry and share the trace_id if it persists."),
    }

    @classmethod
    def to_payload(cls, error: BaseException) -> dict:
        api_error = _root_api_error(error)
        if isinstance(error, ListControllerError) and api_error is None:
            message, suggestion = cls._KNOWN_CODES[error.code] if error.code in cls._KNOWN_CODES else (str(error), "Retry.")
            return {"code": error.code, "message": message, "details": str(error), "trace_id": None, "suggestion": suggestion}

        if api_error is not None:
            status_code = api_error.status_code or -1
            mapped = cls._STATUS_HINTS.get(status_code)
            if mapped is None and status_code >= 500:
                mapped = cls._STATUS_HINTS[500]
            if mapped is not None:
                code, message, suggestion = mapped
            else:
                message, suggestion = cls._KNOWN_CODES.get(
                    api_error.code,
                    (api_error.message, "Contact support with the trace_id."),
                )
                code = api_error.code
            return {
                "code": code,
                "message": message,
                "details": api_error.details,
                "trace_id": api_error.trace_id,
                "suggestion": suggestion,
            }

        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "details": None,
            "trace_id": None,
            "suggestion": "Retry and report the incident if it persists.",
        }

    @classmethod
    def to_display_message(cls, error: BaseException) -> str:
        payload = cls.to_payload(error)
        return f"[{payload['code']}] {payload['message']} (trace_id={payload['trace_id']})"


def _root_api_error(error: BaseException) -> ApiError | None:
    if isinstance(error, ApiError):
        return error
    if isinstance(error, (FetchFailed, MutationFailed)) and isinstance(error.cause, ApiError):
        return error.cause
    return None
