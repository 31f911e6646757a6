from __future__ import annotations


class ListControllerError(Exception):
    """Base class for recoverable list controller failures."""

    code = "LIST_CONTROLLER_ERROR"


class FetchFailed(ListControllerError):
    code = "FETCH_FAILED"

    def __init__(self, resource: str, cause: BaseException | None = None) -> None:
        super().__init__(f"could not load {resource} collection")
        self.resource = resource
        self.cause = cause


class MutationFailed(ListControllerError):
    code = "MUTATION_FAILED"

    def __init__(self, label: str, cause: BaseException | None = None) -> None:
        super().__init__(f"mutation {label} failed")
        self.label = label
        self.cause = cause


class DuplicateMutation(ListControllerError):
    code = "DUPLICATE_MUTATION"

    def __init__(self, label: str) -> None:
        super().__init__(f"mutation {label} already in progress")
        self.label = label


class ConfirmationRequired(ListControllerError):
    code = "CONFIRMATION_REQUIRED"

    def __init__(self, record_id: str) -> None:
        super().__init__(f"delete of {record_id} was not requested before confirmation")
        self.record_id = record_id
