"""
Fixed user-facing wording for failure kinds.

Raw store or server text never reaches the user; it goes to the log.
"""

from typing import Optional

NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
VALIDATION_FAILURE = "VALIDATION_FAILURE"
WRITE_FAILURE = "WRITE_FAILURE"
READ_FAILURE = "READ_FAILURE"
NOT_SELECTED = "NOT_SELECTED"
OPERATION_IN_PROGRESS = "OPERATION_IN_PROGRESS"
CONTROLLER_CLOSED = "CONTROLLER_CLOSED"
NOT_PRIVILEGED = "NOT_PRIVILEGED"

MESSAGES = {
    NOT_AUTHENTICATED: "Please sign in to continue.",
    VALIDATION_FAILURE: "Please fill in the required fields of the {label}.",
    WRITE_FAILURE: "Could not {verb} the {label}. Please try again.",
    READ_FAILURE: "Could not load the {label} list. Please try again.",
    NOT_SELECTED: "Select a {label} first.",
    OPERATION_IN_PROGRESS: "Please wait for the current operation to finish.",
    NOT_PRIVILEGED: "Only administrators can do this.",
}

FALLBACK_MESSAGE = "Something went wrong. Please try again."

VERBS = {
    "load": "load",
    "create": "create",
    "update": "save",
    "remove": "delete",
}


def message_for(code: str, action: Optional[str] = None, label: str = "record") -> str:
    template = MESSAGES.get(code, FALLBACK_MESSAGE)
    return template.format(label=label, verb=VERBS.get(action or "", action or "save"))
