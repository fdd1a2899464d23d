"""Failures a diagram run can end with.

Every error carries the message shown to the user; callers at the run
boundary (service, CLI, MCP tools) print ``user_message`` instead of a
traceback.
"""
from __future__ import annotations


class GoUmlError(Exception):
    user_message = "Failed to generate diagram."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class EmptyInput(GoUmlError):
    user_message = "Please enter some Go code."


class NoDeclarationsFound(GoUmlError):
    user_message = "Could not parse any structs or interfaces from the code."


class RenderFailure(GoUmlError):
    """The renderer rejected a diagram; its message is kept verbatim."""

    prefix = "Render error"

    def __init__(self, message: str) -> None:
        self.renderer_message = message
        super().__init__(f"{self.prefix}: {message}")
