"""
Session messages for the web dashboard.

PURPOSE: Flash-style messages that survive one redirect.
AI CONTEXT: Built on Starlette's SessionMiddleware (signed cookie session).
Messages are consumed when read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..presenters import SessionMessage, SummaryErrorViewModel

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from ..presenters import PageViewModel

__all__ = ["flash", "pop_session_messages", "attach_session_messages"]

_SESSION_KEY = "_messages"


def _has_session(request: Request) -> bool:
    return "session" in request.scope


def flash(request: Request, kind: str, text: str) -> None:
    """
    Queue a message for the next page rendered in this session.

    Args:
        request: Current request; must pass through SessionMiddleware.
        kind: "error" or "success".
        text: Message shown to the user.
    """
    if not _has_session(request):
        return
    pending = list(request.session.get(_SESSION_KEY, []))
    pending.append({"kind": kind, "text": text})
    request.session[_SESSION_KEY] = pending


def pop_session_messages(request: Request) -> list[SessionMessage]:
    """Return and clear all pending messages of the session."""
    if not _has_session(request):
        return []
    raw = request.session.pop(_SESSION_KEY, [])
    return [SessionMessage(kind=m.get("kind", "error"), text=m.get("text", "")) for m in raw]


def attach_session_messages(
    view_model: PageViewModel,
    request: Request,
    response: Response | None = None,  # noqa: ARG001
) -> PageViewModel:
    """
    Move pending session messages onto an error view model.

    Success view models are returned untouched and the messages stay in
    the session for a later page.

    Args:
        view_model: View model about to be rendered.
        request: Current request holding the session.
        response: Outgoing response. Unused; the session cookie is written
            by SessionMiddleware.

    Returns:
        The same view model instance.
    """
    if isinstance(view_model, SummaryErrorViewModel):
        view_model.messages.extend(pop_session_messages(request))
    return view_model
