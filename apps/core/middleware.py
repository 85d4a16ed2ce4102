from .context import SessionContext


class SessionContextMiddleware:
    """Attach a SessionContext to every request after authentication."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.session_context = SessionContext.from_request(request)
        return self.get_response(request)
