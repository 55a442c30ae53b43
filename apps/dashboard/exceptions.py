# apps/dashboard/exceptions.py

"""
Errors raised inside the dashboard engine

None of them escape a handler: ``ProjectDashboard`` turns each one into a
notification.
"""


class DashboardError(Exception):
    """Base error; ``message`` is safe to show to the user"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(DashboardError):
    """Missing or invalid input, caught before any request is sent"""


class NetworkError(DashboardError):
    """The request never got an HTTP answer"""


class ServerError(DashboardError):
    """
    The server answered with a non-2xx status

    ``server_message`` is the ``error`` field of the JSON body when there
    was one, otherwise ``None``.
    """

    def __init__(self, status, server_message=None):
        self.status = status
        self.server_message = server_message
        super().__init__(server_message or f"Server error: {status}")
