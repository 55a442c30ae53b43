# apps/dashboard/store.py

"""
HTTP adapters for the JSON API

``requests`` does the blocking I/O; every public method is a coroutine that
runs the call through ``asgiref.sync.sync_to_async`` so the caller's event
loop stays free while the request is outstanding.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

from .exceptions import NetworkError, ServerError

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Cannot connect to server. Make sure it's running."


def server_error_message(response: requests.Response) -> Optional[str]:
    """
    ``error`` field of a JSON error body, if it is a non-empty string

    Some failures answer with a raw error object or no body at all; those
    give ``None`` and the caller falls back to a generic message.
    """
    try:
        body = response.json()
    except ValueError:
        return None

    if isinstance(body, dict):
        error = body.get('error')
        if isinstance(error, str) and error.strip():
            return error
    return None


class ApiClient:
    """
    Thin JSON client bound to one base URL and one ``requests.Session``

    The session keeps the Django session cookie between calls. Sessions
    are not thread-safe, so calls are thread-sensitive by default and run
    one at a time on the same worker thread.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None, thread_sensitive: bool = True):
        self.base_url = (base_url or getattr(settings, 'SPMS_API_BASE', 'http://localhost:8000')).rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout or getattr(settings, 'SPMS_API_TIMEOUT', 10.0)
        self._thread_sensitive = thread_sensitive

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(self, method: str, path: str, payload: Optional[Dict] = None) -> Any:
        call = sync_to_async(self._send, thread_sensitive=self._thread_sensitive)
        return await call(method, path, payload)

    def _send(self, method: str, path: str, payload: Optional[Dict]) -> Any:
        url = self.url(path)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise NetworkError(NETWORK_ERROR_MESSAGE) from e

        if not response.ok:
            message = server_error_message(response)
            logger.warning("%s %s answered %s: %s", method, url, response.status_code, message)
            raise ServerError(response.status_code, message)

        try:
            return response.json()
        except ValueError:
            return None


class RemoteProjectStore(ApiClient):
    """
    ``GET /projects``, ``POST /add-project`` and ``DELETE /delete-project/<id>``
    """

    async def list_projects(self) -> List[Dict]:
        projects = await self.request('GET', '/projects')
        if not isinstance(projects, list) or not all(isinstance(p, dict) for p in projects):
            raise ServerError(200, "Unexpected response from server")
        return projects

    async def add_project(self, student_name: str, project_title: str, status: str) -> Dict:
        return await self.request('POST', '/add-project', {
            'student_name': student_name,
            'project_title': project_title,
            'status': status,
        }) or {}

    async def delete_project(self, project_id) -> Dict:
        return await self.request('DELETE', f"/delete-project/{quote(str(project_id), safe='')}") or {}


class AuthClient(ApiClient):
    """
    ``POST /login`` and ``POST /register``; both answer ``{user: {...}}``
    """

    async def login(self, username: str, password: str) -> Dict:
        data = await self.request('POST', '/login', {
            'username': username,
            'password': password,
        }) or {}
        return data.get('user') or {}

    async def register(self, full_name: str, username: str, password: str) -> Dict:
        data = await self.request('POST', '/register', {
            'full_name': full_name,
            'username': username,
            'password': password,
        }) or {}
        return data.get('user') or {}
