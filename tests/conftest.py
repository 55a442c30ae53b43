"""Shared fixtures: an in-process fake store and a requests adapter into Django."""

import asyncio
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from apps.dashboard.coordinator import ProjectDashboard
from apps.dashboard.exceptions import NetworkError
from apps.dashboard.store import AuthClient, RemoteProjectStore

API_BASE = 'http://testserver'


# ---------------------------------------------------------------------------
# Fake store
# ---------------------------------------------------------------------------


class FakeStore:
    """
    Async stand-in for RemoteProjectStore

    Keeps projects newest-first like the real endpoint and records every call.
    Set ``fail_with`` to an exception to make the next calls raise it, or
    ``gate`` to an asyncio.Event to hold mutations until it is set.
    """

    def __init__(self, projects=None):
        self.projects = [dict(p) for p in (projects or [])]
        self.calls = []
        self.fail_with = None
        self.fail_list_with = None
        self.gate = None
        self._next_id = max([p['id'] for p in self.projects] or [0]) + 1

    async def list_projects(self):
        self.calls.append(('list',))
        if self.fail_list_with:
            raise self.fail_list_with
        return sorted((dict(p) for p in self.projects), key=lambda p: p['id'], reverse=True)

    async def add_project(self, student_name, project_title, status):
        self.calls.append(('add', student_name, project_title, status))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with:
            raise self.fail_with
        project = {
            'id': self._next_id,
            'student_name': student_name,
            'project_title': project_title,
            'status': status,
            'created_at': '2026-01-01T00:00:00+00:00',
        }
        self._next_id += 1
        self.projects.append(project)
        return {'message': 'Project added successfully'}

    async def delete_project(self, project_id):
        self.calls.append(('delete', project_id))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with:
            raise self.fail_with
        self.projects = [p for p in self.projects if str(p['id']) != str(project_id)]
        return {'message': 'Project deleted successfully'}

    def called(self, name):
        return [call for call in self.calls if call[0] == name]


SCENARIO_PROJECTS = [
    {'id': 3, 'student_name': 'Carla', 'project_title': 'Weather Station', 'status': 'Ongoing'},
    {'id': 2, 'student_name': 'Bruno', 'project_title': 'Chess Engine', 'status': 'Completed'},
    {'id': 1, 'student_name': 'Alice', 'project_title': 'Solar Tracker', 'status': 'Proposal'},
]


@pytest.fixture
def scenario_projects():
    return [dict(p) for p in SCENARIO_PROJECTS]


@pytest.fixture
def fake_store(scenario_projects):
    return FakeStore(scenario_projects)


@pytest.fixture
def dashboard(fake_store):
    return ProjectDashboard(fake_store)


@pytest.fixture
def run():
    """Runs a coroutine to completion on a fresh event loop."""
    return asyncio.run


@pytest.fixture
def network_error():
    return NetworkError("Cannot connect to server. Make sure it's running.")


# ---------------------------------------------------------------------------
# requests -> Django test client
# ---------------------------------------------------------------------------


class DjangoClientAdapter(BaseAdapter):
    """Sends requests.Session traffic through django.test.Client."""

    def __init__(self, client):
        super().__init__()
        self.client = client

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        path = url.path + (f'?{url.query}' if url.query else '')

        body = request.body or b''
        if isinstance(body, str):
            body = body.encode('utf-8')

        django_response = self.client.generic(
            request.method,
            path,
            data=body,
            content_type=request.headers.get('Content-Type', 'application/octet-stream'),
        )

        response = requests.Response()
        response.status_code = django_response.status_code
        response._content = django_response.content
        response.headers = CaseInsensitiveDict(dict(django_response.items()))
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class RefusingAdapter(BaseAdapter):
    """Every request fails as if the server were down."""

    def send(self, request, **kwargs):
        raise requests.ConnectionError(f"Connection refused: {request.url}")

    def close(self):
        pass


@pytest.fixture
def api_session(db, client):
    session = requests.Session()
    session.mount(API_BASE, DjangoClientAdapter(client))
    return session


@pytest.fixture
def remote_store(api_session):
    return RemoteProjectStore(base_url=API_BASE, session=api_session)


@pytest.fixture
def auth_client(api_session):
    return AuthClient(base_url=API_BASE, session=api_session)


@pytest.fixture
def down_session():
    session = requests.Session()
    session.mount(API_BASE, RefusingAdapter())
    return session
