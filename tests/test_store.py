"""Tests for dashboard.store against the real views, and the full client loop."""

from unittest import mock

import pytest
import requests
from asgiref.sync import async_to_sync

from apps.core.models import Project
from apps.dashboard.coordinator import ProjectDashboard
from apps.dashboard.exceptions import NetworkError, ServerError
from apps.dashboard.store import NETWORK_ERROR_MESSAGE, RemoteProjectStore, server_error_message

API_BASE = 'http://testserver'


def _response(status, content, content_type='application/json'):
    response = requests.Response()
    response.status_code = status
    response._content = content
    response.headers['Content-Type'] = content_type
    return response


# ---------------------------------------------------------------------------
# server_error_message
# ---------------------------------------------------------------------------


class TestServerErrorMessage:
    def test_error_field(self):
        assert server_error_message(_response(400, b'{"error": "Bad status"}')) == 'Bad status'

    @pytest.mark.parametrize('content', [
        b'',
        b'<html>oops</html>',
        b'{"error": {"code": "23505"}}',
        b'{"error": "   "}',
        b'["error"]',
    ])
    def test_no_usable_message(self, content):
        assert server_error_message(_response(500, content)) is None


# ---------------------------------------------------------------------------
# RemoteProjectStore
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestRemoteProjectStore:
    def test_round_trip(self, remote_store):
        async_to_sync(remote_store.add_project)('Dora', 'Mars Rover', 'ongoing')

        projects = async_to_sync(remote_store.list_projects)()

        assert len(projects) == 1
        assert projects[0]['status'] == 'Ongoing'
        assert projects[0]['project_title'] == 'Mars Rover'

    def test_delete(self, remote_store):
        project = Project.objects.create(student_name='A', project_title='One', status='Proposal')

        async_to_sync(remote_store.delete_project)(project.id)

        assert not Project.objects.exists()

    def test_server_error_carries_message(self, remote_store):
        with pytest.raises(ServerError) as excinfo:
            async_to_sync(remote_store.add_project)('Dora', 'Rover', 'Paused')

        assert excinfo.value.status == 400
        assert excinfo.value.server_message == 'Status: Must be one of Proposal, Ongoing, Completed'

    def test_unexpected_list_shape(self, remote_store):
        with mock.patch.object(RemoteProjectStore, 'request', mock.AsyncMock(return_value={'rows': []})):
            with pytest.raises(ServerError) as excinfo:
                async_to_sync(remote_store.list_projects)()

        assert excinfo.value.message == 'Unexpected response from server'

    def test_server_down(self, down_session):
        store = RemoteProjectStore(base_url=API_BASE, session=down_session)

        with pytest.raises(NetworkError) as excinfo:
            async_to_sync(store.list_projects)()

        assert excinfo.value.message == NETWORK_ERROR_MESSAGE

    def test_url_joins_base(self):
        store = RemoteProjectStore(base_url='http://api.local:3000/')
        assert store.url('/projects') == 'http://api.local:3000/projects'


# ---------------------------------------------------------------------------
# ProjectDashboard over HTTP
# ---------------------------------------------------------------------------


@pytest.mark.django_db
class TestDashboardOverHttp:
    def test_add_then_delete(self, remote_store):
        dashboard = ProjectDashboard(remote_store)
        async_to_sync(dashboard.refresh)()
        assert dashboard.state.projects == []

        ok, _ = async_to_sync(dashboard.create)('Dora', 'Mars Rover', 'Proposal')
        assert ok
        assert [p['project_title'] for p in dashboard.state.projects] == ['Mars Rover']
        project_id = dashboard.state.projects[0]['id']

        dashboard.request_delete(project_id)
        ok, _ = async_to_sync(dashboard.confirm_delete)()
        assert ok
        assert dashboard.state.projects == []
        assert not Project.objects.exists()

    def test_invalid_status_shows_server_message(self, remote_store):
        dashboard = ProjectDashboard(remote_store)

        ok, message = async_to_sync(dashboard.create)('Dora', 'Rover', 'Paused')

        assert not ok
        assert message == 'Status: Must be one of Proposal, Ongoing, Completed'
        assert dashboard.notifier.last.message == message

    def test_refresh_with_server_down_keeps_cache(self, down_session, scenario_projects):
        dashboard = ProjectDashboard(RemoteProjectStore(base_url=API_BASE, session=down_session))
        dashboard.state.replace(scenario_projects)

        ok, _, _ = async_to_sync(dashboard.refresh)()

        assert not ok
        assert [p['id'] for p in dashboard.state.projects] == [3, 2, 1]
