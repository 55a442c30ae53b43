"""Tests for dashboard.coordinator: refresh, create and two-phase delete."""

import asyncio

from apps.dashboard.coordinator import (
    ADD_FAILED,
    ALREADY_RUNNING,
    CONFIRM_FIRST,
    DELETE_FAILED,
    FETCH_FAILED,
    MISSING_FIELDS,
    ProjectDashboard,
)
from apps.dashboard.exceptions import ServerError
from apps.dashboard.widgets import ERROR, SUCCESS, Control


def _ids(projects):
    return [p['id'] for p in projects]


class HeldListStore:
    """Every list call waits until its own event is set"""

    def __init__(self):
        self.releases = []

    async def list_projects(self):
        release = asyncio.Event()
        self.releases.append(release)
        await release.wait()
        return []


# ---------------------------------------------------------------------------
# refresh
# ---------------------------------------------------------------------------


class TestRefresh:
    def test_populates_cache(self, dashboard, run):
        ok, _, projects = run(dashboard.refresh())
        assert ok
        assert _ids(projects) == [3, 2, 1]
        assert _ids(dashboard.state.projects) == [3, 2, 1]
        assert dashboard.state.loading is False

    def test_failure_keeps_previous_cache(self, dashboard, fake_store, run, network_error):
        run(dashboard.refresh())
        fake_store.fail_list_with = network_error

        ok, message, projects = run(dashboard.refresh())

        assert not ok
        assert projects is None
        assert message == FETCH_FAILED
        assert _ids(dashboard.state.projects) == [3, 2, 1]
        assert dashboard.notifier.last.level == ERROR
        assert dashboard.state.loading is False

    def test_server_error_does_not_raise(self, dashboard, fake_store, run):
        fake_store.fail_list_with = ServerError(500)
        ok, _, _ = run(dashboard.refresh())
        assert not ok
        assert dashboard.state.projects == []

    def test_unexpected_error_does_not_raise(self, dashboard, fake_store, run):
        fake_store.fail_list_with = RuntimeError('boom')
        ok, message, _ = run(dashboard.refresh())
        assert not ok
        assert message == FETCH_FAILED

    def test_loading_flag_set_while_in_flight(self, fake_store, run):
        seen = []
        dashboard = ProjectDashboard(fake_store)
        dashboard.subscribe(lambda d: seen.append(d.state.loading))

        run(dashboard.refresh())

        assert seen == [True, False]

    def test_filter_survives_refresh(self, dashboard, run):
        dashboard.select_filter('ongoing')
        run(dashboard.refresh())
        assert dashboard.state.active_filter == 'ongoing'
        assert _ids(dashboard.state.visible()) == [3]

    def test_loading_until_last_overlapping_refresh(self, run):
        store = HeldListStore()
        dashboard = ProjectDashboard(store)

        async def scenario():
            first = asyncio.create_task(dashboard.refresh())
            second = asyncio.create_task(dashboard.refresh())
            await asyncio.sleep(0)
            assert len(store.releases) == 2

            store.releases[0].set()
            await first
            after_first = dashboard.state.loading

            store.releases[1].set()
            await second
            return after_first

        assert run(scenario()) is True
        assert dashboard.state.loading is False


# ---------------------------------------------------------------------------
# filter & search
# ---------------------------------------------------------------------------


class TestFilter:
    def test_toggle_rerenders(self, dashboard, run):
        renders = []
        dashboard.subscribe(lambda d: renders.append(d.state.active_filter))
        run(dashboard.refresh())
        renders.clear()

        dashboard.select_filter('ongoing')
        dashboard.select_filter('ongoing')

        assert renders == ['ongoing', None]

    def test_scenario_stats_unaffected(self, dashboard, run):
        run(dashboard.refresh())
        expected = {'total': 3, 'proposal': 1, 'ongoing': 1, 'completed': 1}

        dashboard.select_filter('ongoing')
        assert _ids(dashboard.state.visible()) == [3]
        assert dashboard.state.stats() == expected

        dashboard.select_filter('ongoing')
        assert _ids(dashboard.state.visible()) == [3, 2, 1]
        assert dashboard.state.stats() == expected

    def test_unknown_status_notifies(self, dashboard):
        ok, active = dashboard.select_filter('archived')
        assert not ok
        assert active is None
        assert dashboard.notifier.last.level == ERROR

    def test_search(self, dashboard, run):
        run(dashboard.refresh())
        dashboard.search('  chess ')
        assert dashboard.state.search_query == 'chess'


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_success_refreshes_cache(self, dashboard, fake_store, run):
        run(dashboard.refresh())

        ok, message = run(dashboard.create(' Dora ', 'Mars Rover', 'Proposal'))

        assert ok
        assert message == 'Project added successfully!'
        assert fake_store.called('add') == [('add', 'Dora', 'Mars Rover', 'Proposal')]
        assert len(fake_store.called('list')) == 2
        newest = dashboard.state.projects[0]
        assert (newest['student_name'], newest['project_title'], newest['status']) == \
            ('Dora', 'Mars Rover', 'Proposal')
        assert dashboard.state.stats()['total'] == 4

    def test_missing_fields_never_reach_store(self, dashboard, fake_store, run):
        ok, message = run(dashboard.create('Dora', '   ', 'Proposal'))

        assert not ok
        assert message == MISSING_FIELDS
        assert fake_store.calls == []
        assert dashboard.notifier.last.message == MISSING_FIELDS

    def test_server_message_shown_verbatim(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        fake_store.fail_with = ServerError(400, 'Status: Must be one of Proposal, Ongoing, Completed')

        ok, message = run(dashboard.create('Dora', 'Rover', 'Paused'))

        assert not ok
        assert message == 'Status: Must be one of Proposal, Ongoing, Completed'
        assert len(fake_store.called('list')) == 1
        assert _ids(dashboard.state.projects) == [3, 2, 1]

    def test_generic_message_without_server_text(self, dashboard, fake_store, run):
        fake_store.fail_with = ServerError(500)
        ok, message = run(dashboard.create('Dora', 'Rover', 'Proposal'))
        assert not ok
        assert message == ADD_FAILED

    def test_network_error(self, dashboard, fake_store, run, network_error):
        fake_store.fail_with = network_error
        ok, message = run(dashboard.create('Dora', 'Rover', 'Proposal'))
        assert not ok
        assert 'server' in message.lower()

    def test_no_optimistic_insert(self, fake_store, run):
        dashboard = ProjectDashboard(fake_store)

        async def scenario():
            await dashboard.refresh()
            fake_store.gate = asyncio.Event()
            task = asyncio.create_task(dashboard.create('Dora', 'Rover', 'Proposal'))
            await asyncio.sleep(0)
            in_flight = _ids(dashboard.state.projects)
            fake_store.gate.set()
            await task
            return in_flight

        assert run(scenario()) == [3, 2, 1]
        assert _ids(dashboard.state.projects) == [4, 3, 2, 1]

    def test_control_disabled_while_in_flight(self, fake_store, run):
        dashboard = ProjectDashboard(fake_store)
        control = Control('submit')

        async def scenario():
            fake_store.gate = asyncio.Event()
            first = asyncio.create_task(dashboard.create('Dora', 'Rover', 'Proposal', control=control))
            await asyncio.sleep(0)
            disabled_during = control.disabled
            duplicate = await dashboard.create('Dora', 'Rover', 'Proposal', control=control)
            fake_store.gate.set()
            return disabled_during, duplicate, await first

        disabled_during, duplicate, first = run(scenario())

        assert disabled_during is True
        assert duplicate == (False, ALREADY_RUNNING)
        assert first[0] is True
        assert control.disabled is False
        assert len(fake_store.called('add')) == 1

    def test_control_reenabled_after_failure(self, dashboard, fake_store, run):
        fake_store.fail_with = ServerError(500)
        run(dashboard.create('Dora', 'Rover', 'Proposal'))
        assert dashboard.submit_control.disabled is False


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    def test_without_confirmation_never_calls_store(self, dashboard, fake_store, run):
        run(dashboard.refresh())

        ok, message = run(dashboard.delete(2))

        assert not ok
        assert message == CONFIRM_FIRST
        assert fake_store.called('delete') == []
        assert _ids(dashboard.state.projects) == [3, 2, 1]

    def test_confirm_without_request_is_refused(self, dashboard, fake_store, run):
        ok, message = run(dashboard.confirm_delete())
        assert not ok
        assert message == CONFIRM_FIRST
        assert fake_store.called('delete') == []

    def test_request_returns_confirmation_question(self, dashboard, run):
        run(dashboard.refresh())
        assert dashboard.request_delete(2) == 'Are you sure you want to delete "Chess Engine"?'
        assert dashboard.pending_delete == (2, 'Chess Engine')

    def test_confirmed_delete_refreshes(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        dashboard.request_delete(2)

        ok, message = run(dashboard.confirm_delete())

        assert ok
        assert message == 'Project deleted successfully!'
        assert fake_store.called('delete') == [('delete', 2)]
        assert _ids(dashboard.state.projects) == [3, 1]
        assert dashboard.pending_delete is None
        assert dashboard.notifier.last.level == SUCCESS

    def test_delete_matching_pending_id(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        dashboard.request_delete('2', 'Chess Engine')

        ok, _ = run(dashboard.delete(2))

        assert ok
        assert fake_store.called('delete') == [('delete', '2')]

    def test_delete_other_id_refused(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        dashboard.request_delete(3)

        ok, _ = run(dashboard.delete(2))

        assert not ok
        assert fake_store.called('delete') == []
        assert dashboard.pending_delete == (3, 'Weather Station')

    def test_cancel(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        dashboard.request_delete(2)
        dashboard.cancel_delete()

        ok, _ = run(dashboard.confirm_delete())

        assert not ok
        assert fake_store.called('delete') == []

    def test_failure_keeps_cache(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        fake_store.fail_with = ServerError(500, 'Failed to delete project')
        dashboard.request_delete(2)

        ok, message = run(dashboard.confirm_delete())

        assert not ok
        assert message == 'Failed to delete project'
        assert _ids(dashboard.state.projects) == [3, 2, 1]
        assert len(fake_store.called('list')) == 1
        assert dashboard.delete_control.disabled is False

    def test_generic_failure_message(self, dashboard, fake_store, run):
        fake_store.fail_with = ServerError(503)
        dashboard.request_delete(1, 'Solar Tracker')
        _, message = run(dashboard.confirm_delete())
        assert message == DELETE_FAILED

    def test_busy_control_keeps_request_pending(self, dashboard, fake_store, run):
        run(dashboard.refresh())
        control = Control('confirm-delete')
        control.disabled = True
        dashboard.request_delete(2)

        ok, message = run(dashboard.confirm_delete(control))

        assert not ok
        assert message == ALREADY_RUNNING
        assert dashboard.pending_delete == (2, 'Chess Engine')
        assert fake_store.called('delete') == []

        control.disabled = False
        ok, _ = run(dashboard.confirm_delete(control))

        assert ok
        assert fake_store.called('delete') == [('delete', 2)]
        assert dashboard.pending_delete is None
