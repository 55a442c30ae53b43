# apps/dashboard/coordinator.py

"""
Mutation coordinator - the handlers behind every dashboard action

Each public coroutine is a handler boundary: whatever goes wrong inside is
logged, turned into a notification and reported back as ``(ok, message)``.
Nothing is raised to the caller and a failed call never touches the cache.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from .exceptions import DashboardError, NetworkError, ServerError, ValidationError
from .state import DashboardState
from .store import RemoteProjectStore
from .widgets import Control, Notifier, busy

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to load projects. Make sure the server is running."
ADD_FAILED = "Failed to add project. Please try again."
DELETE_FAILED = "Failed to delete project. Please try again."
MISSING_FIELDS = "Please fill in all fields."
CONFIRM_FIRST = "Please confirm the deletion first."
ALREADY_RUNNING = "Request already in progress."


class ProjectDashboard:
    """
    Owns one ``DashboardState`` and every transition on it

    Listeners registered with ``subscribe`` are called with the dashboard
    after each state change (refresh, filter, search) and re-render from
    ``state``.
    """

    def __init__(self, store: RemoteProjectStore, state: Optional[DashboardState] = None,
                 notifier: Optional[Notifier] = None):
        self.store = store
        self.state = state or DashboardState()
        self.notifier = notifier or Notifier()

        self.submit_control = Control('add-project')
        self.delete_control = Control('confirm-delete')

        self._pending_delete: Optional[Tuple[object, str]] = None
        self._refreshing = 0
        self._listeners: List[Callable[['ProjectDashboard'], None]] = []

    # =================== RENDER HOOKS ===================

    def subscribe(self, listener: Callable[['ProjectDashboard'], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)

    # =================== CACHE ===================

    async def refresh(self) -> Tuple[bool, str, Optional[List[Dict]]]:
        """
        Refetches the whole collection and swaps the cache

        Returns:
            Tuple[ok, message, new_projects]; ``new_projects`` is ``None``
            on failure and the previous cache stays as it was.
        """
        self._refreshing += 1
        self.state.loading = True
        self._changed()

        try:
            projects = await self.store.list_projects()
        except DashboardError as e:
            logger.warning("Failed to fetch projects: %s", e.message)
            projects = None
        except Exception:
            logger.exception("Unexpected error while fetching projects")
            projects = None
        finally:
            # Loader stays up until the last overlapping refresh settles
            self._refreshing -= 1
            self.state.loading = self._refreshing > 0

        if projects is None:
            self.notifier.error(FETCH_FAILED)
            self._changed()
            return False, FETCH_FAILED, None

        projects = self.state.replace(projects)
        logger.debug("Cache replaced with %d project(s)", len(projects))
        self._changed()
        return True, f"{len(projects)} project(s) loaded", projects

    # =================== FILTER & SEARCH ===================

    def select_filter(self, status: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Toggles a status filter and re-renders

        Returns:
            Tuple[ok, active_filter]
        """
        try:
            active = self.state.select_filter(status)
        except ValidationError as e:
            self.notifier.error(e.message)
            return False, self.state.active_filter

        self._changed()
        return True, active

    def clear_filter(self) -> None:
        self.state.clear_filter()
        self._changed()

    def search(self, query: str) -> None:
        """Free-text search over the visible rows"""
        self.state.search_query = (query or '').strip()
        self._changed()

    # =================== CREATE ===================

    async def create(self, student_name: str, project_title: str, status: str,
                     control: Optional[Control] = None) -> Tuple[bool, str]:
        """
        Sends a new project, then refreshes the cache

        Nothing is inserted locally: the new row shows up only once the
        refresh that follows a successful ``POST`` has completed.

        Returns:
            Tuple[ok, message]
        """
        with busy(control or self.submit_control) as acquired:
            if not acquired:
                return False, ALREADY_RUNNING

            try:
                record = self._validate_new_project(student_name, project_title, status)
                await self.store.add_project(**record)

            except ValidationError as e:
                return self._fail(e.message)
            except ServerError as e:
                return self._fail(e.server_message or ADD_FAILED)
            except NetworkError as e:
                return self._fail(e.message)
            except Exception:
                logger.exception("Unexpected error while adding a project")
                return self._fail(ADD_FAILED)

            logger.info("Project added: %s", record['project_title'])
            message = "Project added successfully!"
            self.notifier.success(message)
            await self.refresh()
            return True, message

    def _validate_new_project(self, student_name, project_title, status) -> Dict[str, str]:
        record = {
            'student_name': (student_name or '').strip(),
            'project_title': (project_title or '').strip(),
            'status': (status or '').strip(),
        }
        if not all(record.values()):
            raise ValidationError(MISSING_FIELDS)
        return record

    # =================== DELETE (two phases) ===================

    @property
    def pending_delete(self) -> Optional[Tuple[object, str]]:
        return self._pending_delete

    def request_delete(self, project_id, title: Optional[str] = None) -> str:
        """
        Phase one: remembers which project is about to go

        Returns the confirmation question to show the user.
        """
        if title is None:
            title = self._title_of(project_id)

        self._pending_delete = (project_id, title)
        return f'Are you sure you want to delete "{title}"?'

    def cancel_delete(self) -> None:
        self._pending_delete = None

    async def confirm_delete(self, control: Optional[Control] = None) -> Tuple[bool, str]:
        """
        Phase two: deletes the pending project

        Returns:
            Tuple[ok, message]
        """
        if self._pending_delete is None:
            return self._fail(CONFIRM_FIRST)

        project_id, _ = self._pending_delete
        return await self._execute_delete(project_id, control)

    async def delete(self, project_id, control: Optional[Control] = None) -> Tuple[bool, str]:
        """
        Deletes ``project_id`` only if it is the pending, confirmed one

        Anything else is refused before the remote store is called.
        """
        if self._pending_delete is None or str(self._pending_delete[0]) != str(project_id):
            return self._fail(CONFIRM_FIRST)

        return await self.confirm_delete(control)

    async def _execute_delete(self, project_id, control: Optional[Control]) -> Tuple[bool, str]:
        with busy(control or self.delete_control) as acquired:
            if not acquired:
                return False, ALREADY_RUNNING

            # The request stays pending until this delete actually starts
            self._pending_delete = None

            try:
                await self.store.delete_project(project_id)

            except ServerError as e:
                return self._fail(e.server_message or DELETE_FAILED)
            except NetworkError as e:
                return self._fail(e.message)
            except Exception:
                logger.exception("Unexpected error while deleting project %s", project_id)
                return self._fail(DELETE_FAILED)

            logger.info("Project %s deleted", project_id)
            message = "Project deleted successfully!"
            self.notifier.success(message)
            await self.refresh()
            return True, message

    # =================== HELPERS ===================

    def _title_of(self, project_id) -> str:
        for project in self.state.projects:
            if str(project.get('id')) == str(project_id):
                return project.get('project_title') or ''
        return ''

    def _fail(self, message: str) -> Tuple[bool, str]:
        self.notifier.error(message)
        return False, message
