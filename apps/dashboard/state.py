# apps/dashboard/state.py

"""
Project cache, filter engine and stats aggregator

``apply_filter`` and ``compute_stats`` are pure functions over a list of
project dicts; ``DashboardState`` owns the cache and the active filter and
is the only thing allowed to change them.
"""

from typing import Dict, Iterable, List, Optional

from .exceptions import ValidationError

STATUSES = ('proposal', 'ongoing', 'completed')


def status_key(project: Dict) -> str:
    """Lower-cased status of a record, ``''`` when missing"""
    return str(project.get('status') or '').lower()


def normalize_filter(status: Optional[str]) -> Optional[str]:
    """
    Lower-cases a requested filter

    ``None`` and ``''`` mean "no filter"; anything that is not a known
    status raises ``ValidationError``.
    """
    if status is None:
        return None

    status = str(status).strip().lower()
    if not status:
        return None
    if status not in STATUSES:
        raise ValidationError(f"Unknown status: {status}")
    return status


def apply_filter(projects: Iterable[Dict], active_filter: Optional[str]) -> List[Dict]:
    """
    Visible subset of the cache

    Without a filter the full cache comes back in its existing order;
    otherwise the records whose status matches (case-insensitive), in the
    same relative order. The input is never modified.
    """
    if not active_filter:
        return list(projects)

    wanted = active_filter.lower()
    return [project for project in projects if status_key(project) == wanted]


def compute_stats(projects: Iterable[Dict]) -> Dict[str, int]:
    """
    Per-status counts over the whole cache

    ``total`` counts every record, including statuses outside the known
    three, so the buckets may add up to less than the total.
    """
    stats = {'total': 0}
    stats.update({status: 0 for status in STATUSES})

    for project in projects:
        stats['total'] += 1
        key = status_key(project)
        if key in STATUSES:
            stats[key] += 1

    return stats


class DashboardState:
    """
    In-memory state of one dashboard session

    The cache is a snapshot of ``GET /projects``: it is only ever replaced
    as a whole by ``replace`` and never patched record by record.
    """

    def __init__(self, projects: Optional[Iterable[Dict]] = None):
        self._projects: List[Dict] = list(projects or [])
        self._active_filter: Optional[str] = None
        self.loading = False
        self.search_query = ''

    @property
    def projects(self) -> List[Dict]:
        return list(self._projects)

    @property
    def active_filter(self) -> Optional[str]:
        return self._active_filter

    def replace(self, projects: Iterable[Dict]) -> List[Dict]:
        """Swaps the whole cache and returns a copy of the new one"""
        self._projects = list(projects)
        return self.projects

    def select_filter(self, requested: Optional[str]) -> Optional[str]:
        """
        Toggles a status filter

        Selecting the active filter again clears it; selecting another
        status replaces it. Returns the new active filter.
        """
        requested = normalize_filter(requested)
        if requested == self._active_filter:
            self._active_filter = None
        else:
            self._active_filter = requested
        return self._active_filter

    def clear_filter(self) -> None:
        self._active_filter = None

    def visible(self) -> List[Dict]:
        return apply_filter(self._projects, self._active_filter)

    def stats(self) -> Dict[str, int]:
        # Always the unfiltered universe
        return compute_stats(self._projects)

    def __len__(self):
        return len(self._projects)
