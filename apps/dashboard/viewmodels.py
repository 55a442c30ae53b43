# apps/dashboard/viewmodels.py

"""
Pure view-model derivation for the dashboard

Everything here takes plain data (project dicts, the active filter, stats)
and returns plain dicts ready for a template. Every string that came from
a user is passed through ``django.utils.html.escape`` before it lands in a
view model, so the presenter never interpolates raw text into markup.
"""

import re
from typing import Dict, Iterable, List, Optional

from django.utils.html import escape

from .state import STATUSES, DashboardState

_NON_ALNUM = re.compile(r'[^a-z0-9]+')

STAT_CARDS = [
    ('total', 'Total Projects'),
    ('proposal', 'Proposal'),
    ('ongoing', 'Ongoing'),
    ('completed', 'Completed'),
]


def slugify_status(status) -> str:
    """``"On Going!"`` -> ``"on-going"``; empty when nothing alphanumeric is left"""
    return _NON_ALNUM.sub('-', str(status or '').lower()).strip('-')


def initial_of(name) -> str:
    name = str(name or '').strip()
    return escape(name[0].upper()) if name else ''


def project_row(project: Dict) -> Dict:
    """One table row; ``id`` is the only field left unescaped when it is an int"""
    project_id = project.get('id')
    title = str(project.get('project_title') or '')

    return {
        'id': project_id if isinstance(project_id, int) else escape(str(project_id)),
        'initial': initial_of(project.get('student_name')),
        'student_name': escape(str(project.get('student_name') or '')),
        'project_title': escape(title),
        'status': escape(str(project.get('status') or '')),
        'status_slug': slugify_status(project.get('status')),
        'confirm_message': escape(f'Are you sure you want to delete "{title}"?'),
    }


def project_rows(projects: Iterable[Dict]) -> List[Dict]:
    return [project_row(project) for project in projects]


def empty_state(active_filter: Optional[str], search_query: str = '') -> Dict[str, str]:
    """Message and hint shown instead of the table when there is no row"""
    if search_query:
        return {
            'message': escape(f'No projects match "{search_query}"'),
            'hint': 'Try a different search',
        }

    if active_filter:
        return {
            'message': escape(f'No {active_filter} projects found'),
            'hint': 'Click another status card or "Total Projects" to see all',
        }

    return {
        'message': 'No projects found',
        'hint': 'Click "Add New Project" to get started',
    }


def table_title(active_filter: Optional[str]) -> str:
    if active_filter:
        return escape(f'{active_filter.capitalize()} Projects')
    return 'All Projects'


def stats_view(stats: Dict[str, int], active_filter: Optional[str]) -> Dict:
    """
    Counts plus one card per bucket

    The ``total`` card is the active one when no filter is set.
    """
    active_card = active_filter if active_filter in STATUSES else 'total'

    view = {key: stats.get(key, 0) for key, _ in STAT_CARDS}
    view['active_card'] = active_card
    view['cards'] = [
        {
            'key': key,
            'label': label,
            'count': stats.get(key, 0),
            'active': key == active_card,
        }
        for key, label in STAT_CARDS
    ]
    return view


def search_projects(projects: Iterable[Dict], query: str) -> List[Dict]:
    """
    Case-insensitive substring search over the text a row displays

    An empty query keeps every project.
    """
    query = (query or '').strip().lower()
    if not query:
        return list(projects)

    def row_text(project):
        return ' '.join(str(project.get(field) or '') for field in
                        ('id', 'student_name', 'project_title', 'status')).lower()

    return [project for project in projects if query in row_text(project)]


def user_badge(user: Optional[Dict]) -> Optional[Dict[str, str]]:
    """
    Sidebar avatar for the logged-in user

    Initials are the first letters of the first and last words of the full
    name, or just the first one for a single word.
    """
    if not user:
        return None

    full_name = str(user.get('full_name') or '').strip()
    parts = full_name.split()
    if len(parts) >= 2:
        initials = (parts[0][0] + parts[-1][0]).upper()
    elif parts:
        initials = parts[0][0].upper()
    else:
        initials = ''

    return {
        'initials': escape(initials),
        'full_name': escape(full_name or str(user.get('username') or '')),
    }


def dashboard_view(state: DashboardState) -> Dict:
    """
    Everything the presenter needs for one render

    Stats always come from the whole cache; rows from the filtered and
    searched subset.
    """
    visible = search_projects(state.visible(), state.search_query)
    rows = project_rows(visible)

    return {
        'rows': rows,
        'empty': None if rows else empty_state(state.active_filter, state.search_query),
        'stats': stats_view(state.stats(), state.active_filter),
        'title': table_title(state.active_filter),
        'active_filter': state.active_filter,
        'loading': state.loading,
    }
