# apps/dashboard/presenter.py

"""
Template adapter: writes view models into HTML fragments

This is the only place that produces markup. Templates run with Django's
autoescaping on; view-model strings are already escaped ``SafeString``
values, so nothing is escaped twice and nothing reaches the page raw.
"""

import logging
from typing import Dict, List, Optional

from django.template.loader import render_to_string

from .viewmodels import dashboard_view, user_badge
from .widgets import Notification

logger = logging.getLogger(__name__)


class DashboardPresenter:
    """
    Keeps the rendered fragments of one dashboard page

    ``fragments`` maps a region of the page (``tbody``, ``stats``,
    ``title``, ``loader``, ``toasts``) to its current HTML. Attach it to a
    ``ProjectDashboard`` to re-render after every state change.
    """

    ROWS_TEMPLATE = 'dashboard/partials/project_rows.html'
    STATS_TEMPLATE = 'dashboard/partials/stat_cards.html'
    TOAST_TEMPLATE = 'dashboard/partials/toast.html'
    USER_TEMPLATE = 'dashboard/partials/sidebar_user.html'

    def __init__(self):
        self.fragments: Dict[str, str] = {}
        self.toasts: List[str] = []

    def attach(self, dashboard) -> 'DashboardPresenter':
        dashboard.subscribe(self.render)
        dashboard.notifier.subscribe(self.show_toast)
        return self

    def render(self, dashboard) -> Dict[str, str]:
        view = dashboard_view(dashboard.state)

        self.fragments['tbody'] = self.render_rows(view)
        self.fragments['stats'] = self.render_stats(view)
        self.fragments['title'] = view['title']
        self.fragments['loader'] = 'flex' if view['loading'] else 'none'
        return self.fragments

    def render_rows(self, view: Dict) -> str:
        return render_to_string(self.ROWS_TEMPLATE, {
            'rows': view['rows'],
            'empty': view['empty'],
        })

    def render_stats(self, view: Dict) -> str:
        return render_to_string(self.STATS_TEMPLATE, {'stats': view['stats']})

    def render_user(self, user: Optional[Dict]) -> str:
        return render_to_string(self.USER_TEMPLATE, {'badge': user_badge(user)})

    def show_toast(self, notification: Notification) -> str:
        html = render_to_string(self.TOAST_TEMPLATE, {'notification': notification})
        self.toasts.append(html)
        self.fragments['toasts'] = ''.join(self.toasts)
        return html

    def clear_toasts(self) -> None:
        self.toasts = []
        self.fragments['toasts'] = ''
