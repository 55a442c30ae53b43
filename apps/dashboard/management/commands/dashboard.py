# apps/dashboard/management/commands/dashboard.py

import getpass
import html
import shlex

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from apps.dashboard.coordinator import ProjectDashboard
from apps.dashboard.session import ClientSession
from apps.dashboard.store import AuthClient, RemoteProjectStore
from apps.dashboard.viewmodels import dashboard_view, user_badge
from apps.dashboard.widgets import ERROR, SUCCESS

HELP_TEXT = """
Commands:
  list                 show the visible projects
  filter <status>      toggle proposal | ongoing | completed
  all                  clear the status filter
  search [text]        search the visible rows (no text clears it)
  add                  add a project
  delete <id>          delete a project (asks for confirmation)
  refresh              reload from the server
  logout               log out and quit
  help                 this text
  quit                 leave
"""


class Command(BaseCommand):
    help = 'Interactive console dashboard for the project API'

    def add_arguments(self, parser):
        parser.add_argument('--api-url', help='API base URL (default: SPMS_API_BASE)')
        parser.add_argument('--username', help='Log in with this username')
        parser.add_argument('--password', help='Password for --username (prompted when missing)')
        parser.add_argument(
            '--register',
            action='store_true',
            help='Create the account before logging in',
        )
        parser.add_argument(
            '--once',
            action='store_true',
            help='Print the dashboard once and exit',
        )

    def handle(self, *args, **options):
        store = RemoteProjectStore(base_url=options['api_url'])
        # Same requests.Session so the login cookie is shared
        self.session = ClientSession(AuthClient(base_url=store.base_url, session=store.session))
        self.dashboard = ProjectDashboard(store)
        self.dashboard.notifier.subscribe(self._print_notification)

        self._authenticate(options)

        badge = user_badge(self.session.user)
        if badge:
            self.stdout.write(f"👤 {self._text(badge['full_name'])} ({self._text(badge['initials'])})")

        async_to_sync(self.dashboard.refresh)()
        self._print_dashboard()

        if options['once']:
            return

        self.stdout.write(HELP_TEXT)
        while True:
            try:
                line = input('spms> ')
            except (EOFError, KeyboardInterrupt):
                self.stdout.write('')
                break

            if not self._dispatch(line):
                break

    # =================== LOGIN ===================

    def _authenticate(self, options):
        username = options['username'] or input('Username: ')
        password = options['password'] or getpass.getpass('Password: ')

        if options['register']:
            full_name = input('Full name: ')
            ok, message = async_to_sync(self.session.register)(full_name, username, password)
            self._print_result(ok, message)
            if not ok:
                raise CommandError(message)

        ok, message = async_to_sync(self.session.login)(username, password)
        self._print_result(ok, message)
        if not ok:
            raise CommandError(message)

    # =================== COMMANDS ===================

    def _dispatch(self, line):
        """Runs one command; returns False to leave the loop"""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.stdout.write(self.style.ERROR(str(e)))
            return True

        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]

        if command in ('quit', 'exit'):
            return False

        if command == 'logout':
            async_to_sync(self.session.logout)()
            self.stdout.write('👋 Logged out')
            return False

        if command == 'help':
            self.stdout.write(HELP_TEXT)
        elif command == 'list':
            self._print_dashboard()
        elif command == 'refresh':
            async_to_sync(self.dashboard.refresh)()
            self._print_dashboard()
        elif command == 'filter' and len(args) == 1:
            ok, _ = self.dashboard.select_filter(args[0])
            if ok:
                self._print_dashboard()
        elif command == 'all':
            self.dashboard.clear_filter()
            self._print_dashboard()
        elif command == 'search':
            self.dashboard.search(' '.join(args))
            self._print_dashboard()
        elif command == 'add':
            self._add()
        elif command == 'delete' and len(args) == 1:
            self._delete(args[0])
        else:
            self.stdout.write(self.style.WARNING(f"Unknown command: {line.strip()} (try 'help')"))

        return True

    def _add(self):
        student_name = input('Student name: ')
        project_title = input('Project title: ')
        status = input('Status (Proposal/Ongoing/Completed): ')

        ok, _ = async_to_sync(self.dashboard.create)(student_name, project_title, status)
        if ok:
            self._print_dashboard()

    def _delete(self, project_id):
        question = self.dashboard.request_delete(project_id)
        answer = input(f"⚠️  {question} (y/N): ")

        if answer.strip().lower() != 'y':
            self.dashboard.cancel_delete()
            self.stdout.write('Deletion cancelled')
            return

        ok, _ = async_to_sync(self.dashboard.confirm_delete)()
        if ok:
            self._print_dashboard()

    # =================== OUTPUT ===================

    def _print_dashboard(self):
        view = dashboard_view(self.dashboard.state)
        stats = view['stats']

        self.stdout.write('')
        self.stdout.write('  '.join(
            f"[{card['label']}: {card['count']}]" if card['active'] else f"{card['label']}: {card['count']}"
            for card in stats['cards']
        ))
        self.stdout.write(self.style.MIGRATE_HEADING(self._text(view['title'])))

        if view['empty']:
            self.stdout.write(f"📂 {self._text(view['empty']['message'])}")
            self.stdout.write(f"   {self._text(view['empty']['hint'])}")
            return

        for row in view['rows']:
            self.stdout.write(
                f"{row['id']:>5}  {self._text(row['student_name'])[:24]:<24}  "
                f"{self._text(row['project_title'])[:40]:<40}  {self._text(row['status'])}"
            )

    def _print_notification(self, notification):
        self._print_result(notification.level == SUCCESS, notification.message, notification.level)

    def _print_result(self, ok, message, level=None):
        level = level or (SUCCESS if ok else ERROR)
        if level == SUCCESS:
            self.stdout.write(self.style.SUCCESS(f"✅ {message}"))
        elif level == ERROR:
            self.stdout.write(self.style.ERROR(f"❌ {message}"))
        else:
            self.stdout.write(f"ℹ️  {message}")

    @staticmethod
    def _text(value):
        # View models carry HTML-escaped text; the console wants it plain
        return html.unescape(str(value))
