# apps/core/management/commands/seed.py

from django.core.management.base import BaseCommand
from django.db import connection, transaction

from apps.core.models import Project, Usuario

DEMO_PROJECTS = [
    ('Ana Souza', 'Smart Irrigation with Soil Sensors', Project.STATUS_PROPOSAL),
    ('Brian Otieno', 'Campus Bus Tracker', Project.STATUS_ONGOING),
    ('Chen Wei', 'Library Seat Reservation System', Project.STATUS_COMPLETED),
    ('Dara Nguyen', 'Handwritten Digit Recognition', Project.STATUS_ONGOING),
    ('Elif Kaya', 'Student Attendance via QR Codes', Project.STATUS_PROPOSAL),
]


class Command(BaseCommand):
    help = 'Checks the database and inserts demo projects'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete every project before seeding',
        )
        parser.add_argument(
            '--demo-user',
            action='store_true',
            help='Also create the demo/demo account',
        )

    def handle(self, *args, **options):
        self.stdout.write('🔍 Checking the database...')

        try:
            self._check_connection()

            with transaction.atomic():
                if options['clear']:
                    deleted, _ = Project.objects.all().delete()
                    self.stdout.write(f'  🗑️  {deleted} project(s) deleted')

                created = self._seed_projects()

                if options['demo_user']:
                    self._seed_demo_user()

        except Exception as e:
            self.stdout.write(self.style.ERROR(f'❌ Seed failed: {e}'))
            raise

        self.stdout.write(self.style.SUCCESS(f'✅ Seed finished: {created} project(s) created'))

    def _check_connection(self):
        """Basic database round trip"""
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            result = cursor.fetchone()

            if result[0] != 1:
                raise Exception("Database is not answering correctly")

    def _seed_projects(self):
        """Inserts the demo projects that are not there yet"""
        created = 0
        for student_name, project_title, status in DEMO_PROJECTS:
            _, was_created = Project.objects.get_or_create(
                student_name=student_name,
                project_title=project_title,
                defaults={'status': status},
            )
            if was_created:
                created += 1
        return created

    def _seed_demo_user(self):
        if Usuario.objects.filter(username='demo').exists():
            self.stdout.write('  👤 demo user already exists')
            return

        Usuario.objects.create_user(username='demo', password='demo', full_name='Demo User')
        self.stdout.write('  👤 demo user created (demo/demo)')
