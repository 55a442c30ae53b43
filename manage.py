#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Student Project Monitor (SPMS)
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Development settings by default
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import call_command, execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # SPMS shortcuts
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # Initial setup
        if command == 'setup':
            import django
            django.setup()

            print("🚀 Setting up SPMS...")

            print("📊 Applying migrations...")
            call_command('migrate', interactive=False)

            print("🌱 Seeding demo projects...")
            call_command('seed', demo_user=True)

            print("✅ Setup finished!")
            print("🔑 Log in with: demo/demo")
            return

        elif command == 'backup':
            import django
            django.setup()

            from datetime import datetime
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_spms_{timestamp}.json"

            print("💾 Creating database backup...")
            call_command('dumpdata', 'core', indent=2, output=backup_file)
            print(f"✅ Backup created: {backup_file}")
            return

        # Wipe everything and reseed
        elif command == 'reset':
            confirm = input("⚠️  This deletes ALL data. Continue? (y/N): ")
            if confirm.lower() == 'y':
                import django
                django.setup()

                print("🗑️  Resetting database...")
                call_command('flush', interactive=False)
                call_command('migrate', interactive=False)
                call_command('seed', demo_user=True)
                print("✅ Reset finished!")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
