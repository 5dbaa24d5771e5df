from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connection


class Command(BaseCommand):
    help = "Run a trivial query to confirm the database is reachable."

    def handle(self, *args, **options):
        try:
            with connection.cursor() as cursor:
                cursor.execute('SELECT 1 + 1 AS result')
                row = cursor.fetchone()
        except DatabaseError as exc:
            raise CommandError(f'DB connection error: {exc}') from exc
        self.stdout.write(self.style.SUCCESS(f'DB connection works! Result: {row[0]}'))
