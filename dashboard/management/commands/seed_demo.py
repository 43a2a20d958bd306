from django.core.management.base import BaseCommand

from dashboard.seed import ensure_seed_data


class Command(BaseCommand):
    help = "Seed departments, teachers, students, attendance and results for a demo install"

    def handle(self, *args, **options):
        if ensure_seed_data():
            self.stdout.write(self.style.SUCCESS("Database seeded successfully."))
        else:
            self.stdout.write("Database already seeded; nothing to do.")
