from django.core.management.base import BaseCommand
from django.db import transaction

from jobs.models import Job, Phase


SAMPLE_JOB = {
    'job_number': 'J2023-001',
    'project_name': 'Downtown Cafe Awnings',
    'buyer': 'Jane Smith',
    'title': 'Cafe Awning Installation',
    'salesman': 'Bob Johnson',
}

SAMPLE_PHASES = [
    (1, 'Front Entrance'),
    (2, 'Side Patio'),
]


class Command(BaseCommand):
    help = "Create a sample job with two phases so a fresh database has something to show."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Delete the sample job first if it already exists.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        existing = Job.objects.filter(job_number=SAMPLE_JOB['job_number'])
        if existing.exists():
            if not options["force"]:
                self.stdout.write(
                    self.style.WARNING(f"Job {SAMPLE_JOB['job_number']} already exists, nothing to do.")
                )
                return
            existing.delete()

        job = Job.objects.create(**SAMPLE_JOB)
        for number, name in SAMPLE_PHASES:
            Phase.objects.create(job=job, phase_number=number, phase_name=name)

        self.stdout.write(
            self.style.SUCCESS(f"Sample job {job.job_number} created with {len(SAMPLE_PHASES)} phases")
        )
