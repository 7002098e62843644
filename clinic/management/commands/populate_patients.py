"""
Management command to populate the database with sample patients.
"""
import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from clinic.models import Patient

FIRST_NAMES = ['Mohamed', 'Hassan', 'Imane', 'Yasmine', 'Omar', 'Salma', 'Karim', 'Nadia', 'Youssef', 'Aya']
LAST_NAMES = ['Alaoui', 'Bennani', 'Chraibi', 'Idrissi', 'Tazi', 'Fassi', 'Berrada', 'Amrani']


class Command(BaseCommand):
    help = 'Populate database with sample patients'

    def add_arguments(self, parser):
        parser.add_argument('--count', type=int, default=20)
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        today = timezone.localdate()
        created = 0
        with transaction.atomic():
            for _ in range(max(options['count'], 0)):
                patient = Patient(
                    name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                    date_of_birth=today - timedelta(days=rng.randint(0, 90 * 365)),
                    sick=rng.random() < 0.5,
                    score=rng.randint(0, 500),
                )
                patient.full_clean()
                patient.save()
                created += 1
        self.stdout.write(self.style.SUCCESS(f'{created} patients created.'))
