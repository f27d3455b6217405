"""
Flip pending installments whose due date has passed to overdue.
Usage: python manage.py mark_overdue_installments [--date YYYY-MM-DD] [--dry-run]
Meant to run daily from cron.
"""
from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from payments.models import PaymentInstallment
from payments.services.ledger import mark_overdue_installments


class Command(BaseCommand):
    help = 'Mark pending installments past their due date as overdue'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help='Reference date (default: today in the project time zone)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report only, no changes',
        )

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options.get('date'):
            try:
                today = date.fromisoformat(options['date'])
            except ValueError:
                raise CommandError('--date must be YYYY-MM-DD')

        if options['dry_run']:
            count = PaymentInstallment.objects.filter(
                status=PaymentInstallment.STATUS_PENDING,
                due_date__lt=today,
            ).count()
            self.stdout.write(self.style.WARNING(f'DRY RUN - {count} installment(s) would be marked overdue'))
            return

        updated = mark_overdue_installments(today)
        self.stdout.write(self.style.SUCCESS(f'Marked {updated} installment(s) overdue (as of {today})'))
