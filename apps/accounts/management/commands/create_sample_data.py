"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- An admin account (admin / admin123)
- The contribution group with two fine rules
- 3 members (asha, ravi, meena / password123)
- Manual UPI payment settings
- A paid month for one member and a pending payment request for another
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from decimal import Decimal
from datetime import date

from apps.accounts.models import User
from apps.accounts.services import create_member
from apps.contributions.models import Contribution
from apps.contributions.services import current_month, reconcile_payment_acceptance
from apps.groups.models import Group
from apps.groups.services import create_group, update_payment_settings
from apps.payments.models import PaymentRequest, PaymentRequestStatus
from apps.payments.services import generate_payment_id

# 1x1 transparent PNG
SAMPLE_SCREENSHOT = (
    'data:image/png;base64,'
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=='
)


class Command(BaseCommand):
    help = 'Create sample data for testing the API'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        if Group.objects.exists():
            self.stdout.write(self.style.WARNING('A group already exists, use --clear to start over.'))
            return

        self.stdout.write('Creating sample data...')

        self.create_admin()
        group = self.create_group()
        members = self.create_members(group)
        self.create_payments(members)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin / admin123 (admin)')
        for member in members:
            self.stdout.write(f'  {member.username} / password123')

    def clear_data(self):
        """Clear all data from the database."""
        PaymentRequest.objects.all().delete()
        Contribution.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        Group.objects.all().delete()

    def create_admin(self):
        self.stdout.write('  Creating admin...')

        admin, created = User.objects.get_or_create(
            username='admin',
            defaults={
                'name': 'Group Admin',
                'is_staff': True,
                'is_superuser': True,
                'must_change_password': False,
            }
        )
        if created:
            admin.set_password('admin123')
            admin.save()
        return admin

    def create_group(self):
        self.stdout.write('  Creating group...')

        year = timezone.localdate().year
        return create_group(
            name='Family Fund',
            base_amount=Decimal('1000.00'),
            previous_contribution=Decimal('25000.00'),
            fine_rules=[
                {'from_date': date(year, 1, 6), 'to_date': date(year, 1, 10), 'amount': Decimal('100.00')},
                {'from_date': date(year, 1, 11), 'to_date': date(year, 1, 31), 'amount': Decimal('500.00')},
            ]
        )

    def create_members(self, group):
        self.stdout.write('  Creating members...')

        members = []
        for username, name in [('asha', 'Asha'), ('ravi', 'Ravi'), ('meena', 'Meena')]:
            member = create_member(
                group=group,
                name=name,
                username=username,
                password='password123',
                email=f'{username}@example.com',
            )
            # Skip the first-login password change for sample accounts
            member.must_change_password = False
            member.save(update_fields=['must_change_password'])
            members.append(member)
        return members

    def create_payments(self, members):
        self.stdout.write('  Creating payment requests...')

        update_payment_settings(gateway_enabled=False, upi_id='familyfund@okbank')

        today = timezone.localdate()
        month = current_month(today)

        accepted = PaymentRequest.objects.create(
            user=members[0],
            month=month,
            amount=Decimal('1000.00'),
            upi_id='familyfund@okbank',
            screenshot=SAMPLE_SCREENSHOT,
            payment_id=generate_payment_id(today),
            status=PaymentRequestStatus.ACCEPTED,
            decided_at=timezone.now(),
        )
        reconcile_payment_acceptance(payment_request=accepted)

        PaymentRequest.objects.create(
            user=members[1],
            month=month,
            amount=Decimal('1000.00'),
            upi_id='familyfund@okbank',
            screenshot=SAMPLE_SCREENSHOT,
            payment_id=generate_payment_id(today),
        )
