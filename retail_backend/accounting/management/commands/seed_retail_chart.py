# accounting/management/commands/seed_retail_chart.py

from django.core.management.base import BaseCommand

from accounting.services.chart_seed import initialize_default_chart


class Command(BaseCommand):
    help = "Seed account types, sub-types and the default General Retail chart of accounts"

    def handle(self, *args, **options):
        self.stdout.write("Seeding General Retail Chart of Accounts...")

        created = initialize_default_chart()

        self.stdout.write(
            self.style.SUCCESS(
                "✔ General Retail chart seeded "
                f"({created['types']} types, {created['sub_types']} sub-types, "
                f"{created['accounts']} new accounts)."
            )
        )
