from django.core.management.base import BaseCommand

from classifieds.services.category_service import CategoryService


class Command(BaseCommand):
    help = "Creates any missing default marketplace categories"

    def handle(self, *args, **kwargs):
        created = CategoryService.seed_defaults()
        self.stdout.write(
            self.style.SUCCESS(f"Default categories ready ({created} created)")
        )
