# Seed the default marketplace categories.

from django.db import migrations

DEFAULT_CATEGORIES = [
    ("Motoryzacja", "motors", "fas fa-car", "Samochody, motocykle, części samochodowe"),
    ("Nieruchomości", "real-estate", "fas fa-home", "Mieszkania, domy, działki, wynajem"),
    ("Elektronika", "electronics", "fas fa-laptop", "Komputery, telefony, sprzęt elektroniczny"),
    ("Moda", "fashion", "fas fa-tshirt", "Odzież, obuwie, akcesoria"),
    ("Dom i Ogród", "home-garden", "fas fa-couch", "Meble, wyposażenie domu, narzędzia ogrodnicze"),
    ("Praca", "jobs", "fas fa-briefcase", "Oferty pracy, zlecenia"),
    ("Usługi", "services", "fas fa-tools", "Usługi profesjonalne, naprawy"),
    ("Sport i Hobby", "sports-hobby", "fas fa-football-ball", "Sprzęt sportowy, hobby, gry"),
    ("Kolekcje", "collectibles", "fas fa-gem", "Antyki, sztuka, kolekcje"),
    ("Zwierzęta", "pets", "fas fa-paw", "Zwierzęta, akcesoria dla zwierząt"),
]


def create_default_categories(apps, schema_editor):
    Category = apps.get_model("classifieds", "Category")
    for sort_order, (name, slug, icon, description) in enumerate(
        DEFAULT_CATEGORIES, start=1
    ):
        Category.objects.get_or_create(
            slug=slug,
            defaults={
                "name": name,
                "icon": icon,
                "description": description,
                "sort_order": sort_order,
                "is_active": True,
            },
        )


def remove_default_categories(apps, schema_editor):
    Category = apps.get_model("classifieds", "Category")
    Category.objects.filter(
        slug__in=[slug for _, slug, _, _ in DEFAULT_CATEGORIES],
        listings__isnull=True,
    ).delete()


class Migration(migrations.Migration):

    dependencies = [
        ("classifieds", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(create_default_categories, remove_default_categories),
    ]
