from django.db.models import Count, Q

from classifieds.models import Category

# (name, slug, icon, description); position gives sort_order
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


class CategoryService:
    @staticmethod
    def active_categories():
        """Active categories with the number of publicly visible listings in each."""
        return (
            Category.objects.filter(is_active=True)
            .annotate(
                listing_count=Count(
                    "listings",
                    filter=Q(listings__is_active=True, listings__is_approved=True),
                )
            )
            .order_by("sort_order", "name")
        )

    @staticmethod
    def get_by_slug(slug: str) -> Category | None:
        return CategoryService.active_categories().filter(slug=slug).first()

    @staticmethod
    def seed_defaults() -> int:
        """Create any missing default category. Returns how many were created."""
        created_count = 0
        for sort_order, (name, slug, icon, description) in enumerate(
            DEFAULT_CATEGORIES, start=1
        ):
            _, created = Category.objects.get_or_create(
                slug=slug,
                defaults={
                    "name": name,
                    "icon": icon,
                    "description": description,
                    "sort_order": sort_order,
                    "is_active": True,
                },
            )
            created_count += int(created)
        return created_count
