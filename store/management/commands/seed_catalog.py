import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from store.models import Category, Product, Testimonial, User

logger = logging.getLogger(__name__)

CATEGORIES = [
    {'name': 'Футбол', 'name_en': 'Football', 'icon': 'fa-futbol',
     'image': 'https://images.unsplash.com/photo-1553778263-73a83c0d6fa2'},
    {'name': 'Баскетбол', 'name_en': 'Basketball', 'icon': 'fa-basketball-ball',
     'image': 'https://images.unsplash.com/photo-1546519638-68e109498ffc'},
    {'name': 'Тенис', 'name_en': 'Tennis', 'icon': 'fa-table-tennis',
     'image': 'https://images.unsplash.com/photo-1595435934249-5df7ed86e1c0'},
    {'name': 'Фитнес', 'name_en': 'Fitness', 'icon': 'fa-dumbbell',
     'image': 'https://images.unsplash.com/photo-1571019614242-c5c5dee9f50b'},
]

# (category name_en, fields)
PRODUCTS = [
    ('Basketball', {
        'name': 'Баскетболни обувки Nike Air Jordan XXXVI',
        'name_en': 'Nike Air Jordan XXXVI Basketball Shoes',
        'description': 'Баскетболни обувки Nike Air Jordan XXXVI с лека и дишаща конструкция.',
        'description_en': 'Lightweight, breathable basketball shoes built for on-court performance.',
        'price': Decimal('219.99'), 'discounted_price': Decimal('189.99'),
        'image': 'https://images.unsplash.com/photo-1542291026-7eec264c27ff',
        'stock': 15, 'badge': 'Нов', 'badge_en': 'New', 'rating': 4.8, 'featured': True,
    }),
    ('Football', {
        'name': 'Футболна топка Adidas Champions League',
        'name_en': 'Adidas Champions League Football',
        'description': 'Официална футболна топка с термично залепена конструкция.',
        'description_en': 'Official match ball with thermally bonded panels for touch and control.',
        'price': Decimal('89.99'), 'discounted_price': None,
        'image': 'https://images.unsplash.com/photo-1614632537197-38a17061c2bd',
        'stock': 25, 'rating': 4.9, 'featured': True,
    }),
    ('Tennis', {
        'name': 'Тенис ракета Wilson Pro Staff RF97',
        'name_en': 'Wilson Pro Staff RF97 Tennis Racket',
        'description': 'Тенис ракета за изключителен контрол и прецизност.',
        'description_en': 'Tennis racket designed for exceptional control and precision.',
        'price': Decimal('259.99'), 'discounted_price': Decimal('229.99'),
        'image': 'https://images.unsplash.com/photo-1617083934777-ae3cff06b4ab',
        'stock': 8, 'badge': 'Разпродажба', 'badge_en': 'Sale', 'rating': 4.7, 'featured': True,
    }),
    ('Fitness', {
        'name': 'Фитнес гривна Fitbit Charge 5',
        'name_en': 'Fitbit Charge 5 Fitness Tracker',
        'description': 'Фитнес гривна с GPS и непрекъснато следене на сърдечния ритъм.',
        'description_en': 'Fitness tracker with GPS and continuous heart rate monitoring.',
        'price': Decimal('179.99'), 'discounted_price': Decimal('149.99'),
        'image': 'https://images.unsplash.com/photo-1575311373937-040b8e1fd5b6',
        'stock': 20, 'rating': 4.6, 'featured': True,
    }),
    ('Football', {
        'name': 'Футболни обувки Nike Mercurial Vapor',
        'name_en': 'Nike Mercurial Vapor Football Boots',
        'description': 'Футболни обувки, проектирани за скорост.',
        'description_en': 'Football boots designed for speed with a lightweight build.',
        'price': Decimal('199.99'), 'discounted_price': None,
        'image': 'https://images.unsplash.com/photo-1511886929837-354984b71424',
        'stock': 12, 'rating': 4.5,
    }),
    ('Basketball', {
        'name': 'Баскетболна топка Spalding NBA',
        'name_en': 'Spalding NBA Basketball',
        'description': 'Официална баскетболна топка с отлично сцепление.',
        'description_en': 'Official basketball with excellent grip and durability.',
        'price': Decimal('69.99'), 'discounted_price': Decimal('59.99'),
        'image': 'https://images.unsplash.com/photo-1519861531473-9200262188bf',
        'stock': 18, 'rating': 4.7,
    }),
    ('Tennis', {
        'name': 'Тенис обувки Asics Gel-Resolution 8',
        'name_en': 'Asics Gel-Resolution 8 Tennis Shoes',
        'description': 'Тенис обувки за стабилност и комфорт.',
        'description_en': 'Tennis shoes with stability technology and cushioning for comfort.',
        'price': Decimal('149.99'), 'discounted_price': None,
        'image': 'https://images.unsplash.com/photo-1606107557195-0e29a4b5b4aa',
        'stock': 10, 'rating': 4.6,
    }),
    ('Fitness', {
        'name': 'Фитнес постелка Nike',
        'name_en': 'Nike Fitness Mat',
        'description': 'Фитнес постелка с нехлъзгаща се повърхност.',
        'description_en': 'Fitness mat with a non-slip surface for all workouts.',
        'price': Decimal('49.99'), 'discounted_price': Decimal('39.99'),
        'image': 'https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b',
        'stock': 22, 'badge': 'Разпродажба', 'badge_en': 'Sale', 'rating': 4.4,
    }),
]

TESTIMONIALS = [
    {'name': 'Мария Иванова', 'title': 'Футболист',
     'content': 'Страхотни продукти за футбол! Много съм доволна от качеството и комфорта.',
     'image': 'https://randomuser.me/api/portraits/women/11.jpg'},
    {'name': 'Георги Петров', 'title': 'Баскетболист',
     'content': 'Доставката беше бърза и обслужването отлично.',
     'image': 'https://randomuser.me/api/portraits/men/32.jpg'},
    {'name': 'Александра Димитрова', 'title': 'Фитнес инструктор',
     'content': 'Редовно пазарувам от SportZone. Високо качество на добри цени.',
     'image': 'https://randomuser.me/api/portraits/women/44.jpg'},
]


class Command(BaseCommand):
    help = "Load the sample catalog (categories, products, testimonials) into an empty database."

    def add_arguments(self, parser):
        parser.add_argument("--admin-password", default=None,
                            help="Also create an 'admin' store user with this password")

    @transaction.atomic
    def handle(self, *args, **options):
        if Category.objects.exists():
            self.stdout.write("Catalog already present, nothing to do.")
        else:
            categories = {c['name_en']: Category.objects.create(**c) for c in CATEGORIES}
            for category_name, fields in PRODUCTS:
                Product.objects.create(category=categories[category_name], **fields)
            for fields in TESTIMONIALS:
                Testimonial.objects.create(**fields)
            logger.info("Seeded %s categories, %s products, %s testimonials",
                        len(CATEGORIES), len(PRODUCTS), len(TESTIMONIALS))
            self.stdout.write(self.style.SUCCESS(f"Created {len(PRODUCTS)} products."))

        password = options["admin_password"]
        if password and not User.objects.filter(username='admin').exists():
            User.objects.create_user(
                username='admin',
                email='admin@sportzone.bg',
                password=password,
                first_name='Admin',
                is_admin=True,
                is_staff=True,
            )
            self.stdout.write(self.style.SUCCESS("Created admin user."))
