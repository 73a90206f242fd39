"""Demo catalogue: three users and eight products.

Seeding only runs against an empty catalogue, so restarting the application
never duplicates data.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.registration import AddProduct
from storefront.identity.registration import RegisterUser

logger = structlog.get_logger(__name__)

DEMO_USERS = [
    {"name": "Juan Pérez", "email": "juan@example.com"},
    {"name": "María García", "email": "maria@example.com"},
    {"name": "Carlos López", "email": "carlos@example.com"},
]

DEMO_PRODUCTS = [
    {"name": "Laptop Dell XPS 13", "price": 1200.00, "stock": 15},
    {"name": "iPhone 15 Pro", "price": 999.00, "stock": 25},
    {"name": "Sony WH-1000XM5", "price": 399.00, "stock": 30},
    {"name": "Samsung Galaxy Tab S9", "price": 649.00, "stock": 20},
    {"name": "Apple Watch Series 9", "price": 429.00, "stock": 40},
    {"name": "Logitech MX Master 3S", "price": 99.00, "stock": 50},
    {"name": "LG UltraFine 4K Monitor", "price": 699.00, "stock": 10},
    {"name": "Mechanical Keyboard RGB", "price": 159.00, "stock": 35},
]


def seed_catalogue() -> bool:
    """Register the demo users and products. Returns False if data already exists."""
    if current_domain.repository_for(Product)._dao.query.all().items:
        logger.info("Catalogue already seeded")
        return False

    for user in DEMO_USERS:
        current_domain.process(RegisterUser(**user), asynchronous=False)
    for product in DEMO_PRODUCTS:
        current_domain.process(AddProduct(**product), asynchronous=False)

    logger.info("Catalogue seeded", users=len(DEMO_USERS), products=len(DEMO_PRODUCTS))
    return True
