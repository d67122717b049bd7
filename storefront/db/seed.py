import logging
from storefront.db.storage import FileStorage
from storefront.models.schemas import BlogPostIn, ProductIn

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Noise-Cancelling Headphones",
        "description": "Immersive sound with active noise cancellation.",
        "price": 199.99,
        "category": "audio",
        "images": ["https://images.unsplash.com/photo-1518441902113-c1d3b87b73dc?w=1200"],
        "stock": 25,
        "featured": True,
        "tags": ["wireless", "bluetooth"],
        "brand": "Sonic",
    },
    {
        "name": "Smartwatch Pro",
        "description": "Fitness tracking, notifications, and more.",
        "price": 149.99,
        "category": "wearables",
        "images": ["https://images.unsplash.com/photo-1517341720795-cf33c0b59877?w=1200"],
        "stock": 40,
        "featured": True,
        "tags": ["fitness"],
        "brand": "Pulse",
    },
    {
        "name": "Ultrabook 14",
        "description": "Thin and light laptop with all-day battery.",
        "price": 1099.0,
        "category": "laptops",
        "images": ["https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=1200"],
        "stock": 10,
        "tags": ["laptop", "portable"],
        "brand": "Nimbus",
    },
    {
        "name": "Portable Bluetooth Speaker",
        "description": "Rich bass and 12-hour battery.",
        "price": 59.99,
        "category": "audio",
        "images": ["https://images.unsplash.com/photo-1585386959984-a4155223168f?w=1200"],
        "stock": 60,
        "tags": ["bluetooth", "outdoor"],
        "brand": "Sonic",
    },
]

DEMO_POSTS = [
    {
        "title": "How to Pick Your First Laptop",
        "content": "Start with what you actually do every day, then work backwards to the specs.",
        "excerpt": "A short checklist before you buy.",
        "category": "guides",
        "image": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853?w=1200",
        "readTime": 4,
    },
    {
        "title": "Wireless Audio, Explained",
        "content": "Codecs, latency and battery life matter more than the driver size.",
        "excerpt": "What the spec sheet does not tell you.",
        "category": "audio",
        "image": "https://images.unsplash.com/photo-1518441902113-c1d3b87b73dc?w=1200",
        "readTime": 6,
    },
]

def seed_demo_data(storage: FileStorage) -> None:
    """Fill the product and blog collections if they are empty."""
    _, product_count = storage.get_products()
    if product_count == 0:
        for item in DEMO_PRODUCTS:
            storage.create_product(ProductIn.model_validate(item))
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} demo products")
    _, post_count = storage.get_blog_posts()
    if post_count == 0:
        for item in DEMO_POSTS:
            storage.create_blog_post(BlogPostIn.model_validate(item))
        logger.info(f"Seeded {len(DEMO_POSTS)} demo blog posts")
