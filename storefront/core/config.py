import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = os.getenv("APP_NAME", "TechTreasure Storefront")
DATA_DIR = os.getenv("DATA_DIR", "data")
SESSION_SECRET = os.getenv("SESSION_SECRET", "changeme")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "storefront_session")
SESSION_EXPIRE_MINUTES = int(os.getenv("SESSION_EXPIRE_MINUTES", str(60 * 24)))  # 24 hours
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() in ("1", "true", "yes")
