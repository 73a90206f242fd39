"""Storefront FastAPI application.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay in storefront/domain.toml:
#   - unset        → in-memory database and event store
#   - "production" → PostgreSQL at DATABASE_URL; create its tables first with
#                    `PROTEAN_ENV=production python src/manage.py setup-db`
from storefront.domain import storefront
from storefront.utils.logging import configure_logging

storefront.init()
configure_logging()

from storefront.api.application import create_app  # noqa: E402

app = create_app()
