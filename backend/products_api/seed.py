# backend/products_api/seed.py
#
# DEV ONLY: creates the tables and demo rows in the configured store.
#   python -m products_api.seed

from products_api.core.config import settings
from products_api.core.database import build_engine, build_session_factory, init_db
from products_api.core.seed import create_user, seed_products_if_empty

# Change these creds anytime (demo defaults)
DEMO_USERS = [
    ("user1", "pass1"),
    ("user2", "pass2"),
]


def seed() -> None:
    engine = build_engine(settings)
    init_db(engine)

    db = build_session_factory(engine)()
    try:
        for username, password in DEMO_USERS:
            create_user(db, username, password)
            print(f"Seeded user: {username}")

        added = seed_products_if_empty(db)
        print(f"Added {added} product(s).")

        print("\nLogin creds:")
        for username, password in DEMO_USERS:
            print(f" - {username} / {password}")
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    seed()
