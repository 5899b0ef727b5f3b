from sqlalchemy.orm import Session

from products_api.core.security import generate_salt, hash_password
from products_api.models.product import Product
from products_api.models.user import User


def create_user(db: Session, username: str, password: str) -> User:
    """Insert a user, or reset the password of an existing one, with a fresh salt."""
    salt = generate_salt()
    hashed = hash_password(password, salt)

    user = db.query(User).filter(User.username == username).first()
    if user:
        user.salt = salt
        user.salted_password_hash = hashed
    else:
        user = User(username=username, salt=salt, salted_password_hash=hashed)
        db.add(user)

    db.commit()
    db.refresh(user)
    return user


def seed_products_if_empty(db: Session) -> int:
    if db.query(Product).count() > 0:
        return 0

    products = [
        Product(name="Widget A", manufacturer="ACME"),
        Product(name="Widget B", manufacturer="ACME"),
        Product(name="Gadget C", manufacturer="Globex"),
    ]
    db.add_all(products)
    db.commit()
    return len(products)
