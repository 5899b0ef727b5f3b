# backend/products_api/api/routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from products_api.api.deps_auth import require_credentials
from products_api.api.responses import INVALID_PAYLOAD, APIError, respond_with_message
from products_api.core.database import get_db
from products_api.models.product import Product as ProductModel

log = logging.getLogger(__name__)

# every route below runs the Basic auth guard before anything else
router = APIRouter(dependencies=[Depends(require_credentials)])

PRODUCT_NOT_FOUND = "Product not found"

# ids are signed 64-bit at most; anything larger cannot name a row
MAX_PRODUCT_ID = 2 ** 63 - 1

# ---------- SCHEMAS ----------

class Product(BaseModel):
    id: int
    name: str
    manufacturer: str

    class Config:
        from_attributes = True


class ProductIn(BaseModel):
    name: str
    manufacturer: str


async def product_payload(request: Request) -> ProductIn:
    # parsed here, not as a body parameter, so bad JSON from an
    # unauthenticated caller still gets 401 from the guard first
    try:
        return ProductIn.model_validate_json(await request.body())
    except ValidationError:
        raise APIError(status.HTTP_400_BAD_REQUEST, INVALID_PAYLOAD)


def check_product_id(product_id: int) -> None:
    if product_id > MAX_PRODUCT_ID:
        raise APIError(status.HTTP_404_NOT_FOUND, PRODUCT_NOT_FOUND)


def store_failure(db: Session, exc: SQLAlchemyError) -> APIError:
    db.rollback()
    log.error("product store error: %s", exc, exc_info=exc)
    return APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

# ---------- ROUTES ----------

# curl --user user1:pass1 127.0.0.1:8000/api/products/list
@router.get("/list", response_model=List[Product])
def list_products(db: Session = Depends(get_db)):
    try:
        return db.query(ProductModel).order_by(ProductModel.id).all()
    except SQLAlchemyError as exc:
        raise store_failure(db, exc)


# curl -H "Content-Type: application/json" -X POST -d '{"name": "ABC", "manufacturer": "ACME"}' \
#      --user user1:pass1 127.0.0.1:8000/api/products/new
@router.post("/new", status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductIn = Depends(product_payload),
    db: Session = Depends(get_db),
):
    try:
        db.add(ProductModel(name=payload.name, manufacturer=payload.manufacturer))
        db.commit()
    except SQLAlchemyError as exc:
        raise store_failure(db, exc)

    return respond_with_message(status.HTTP_201_CREATED, "New row added.")


# curl --user user1:pass1 127.0.0.1:8000/api/products/10
@router.get("/{product_id:int}", response_model=Product)
def get_product(product_id: int, db: Session = Depends(get_db)):
    check_product_id(product_id)
    try:
        p = db.get(ProductModel, product_id)
    except SQLAlchemyError as exc:
        raise store_failure(db, exc)

    if not p:
        raise APIError(status.HTTP_404_NOT_FOUND, PRODUCT_NOT_FOUND)
    return p


# curl -X PUT -d '{"name": "ABC", "manufacturer": "ACME"}' --user user1:pass1 127.0.0.1:8000/api/products/11
@router.put("/{product_id:int}", response_model=Product)
def update_product(
    product_id: int,
    payload: ProductIn = Depends(product_payload),
    db: Session = Depends(get_db),
):
    check_product_id(product_id)

    try:
        matched = (
            db.query(ProductModel)
            .filter(ProductModel.id == product_id)
            .update(
                {ProductModel.name: payload.name, ProductModel.manufacturer: payload.manufacturer},
                synchronize_session=False,
            )
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise store_failure(db, exc)

    if not matched:
        raise APIError(status.HTTP_404_NOT_FOUND, PRODUCT_NOT_FOUND)
    return Product(id=product_id, name=payload.name, manufacturer=payload.manufacturer)


# curl -X DELETE --user user1:pass1 127.0.0.1:8000/api/products/10
@router.delete("/{product_id:int}")
def delete_product(product_id: int, db: Session = Depends(get_db)):
    check_product_id(product_id)
    try:
        matched = (
            db.query(ProductModel)
            .filter(ProductModel.id == product_id)
            .delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        raise store_failure(db, exc)

    if not matched:
        raise APIError(status.HTTP_404_NOT_FOUND, PRODUCT_NOT_FOUND)
    return respond_with_message(status.HTTP_200_OK, "Deleted.")
