"""
api/routes/products.py -- Product catalog routes.

Routes (in registration order to avoid FastAPI path capture conflicts):
  GET    /product               -- list all products, newest first
  POST   /product               -- create product
  PUT    /product               -- partial update; body carries the id
  DELETE /product               -- hard delete; body carries the id
  GET    /product/stats         -- total / active / inactive counts
  GET    /product/{product_id}  -- single product

Catalog routes are public, matching the point-of-sale terminal that calls
them without a session.
"""

from fastapi import APIRouter, Request

from api.models import Envelope, ProductResponse, ProductStatsResponse
from catalog import service
from catalog.schemas import ProductCreate, ProductRef, ProductUpdate
from catalog.store import ProductStore

router = APIRouter()


def _store(request: Request) -> ProductStore:
    return request.app.state.product_store


@router.get("/product", response_model=Envelope[list[ProductResponse]])
def list_products(request: Request) -> Envelope[list[ProductResponse]]:
    products = service.list_products(_store(request))
    return Envelope[list[ProductResponse]](data=[ProductResponse.from_product(p) for p in products])


@router.post("/product", response_model=Envelope[ProductResponse], status_code=201)
def create_product(request: Request, body: ProductCreate) -> Envelope[ProductResponse]:
    """Add a product to the catalog. status defaults to "active"."""
    created = service.create_product(_store(request), body)
    return Envelope[ProductResponse](data=ProductResponse.from_product(created))


@router.put("/product", response_model=Envelope[ProductResponse])
def update_product(request: Request, body: ProductUpdate) -> Envelope[ProductResponse]:
    """Change only the supplied fields of an existing product."""
    updated = service.update_product(_store(request), body)
    return Envelope[ProductResponse](data=ProductResponse.from_product(updated))


@router.delete("/product", response_model=Envelope[ProductResponse])
def delete_product(request: Request, body: ProductRef) -> Envelope[ProductResponse]:
    """Permanently remove a product and return its last-known values."""
    deleted = service.delete_product(_store(request), body)
    return Envelope[ProductResponse](data=ProductResponse.from_product(deleted))


@router.get("/product/stats", response_model=Envelope[ProductStatsResponse])
def product_stats(request: Request) -> Envelope[ProductStatsResponse]:
    return Envelope[ProductStatsResponse](data=ProductStatsResponse(**service.product_stats(_store(request))))


@router.get("/product/{product_id}", response_model=Envelope[ProductResponse])
def get_product(request: Request, product_id: str) -> Envelope[ProductResponse]:
    product = service.get_product(_store(request), product_id)
    return Envelope[ProductResponse](data=ProductResponse.from_product(product))
