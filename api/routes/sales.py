"""
api/routes/sales.py -- Checkout route.

  POST /sale/checkout -- price a cart against the catalog; nothing is stored
"""

from fastapi import APIRouter, Request

from api.models import Envelope, ReceiptResponse
from catalog.store import ProductStore
from sales.schemas import CheckoutRequest
from sales.service import checkout

router = APIRouter()


@router.post("/sale/checkout", response_model=Envelope[ReceiptResponse])
def checkout_sale(request: Request, body: CheckoutRequest) -> Envelope[ReceiptResponse]:
    """Return a receipt with lines priced from the stored catalog."""
    store: ProductStore = request.app.state.product_store
    receipt = checkout(store, body)
    return Envelope[ReceiptResponse](data=ReceiptResponse(**receipt))
