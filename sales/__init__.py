"""sales/ -- Transient sales carts priced against the product catalog.

Layer rule: sales/ may import from core/ and catalog/, never from api/ or auth/.
"""
