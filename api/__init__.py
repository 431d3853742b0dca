"""api/ -- FastAPI application, response models, and REST routes for the POS backend.

Layer rule: api/ is the outermost layer. It imports from auth/, catalog/,
sales/, and core/; nothing imports from api/.
"""
