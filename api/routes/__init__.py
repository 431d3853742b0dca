"""api/routes/ -- APIRouter modules, mounted under /api by api/main.py."""
