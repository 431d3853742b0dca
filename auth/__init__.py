"""auth/ -- Authentication and authorization package for the POS backend.

Layer rule: auth/ imports only stdlib, third-party libraries, and core/.
It does NOT import from api/, catalog/, or sales/.
api/ imports from auth/, not the other way around.
"""
