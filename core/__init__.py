"""core/ -- Configuration, error taxonomy, and the shared database engine.

Layer rule: core/ is the kernel and imports nothing from the other packages.
"""
