"""catalog/ -- Product catalog: domain dataclass, repository, and flow functions.

Layer rule: catalog/ imports only stdlib, third-party libraries, and core/.
"""
