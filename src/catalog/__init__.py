"""Product catalog service.

Layered CRUD over a single Product entity: repositories hide storage,
services carry business operations, and the HTTP API and CLI consume them.
"""

__version__ = "0.1.0"
