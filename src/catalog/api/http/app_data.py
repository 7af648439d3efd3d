import threading
from dataclasses import dataclass, field

from src.catalog.core.services import DbSessionService
from src.catalog.entities.service.product import Product


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    repository_backend: str = "sql"
    product_store: dict[int, Product] = field(default_factory=dict)
    # guards product_store across concurrent requests
    product_store_lock: threading.Lock = field(default_factory=threading.Lock)
