"""Product collection backends.

Both stores expose the same small document-collection interface: products
are plain dicts keyed by an opaque id. Writes are applied as they arrive
with no locking or version checks, so the last write wins.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Protocol

from sqlalchemy import Float, Integer, String, Text, create_engine, delete, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from .errors import ServiceUnavailable

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "price", "category", "description", "image")


def new_product_id() -> str:
    return uuid.uuid4().hex


class ProductStore(Protocol):
    """Interface shared by the product collection backends."""

    def initialize(self) -> None: ...

    def list(self) -> List[Dict[str, Any]]: ...

    def get(self, product_id: str) -> Optional[Dict[str, Any]]: ...

    def insert(self, product: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]: ...

    def delete(self, product_id: str) -> bool: ...


# ---------------------------
# In-memory collection
# ---------------------------
class InMemoryProductStore:
    """Dict-backed collection used when no database is configured."""

    def __init__(self) -> None:
        self._products: Dict[str, Dict[str, Any]] = {}

    def initialize(self) -> None:
        pass

    def list(self) -> List[Dict[str, Any]]:
        return [dict(p) for p in self._products.values()]

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        p = self._products.get(product_id)
        return dict(p) if p is not None else None

    def insert(self, product: Dict[str, Any]) -> Dict[str, Any]:
        self._products[product["id"]] = dict(product)
        return dict(product)

    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        p = self._products.get(product_id)
        if p is None:
            return None
        p.update(fields)
        return dict(p)

    def delete(self, product_id: str) -> bool:
        return self._products.pop(product_id, None) is not None

    def clear(self) -> None:
        self._products.clear()


# ---------------------------
# SQL-backed collection
# ---------------------------
class Base(DeclarativeBase):
    pass


class ProductRecord(Base):
    __tablename__ = "products"

    # seq keeps List in insertion order
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    price: Mapped[float] = mapped_column(Float)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "image": self.image,
        }


class SqlProductStore:
    """Product collection stored in a single SQL table through SQLAlchemy."""

    def __init__(self, database_url: str):
        self.database_url = database_url
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # every session must see the same in-memory database
            self.engine = create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        elif database_url.startswith("sqlite"):
            # routes run in the threadpool, so connections move between threads
            self.engine = create_engine(database_url, connect_args={"check_same_thread": False})
        else:
            self.engine = create_engine(database_url, pool_pre_ping=True)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def initialize(self) -> None:
        logger.info(f"Connecting to database: {mask_url(self.database_url)}")
        try:
            Base.metadata.create_all(self.engine)
        except (OperationalError, InterfaceError) as e:
            raise ServiceUnavailable(f"datastore unavailable: {e.orig}") from e
        logger.info("Product table created/verified")

    def close(self) -> None:
        self.engine.dispose()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except (OperationalError, InterfaceError) as e:
            session.rollback()
            logger.error(f"Datastore error: {e}")
            raise ServiceUnavailable(f"datastore unavailable: {e.orig}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _find(self, session: Session, product_id: str) -> Optional[ProductRecord]:
        return session.scalars(
            select(ProductRecord).where(ProductRecord.id == product_id)
        ).first()

    def list(self) -> List[Dict[str, Any]]:
        with self._session() as session:
            rows = session.scalars(select(ProductRecord).order_by(ProductRecord.seq)).all()
            return [r.to_dict() for r in rows]

    def get(self, product_id: str) -> Optional[Dict[str, Any]]:
        with self._session() as session:
            record = self._find(session, product_id)
            return record.to_dict() if record is not None else None

    def insert(self, product: Dict[str, Any]) -> Dict[str, Any]:
        with self._session() as session:
            record = ProductRecord(id=product["id"], **{k: product.get(k) for k in PRODUCT_FIELDS})
            session.add(record)
            session.flush()
            return record.to_dict()

    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._session() as session:
            record = self._find(session, product_id)
            if record is None:
                return None
            for key, value in fields.items():
                if key in PRODUCT_FIELDS:
                    setattr(record, key, value)
            session.flush()
            return record.to_dict()

    def delete(self, product_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(ProductRecord).where(ProductRecord.id == product_id))
            return result.rowcount > 0


def mask_url(url: str) -> str:
    """Return the connection string with its password hidden for logging."""
    if "@" in url and "://" in url:
        scheme, rest = url.split("://", 1)
        if "@" in rest:
            credentials, host_part = rest.rsplit("@", 1)
            user = credentials.split(":", 1)[0]
            return f"{scheme}://{user}:***@{host_part}"
    return url


def build_store(database_url: str) -> ProductStore:
    if not database_url:
        logger.info("No DATABASE_URL configured, using in-memory product collection")
        return InMemoryProductStore()
    return SqlProductStore(database_url)
