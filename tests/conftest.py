"""Shared test fixtures for panelkit."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from panelkit import PanelKit, Settings
from panelkit.configuration.service import ConfigurationService
from panelkit.core.connection import DatabaseConnection
from panelkit.core.types import DataSourceCredentials, FieldType, RelationType
from panelkit.credentials.service import DATABASE_CREDENTIAL_GROUP, CredentialsService
from panelkit.persistence.base import InMemoryConfigPersistence
from panelkit.schema.introspection import RawColumn, RawEntity, RawIndex, RawRelation
from panelkit.schema.service import SchemasService

SHOP_TABLES = [
    """
    CREATE TABLE customers (
        id INTEGER PRIMARY KEY,
        name VARCHAR(100) NOT NULL,
        email VARCHAR(255),
        status VARCHAR(20) NOT NULL DEFAULT 'active'
    )
    """,
    "CREATE UNIQUE INDEX ix_customers_email ON customers (email)",
    """
    CREATE TABLE orders (
        id INTEGER PRIMARY KEY,
        customer_id INTEGER NOT NULL REFERENCES customers (id),
        total NUMERIC(10, 2),
        paid BOOLEAN,
        placed_at DATETIME
    )
    """,
    """
    CREATE TABLE profiles (
        customer_id INTEGER PRIMARY KEY REFERENCES customers (id),
        bio TEXT
    )
    """,
    "CREATE TABLE panelkit_audit (id INTEGER PRIMARY KEY, message TEXT)",
]


def create_shop_database(path: Path) -> str:
    """Create a SQLite file with a small shop schema and return its URL."""
    url = f"sqlite:///{path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for statement in SHOP_TABLES:
            conn.execute(text(statement))
    engine.dispose()
    return url


@pytest.fixture
def data_source_url(tmp_path: Path) -> str:
    """SQLite file data source.

    A file rather than :memory:, because introspection opens its own
    connection to the data source.
    """
    return create_shop_database(tmp_path / "shop.db")


@pytest.fixture
def memory_connection() -> Generator[DatabaseConnection, None, None]:
    """Connection to an in-memory SQLite database."""
    connection = DatabaseConnection("sqlite:///:memory:")
    yield connection
    connection.close()


@pytest.fixture
def configuration_service() -> ConfigurationService:
    return ConfigurationService(InMemoryConfigPersistence("app_config"))


@pytest.fixture
def credentials_service() -> CredentialsService:
    return CredentialsService(
        InMemoryConfigPersistence("credentials"),
        defaults={DATABASE_CREDENTIAL_GROUP: {"url": "sqlite:///unused.db"}},
    )


def shop_raw_entities() -> list[RawEntity]:
    """Raw introspection output for the shop schema, unsorted on purpose."""
    return [
        RawEntity(
            name="orders",
            columns=[
                RawColumn("id", FieldType.NUMBER, nullable=False, primary=True, autoincrement=True),
                RawColumn(
                    "customer_id",
                    FieldType.NUMBER,
                    nullable=False,
                    is_used_in_relation_as_owner=True,
                ),
                RawColumn("total", FieldType.NUMBER),
            ],
            relations=[
                RawRelation(
                    "customers",
                    RelationType.MANY_TO_ONE,
                    [{"name": "customer_id", "referencedColumnName": "id"}],
                )
            ],
            indices=[RawIndex("pk_orders", ["id"], unique=True, primary=True)],
        ),
        RawEntity(
            name="customers",
            columns=[
                RawColumn("id", FieldType.NUMBER, nullable=False, primary=True, autoincrement=True),
                RawColumn("name", FieldType.STRING, nullable=False, length=100),
                RawColumn("email", FieldType.STRING, length=255),
                RawColumn("status", FieldType.STRING, nullable=False, has_default=True),
                RawColumn("tier", FieldType.STRING, enum_values=["gold", "silver"]),
            ],
            relations=[
                RawRelation("orders", RelationType.ONE_TO_MANY),
                RawRelation("profiles", RelationType.ONE_TO_ONE),
            ],
            indices=[
                RawIndex("pk_customers", ["id"], unique=True, primary=True),
                RawIndex("ix_customers_email", ["email"], unique=True),
                RawIndex("ix_customers_name", ["name"]),
            ],
        ),
        RawEntity(
            name="profiles",
            columns=[
                RawColumn(
                    "customer_id",
                    FieldType.NUMBER,
                    nullable=False,
                    primary=True,
                    is_used_in_relation_as_owner=True,
                ),
                RawColumn("bio", FieldType.STRING),
            ],
            relations=[
                RawRelation(
                    "customers",
                    RelationType.ONE_TO_ONE,
                    [{"name": "customer_id", "referencedColumnName": "id"}],
                )
            ],
            indices=[RawIndex(None, ["customer_id"], unique=True, primary=True)],
        ),
        RawEntity(name="panelkit_audit", columns=[RawColumn("id", FieldType.NUMBER)]),
    ]


class CountingIntrospector:
    """Introspector stand-in that returns fixed entities and counts calls."""

    def __init__(self, entities: Callable[[], list[RawEntity]] = shop_raw_entities) -> None:
        self._entities = entities
        self.calls = 0

    def __call__(self, credentials: DataSourceCredentials) -> list[RawEntity]:
        self.calls += 1
        return self._entities()


@pytest.fixture
def raw_shop_entities() -> list[RawEntity]:
    return shop_raw_entities()


@pytest.fixture
def introspector_factory() -> type[CountingIntrospector]:
    return CountingIntrospector


@pytest.fixture
def introspector() -> CountingIntrospector:
    return CountingIntrospector()


@pytest.fixture
def schemas_service(
    configuration_service: ConfigurationService,
    credentials_service: CredentialsService,
    introspector: CountingIntrospector,
) -> SchemasService:
    return SchemasService(
        InMemoryConfigPersistence("schema"),
        credentials_service,
        configuration_service,
        introspector=introspector,
    )


@pytest.fixture
def panel(data_source_url: str) -> Generator[PanelKit, None, None]:
    """Bootstrapped panel: own tables in memory, shop data source on disk."""
    settings = Settings(
        database_url="sqlite:///:memory:",
        data_source_url=data_source_url,
        persistence_adapter="database",
        auth_secret="test-secret",
    )
    instance = PanelKit(settings)
    instance.bootstrap()
    yield instance
    instance.close()
