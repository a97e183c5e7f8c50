"""Shared fixtures: sample entity declarations and structlog hygiene."""
from dataclasses import dataclass
from typing import Annotated, Callable, Optional

import pytest
import structlog

from structures_cli.config import Config
from structures_cli.declarations import AutoGeneratedId, entity
from structures_cli.models import MultiTenancyType


@dataclass
class Address:
    street: str
    city: str
    state: str
    zip: str


@entity(MultiTenancyType.SHARED)
@dataclass
class Person:
    id: Annotated[Optional[str], AutoGeneratedId]
    firstName: str
    lastName: str
    age: int
    address: Address


@entity
class Product:
    sku: str
    price: float


@dataclass
class Broken:
    on_change: Callable[[str], None] # no converter for callables


@entity
@dataclass
class Order:
    id: Annotated[str, AutoGeneratedId]
    detail: Broken


@pytest.fixture(autouse=True)
def reset_structlog():
    """Loggers cached by one test must not leak into the next."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def app_config():
    return Config()


@pytest.fixture
def person_declaration():
    return Person


@pytest.fixture
def batch_declarations():
    """Three entities, the second fails two levels down."""
    return [Person, Order, Product]
