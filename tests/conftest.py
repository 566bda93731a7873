"""
Pytest Configuration for ROUTEBIND Tests

Ensures proper import paths for the routebind package during testing and
provides the shared routable / database fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from routebind.config import Config, set_config  # noqa: E402
from routebind.db import db  # noqa: E402
from tests import fakes  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts from the default Config."""
    previous = set_config(Config)
    yield
    set_config(previous)


@pytest.fixture
def routables():
    """
    In-memory owners and pets.

    owner "1" (Jane) has pets "1" (Scooter) and "3" (Ghost, trashed),
    owner "2" (John) has pet "2" (Rex).
    """
    scooter = fakes.Pet("1", "Scooter", slug="scooter")
    rex = fakes.Pet("2", "Rex", slug="rex")
    ghost = fakes.Pet("3", "Ghost", slug="ghost", trashed=True)

    jane = fakes.Owner("1", "Jane", slug="jane", pets=[scooter, ghost])
    john = fakes.Owner("2", "John", slug="john", pets=[rex])

    fakes.Pet.records = [scooter, rex, ghost]
    fakes.Owner.records = [jane, john]
    fakes.LOOKUPS.clear()

    yield {"jane": jane, "john": john, "scooter": scooter, "rex": rex, "ghost": ghost}

    fakes.Pet.records = []
    fakes.Owner.records = []
    fakes.LOOKUPS.clear()


@pytest.fixture
def database():
    """
    In-memory SQLite database.

    users: 1 John Doe (john-doe), 2 Jane Roe (jane-roe)
    dogs:  1 Scooter Harvey Wooferton (user 1), 2 Rex (user 2),
           3 Ghost (user 1, soft-deleted)
    breeds: 1 lab
    """
    db.setup("sqlite://")
    db.create_all()

    with db.session() as session:
        john = fakes.User.create(session, name="John Doe", email="john.doe@example.com", slug="john-doe")
        jane = fakes.User.create(session, name="Jane Roe", email="jane.roe@example.com", slug="jane-roe")
        fakes.Dog.create(session, user_id=john.id, name="Scooter Harvey Wooferton", slug="scooter")
        fakes.Dog.create(session, user_id=jane.id, name="Rex", slug="rex")
        ghost = fakes.Dog.create(session, user_id=john.id, name="Ghost", slug="ghost")
        ghost.soft_delete(session)
        fakes.Breed.create(session, code="lab")

    yield db

    db.remove()
    db.drop_all()
