import pytest
from fastapi.testclient import TestClient

from direct_chat.server.database import Base, engine
from direct_chat.server.main import app


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
