import os, tempfile, pytest

# point the app at a throwaway database before anything imports settings
_tmp = tempfile.mkdtemp(prefix="onboarding-tests-")
os.environ["DB_URL"] = "sqlite:///" + os.path.join(_tmp, "test.db")
os.environ["DATA_DIR"] = _tmp
os.environ["PUBLIC_DIR"] = os.path.join(_tmp, "public")
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "correct-horse"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["COOKIE_SECRET"] = "test-cookie-secret"
for key in ("BREVO_API_KEY", "NOTIFY_EMAIL", "FORM_PASSWORD_HASH", "STRICT_PROGRESSION"):
    os.environ.pop(key, None)

from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session
from onboarding.deps import engine
from onboarding.main import app
from onboarding.services import auth

JANE = {"fullName": "Jane Doe", "personalEmail": "jane@x.com", "startDate": "2024-01-01",
        "jobTitle": "Analyst", "office": "HQ"}

@pytest.fixture(autouse=True)
def fresh_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    auth.limiter.reset()
    yield

@pytest.fixture
def session():
    with Session(engine) as s:
        yield s

@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c

@pytest.fixture
def admin_headers(client):
    r = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "correct-horse"})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}

@pytest.fixture
def jane():
    return dict(JANE)
