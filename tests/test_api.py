import json
from sqlalchemy.exc import OperationalError
from onboarding.services import submissions

def test_health_and_steps(client):
    assert client.get("/health").json() == {"ok": True}
    r = client.get("/api/steps")
    assert r.status_code == 200 and len(r.json()) == 8 and all(isinstance(s, str) for s in r.json())

def test_submit_then_fetch(client, jane):
    r = client.post("/api/submit", json=jane)
    assert r.status_code == 200
    assert r.json() == {"success": True, "submissionId": 1}
    js = client.get("/api/submission/1").json()
    assert js["status"] == [{"stepIndex": 1, "isComplete": True}]
    assert len(js["steps"]) == 8
    assert js["submission"]["fullName"] == "Jane Doe" and js["submission"]["software"] == []

def test_submit_missing_office(client, jane):
    del jane["office"]
    r = client.post("/api/submit", json=jane)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing office"}

def test_submit_blank_required_field(client, jane):
    r = client.post("/api/submit", json=dict(jane, jobTitle=""))
    assert r.status_code == 400 and r.json() == {"error": "Missing jobTitle"}

def test_submit_wrong_type(client, jane):
    r = client.post("/api/submit", json=dict(jane, accessoriesTotal="lots"))
    assert r.status_code == 400 and r.json() == {"error": "Invalid accessoriesTotal"}

def test_submit_single_selection_as_string(client, jane):
    sid = client.post("/api/submit", json=dict(jane, software="Adobe Pro", equipment=["Dock", "Dock"])).json()["submissionId"]
    sub = client.get(f"/api/submission/{sid}").json()["submission"]
    assert sub["software"] == ["Adobe Pro"] and sub["equipment"] == ["Dock"]

def test_submission_lookup_errors(client):
    assert client.get("/api/submission/abc").status_code == 400
    assert client.get("/api/submission/0").json() == {"error": "Invalid id"}
    r = client.get("/api/submission/42")
    assert r.status_code == 404 and r.json() == {"error": "Submission not found"}

def test_status_endpoint(client, jane):
    sid = client.post("/api/submit", json=jane).json()["submissionId"]
    assert client.get(f"/api/status/{sid}").json() == [{"stepIndex": 1, "isComplete": True}]
    assert client.get("/api/status/77").json() == []

def test_admin_lists_submissions(client, jane, admin_headers):
    client.post("/api/submit", json=jane)
    client.post("/api/submit", json=dict(jane, fullName="John Roe"))
    r = client.get("/api/admin/submissions", headers=admin_headers)
    assert r.status_code == 200
    assert [s["fullName"] for s in r.json()] == ["John Roe", "Jane Doe"]

def test_admin_requires_token(client):
    r = client.get("/api/admin/submissions")
    assert r.status_code == 401 and r.json() == {"error": "Missing token"}
    r = client.get("/api/admin/submissions", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401 and r.json() == {"error": "Invalid token"}
    r = client.post("/api/admin/update-status", json={"submissionId": 1, "stepIndex": 2, "isComplete": True})
    assert r.status_code == 401

def test_admin_login_errors_identical(client):
    wrong = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "bad"})
    unknown = client.post("/api/admin/login", json={"email": "nobody@example.com", "password": "bad"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"error": "Invalid login"}
    missing = client.post("/api/admin/login", json={"email": "admin@example.com"})
    assert missing.status_code == 400 and missing.json() == {"error": "Missing email or password"}

def test_admin_login_rate_limited(client):
    for _ in range(10):
        client.post("/api/admin/login", json={"email": "admin@example.com", "password": "bad"})
    r = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "correct-horse"})
    assert r.status_code == 429 and r.json() == {"error": "Too many login attempts"}

def test_update_status_any_order(client, jane, admin_headers):
    sid = client.post("/api/submit", json=jane).json()["submissionId"]
    r = client.post("/api/admin/update-status", headers=admin_headers,
                    json={"submissionId": sid, "stepIndex": 5, "isComplete": True})
    assert r.status_code == 200 and r.json() == {"success": True}
    assert client.get(f"/api/status/{sid}").json() == [
        {"stepIndex": 1, "isComplete": True}, {"stepIndex": 5, "isComplete": True}]
    client.post("/api/admin/update-status", headers=admin_headers,
                json={"submissionId": sid, "stepIndex": 5, "isComplete": False})
    assert client.get(f"/api/status/{sid}").json()[1] == {"stepIndex": 5, "isComplete": False}

def test_update_status_validation(client, jane, admin_headers):
    sid = client.post("/api/submit", json=jane).json()["submissionId"]
    def post(body):
        return client.post("/api/admin/update-status", headers=admin_headers, json=body)
    r = post({"submissionId": sid, "isComplete": True})
    assert r.status_code == 400 and r.json() == {"error": "Missing submissionId or stepIndex"}
    assert post({"submissionId": sid, "stepIndex": 0, "isComplete": True}).status_code == 400
    assert post({"submissionId": sid, "stepIndex": 9, "isComplete": True}).json() == {"error": "Invalid stepIndex"}
    assert post({"submissionId": 999, "stepIndex": 2, "isComplete": True}).status_code == 404

def test_store_failure_is_generic(client, admin_headers, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))
    monkeypatch.setattr(submissions, "select", broken)
    r = client.get("/api/admin/submissions", headers=admin_headers)
    assert r.status_code == 500 and r.json() == {"error": "Server error"}

def test_submit_rejects_non_finite_total(client, jane):
    body = json.dumps(jane)[:-1]
    for literal in ("1e999", "NaN", "-Infinity"):
        r = client.post("/api/submit", content=body + f', "accessoriesTotal": {literal}}}',
                        headers={"content-type": "application/json"})
        assert r.status_code == 400 and r.json() == {"error": "Invalid accessoriesTotal"}
    assert client.get("/api/status/1").json() == []
