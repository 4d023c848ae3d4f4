"""
Integration tests for the Wellness Tracker API routes.

Runs the FastAPI app in-process with TestClient against a per-test
SQLite database. No server needs to be running.

Usage:
    pytest tests/test_wellness_api.py -v
"""
import csv
import io


# ============================================================================
# Auth Routes
# ============================================================================


class TestAuthRoutes:
    """Registration, login and current-user lookup."""

    def test_register_returns_token(self, client):
        response = client.post("/api/auth/register", json={"email": "Alex@Example.com", "password": "secret123"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["email"] == "alex@example.com"
        assert body["token"]
        assert body["userId"]

    def test_register_duplicate(self, client, register):
        register()
        response = client.post("/api/auth/register", json={"email": "alex@example.com", "password": "secret123"})

        assert response.status_code == 409
        assert response.json()["detail"] == "User already exists"

    def test_register_validation(self, client):
        response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "123"})
        assert response.status_code == 422

    def test_login(self, client, register):
        register()
        response = client.post("/api/auth/login", json={"email": "alex@example.com", "password": "secret123"})

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"

    def test_login_wrong_password(self, client, register):
        register()
        response = client.post("/api/auth/login", json={"email": "alex@example.com", "password": "wrong-pass"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"

    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "alex@example.com"

    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
        assert response.status_code == 401


# ============================================================================
# Metric CRUD Routes
# ============================================================================


class TestMetricRoutes:
    """Create-or-update, list, get, update and delete."""

    def test_metrics_require_auth(self, client):
        assert client.get("/api/metrics").status_code == 401
        assert client.post("/api/metrics", json={"date": "2024-03-01"}).status_code == 401

    def test_create_then_update_same_day(self, client, auth_headers):
        first = client.post(
            "/api/metrics",
            json={"date": "2024-03-01T08:00:00", "steps": 100, "sleep": 7.5, "mood": "Happy", "notes": "hi"},
            headers=auth_headers,
        )
        assert first.status_code == 200
        assert first.json()["message"] == "Metric saved successfully"
        metric = first.json()["metric"]
        assert metric["date"] == "2024-03-01"
        assert metric["sleep"] == 7.5
        assert "userId" in metric and "createdAt" in metric

        second = client.post(
            "/api/metrics",
            json={"date": "2024-03-01T22:30:00", "steps": 0},
            headers=auth_headers,
        )
        updated = second.json()["metric"]
        assert updated["id"] == metric["id"]
        assert updated["steps"] == 0
        assert updated["mood"] == "Happy"
        assert updated["notes"] == "hi"

        listing = client.get("/api/metrics", headers=auth_headers).json()
        assert listing["count"] == 1

    def test_create_validation(self, client, auth_headers):
        bad = [
            {"steps": 10},
            {"date": "2024-03-01", "steps": -1},
            {"date": "2024-03-01", "sleep": 25},
            {"date": "2024-03-01", "mood": "Angry"},
            {"date": "2024-03-01", "notes": "x" * 501},
            {"date": "2024-03-01", "steps": None},
            {"date": "2024-03-01", "steps": 10**20},
            {"date": "2024-03-01", "mood": None},
        ]
        for payload in bad:
            response = client.post("/api/metrics", json=payload, headers=auth_headers)
            assert response.status_code == 422, payload

    def test_update_validation(self, client, auth_headers):
        created = client.post("/api/metrics", json={"date": "2024-03-01", "mood": "Happy"}, headers=auth_headers)
        metric_id = created.json()["metric"]["id"]

        for payload in ({"steps": 10**20}, {"mood": None}, {"sleep": None}):
            response = client.put(f"/api/metrics/{metric_id}", json=payload, headers=auth_headers)
            assert response.status_code == 422, payload

        metric = client.get(f"/api/metrics/{metric_id}", headers=auth_headers).json()["metric"]
        assert metric["mood"] == "Happy"
        assert metric["steps"] == 0

    def test_list_newest_first_with_range(self, client, auth_headers):
        for day in ("2024-03-01", "2024-03-02", "2024-03-03"):
            client.post("/api/metrics", json={"date": day}, headers=auth_headers)

        everything = client.get("/api/metrics", headers=auth_headers).json()
        assert [m["date"] for m in everything["metrics"]] == ["2024-03-03", "2024-03-02", "2024-03-01"]

        ranged = client.get(
            "/api/metrics",
            params={"startDate": "2024-03-02", "endDate": "2024-03-03"},
            headers=auth_headers,
        ).json()
        assert ranged["count"] == 2

        one_bound = client.get("/api/metrics", params={"startDate": "2024-03-02"}, headers=auth_headers).json()
        assert one_bound["count"] == 3

    def test_get_update_delete(self, client, auth_headers):
        created = client.post("/api/metrics", json={"date": "2024-03-01", "steps": 50}, headers=auth_headers)
        metric_id = created.json()["metric"]["id"]

        fetched = client.get(f"/api/metrics/{metric_id}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["metric"]["steps"] == 50

        updated = client.put(f"/api/metrics/{metric_id}", json={"mood": "Tired", "notes": ""}, headers=auth_headers)
        assert updated.status_code == 200
        assert updated.json()["message"] == "Metric updated successfully"
        assert updated.json()["metric"]["mood"] == "Tired"
        assert updated.json()["metric"]["notes"] == ""
        assert updated.json()["metric"]["steps"] == 50

        deleted = client.delete(f"/api/metrics/{metric_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Metric deleted successfully"

        assert client.get(f"/api/metrics/{metric_id}", headers=auth_headers).status_code == 404

    def test_other_users_entries_are_not_found(self, client, register):
        alice = register("alice@example.com")
        bob = register("bob@example.com")
        metric_id = client.post("/api/metrics", json={"date": "2024-03-01"}, headers=alice).json()["metric"]["id"]

        for method in ("get", "delete"):
            response = getattr(client, method)(f"/api/metrics/{metric_id}", headers=bob)
            assert response.status_code == 404
            assert response.json()["detail"] == "Metric not found"

        assert client.put(f"/api/metrics/{metric_id}", json={"steps": 1}, headers=bob).status_code == 404
        assert client.get(f"/api/metrics/{metric_id}", headers=alice).status_code == 200


# ============================================================================
# Summary, Narrative and Export Routes
# ============================================================================


class TestSummaryRoutes:
    """Aggregate and narrative endpoints."""

    def test_empty_summary(self, client, auth_headers):
        response = client.get("/api/metrics/summary", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "totalEntries": 0,
            "avgSteps": 0,
            "avgSleep": "0.0",
            "moodDistribution": {"Happy": 0, "Neutral": 0, "Tired": 0, "Stressed": 0},
            "mostCommonMood": "Neutral",
        }

    def test_summary(self, client, auth_headers):
        for day, mood in (("2024-03-01", "Happy"), ("2024-03-02", "Happy"), ("2024-03-03", "Stressed")):
            client.post("/api/metrics", json={"date": day, "mood": mood, "steps": 3000, "sleep": 8}, headers=auth_headers)

        body = client.get("/api/metrics/summary", headers=auth_headers).json()
        assert body["totalEntries"] == 3
        assert body["avgSteps"] == 3000
        assert body["avgSleep"] == "8.0"
        assert body["moodDistribution"] == {"Happy": 2, "Neutral": 0, "Tired": 0, "Stressed": 1}
        assert body["mostCommonMood"] == "Happy"

    def test_narrative_no_data(self, client, auth_headers):
        response = client.get("/api/metrics/ai/summary", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "No data available for summary"

    def test_narrative(self, client, auth_headers):
        client.post("/api/metrics", json={"date": "2024-03-01", "mood": "Happy", "steps": 9000, "sleep": 8}, headers=auth_headers)

        response = client.get("/api/metrics/ai/summary", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["summary"].startswith("You've been in a positive mood")


class TestExportRoute:
    """CSV download."""

    def test_export_no_data(self, client, auth_headers):
        response = client.get("/api/metrics/export/csv", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "No data to export"

    def test_export_csv(self, client, auth_headers):
        client.post("/api/metrics", json={"date": "2024-03-02", "steps": 200, "mood": "Tired"}, headers=auth_headers)
        client.post("/api/metrics", json={"date": "2024-03-01", "steps": 100, "notes": "walk"}, headers=auth_headers)

        response = client.get("/api/metrics/export/csv", headers=auth_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "wellness-data.csv" in response.headers["content-disposition"]

        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["Date", "Steps", "Sleep Hours", "Mood", "Notes"]
        assert rows[1] == ["2024-03-01", "100", "0.0", "Neutral", "walk"]
        assert rows[2] == ["2024-03-02", "200", "0.0", "Tired", ""]


class TestHealth:
    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "healthy", "service": "wellness-api"}
