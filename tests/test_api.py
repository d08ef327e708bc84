from unittest.mock import AsyncMock

from app.services.error_handling import StorageError

def interaction(action="like", user_id="user-a", target_user_id="user-b", **extra):
    body = {
        "userId": user_id,
        "targetUserId": target_user_id,
        "action": action,
        "timestamp": "2026-05-01T19:00:00Z"
    }
    body.update(extra)
    return {"interaction": body}

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_record_interaction(client, storage):
    response = client.post("/api/v1/interactions", json=interaction(contextData={"source": "feed"}))

    assert response.status_code == 200
    assert response.json() == {"success": True}
    events = storage.interactions.events
    assert len(events) == 1
    assert events[0].context_data == {"source": "feed"}

def test_record_unknown_action_is_rejected(client, storage):
    response = client.post("/api/v1/interactions", json=interaction(action="wink"))

    assert response.status_code == 422
    assert "action" in response.json()["detail"]["error"]
    assert storage.interactions.events == []

def test_record_missing_fields_is_rejected(client, storage):
    response = client.post("/api/v1/interactions", json={"interaction": {"userId": "user-a"}})

    assert response.status_code == 422
    assert storage.interactions.events == []

def test_match_creates_success_pattern(client, storage, user_a, user_b):
    storage.profiles.put(user_a)
    storage.profiles.put(user_b)

    response = client.post("/api/v1/interactions", json=interaction(action="match"))

    assert response.status_code == 200
    assert len(storage.success_patterns.patterns) == 1

def test_message_to_missing_profile_still_succeeds(client, storage, user_a):
    storage.profiles.put(user_a)

    response = client.post("/api/v1/interactions", json=interaction(action="message", target_user_id="ghost"))

    assert response.status_code == 200
    assert len(storage.interactions.events) == 1
    assert storage.success_patterns.patterns == []

def test_record_storage_failure(client, storage):
    storage.interactions.add = AsyncMock(side_effect=StorageError("db down"))

    response = client.post("/api/v1/interactions", json=interaction())

    assert response.status_code == 500
    assert "db down" in response.json()["detail"]

def test_preferences_for_new_user(client):
    response = client.get("/api/v1/users/nobody/preferences")

    assert response.status_code == 200
    data = response.json()
    assert data["preferred_age_range"] == [22, 35]
    assert data["sample_size"] == 0
    assert data["active_time_patterns"] == {"morning": 0, "afternoon": 0, "evening": 0}
    assert data["personality_preferences"] is None
    assert data["successful_interest_patterns"] is None
    assert data["attachment_style_preferences"] == {}

def test_preferences_after_match(client, storage, user_a, user_b):
    storage.profiles.put(user_a)
    storage.profiles.put(user_b)
    client.post("/api/v1/interactions", json=interaction(action="match"))

    response = client.post("/api/v1/preferences", json={"userId": "user-a"})

    assert response.status_code == 200
    data = response.json()
    assert data["sample_size"] == 1
    assert data["preferred_age_range"] == [23, 27]
    assert data["active_time_patterns"]["evening"] == 1
    assert data["successful_interest_patterns"]["preferred_overlap"] == 0.5

def test_preferences_storage_failure(client, storage):
    storage.interactions.list_recent = AsyncMock(side_effect=StorageError("db down"))

    response = client.get("/api/v1/users/user-a/preferences")

    assert response.status_code == 500

def test_compatibility(client, storage, user_a, user_b):
    storage.profiles.put(user_a)
    storage.profiles.put(user_b)

    response = client.post("/api/v1/compatibility", json={"userId": "user-a", "targetUserId": "user-b"})

    assert response.status_code == 200
    data = response.json()
    assert data["metrics"]["age_difference"] == 2
    assert data["metrics"]["interest_overlap"] == 0.5
    assert data["score"]["attachment_score"] is None
    assert 0 <= data["score"]["match_score"] <= 100

def test_compatibility_missing_profile(client, storage, user_a):
    storage.profiles.put(user_a)

    response = client.post("/api/v1/compatibility", json={"userId": "user-a", "targetUserId": "ghost"})

    assert response.status_code == 404
    assert "ghost" in response.json()["detail"]

def test_rank_matches(client, storage, user_a, user_b):
    storage.profiles.put(user_a)
    storage.profiles.put(user_b)

    response = client.post(
        "/api/v1/users/user-a/matches/rank",
        json={"candidateIds": ["user-b", "ghost", "user-a"]}
    )

    assert response.status_code == 200
    matches = response.json()
    assert [m["user_id"] for m in matches] == ["user-b"]
    assert 1 <= matches[0]["match_score"] <= 99
    assert matches[0]["ml_enhanced"] is True

def test_rank_matches_unknown_user(client):
    response = client.post("/api/v1/users/nobody/matches/rank", json={"candidateIds": ["user-b"]})
    assert response.status_code == 404
