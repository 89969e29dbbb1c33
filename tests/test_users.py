"""Tests for profiles, follows and body metrics."""

import uuid
from datetime import datetime, timedelta, timezone

USERS = "/api/v1/users"


class TestProfile:
    async def test_get_me(self, client, trainee):
        headers, user = trainee
        response = await client.get(f"{USERS}/me", headers=headers)
        assert response.status_code == 200
        assert response.json()["email"] == "tess@example.com"

    async def test_partial_update(self, client, trainee):
        headers, _ = trainee
        response = await client.patch(f"{USERS}/me", json={"bio": "Squats daily", "age": 29}, headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["bio"] == "Squats daily"
        assert body["age"] == 29
        assert body["name"] == "Tess Trainee"

    async def test_get_other_user(self, client, trainee, trainer):
        response = await client.get(f"{USERS}/{trainer[1]['id']}", headers=trainee[0])
        assert response.status_code == 200
        assert response.json()["user_type"] == "trainer"

    async def test_unknown_user(self, client, trainee):
        response = await client.get(f"{USERS}/{uuid.uuid4()}", headers=trainee[0])
        assert response.status_code == 404


class TestFollow:
    async def test_toggle_updates_counters(self, client, trainee, trainer):
        headers, me = trainee
        target = trainer[1]["id"]

        response = await client.post(f"{USERS}/{target}/follow", headers=headers)
        assert response.json() == {"following": True}
        assert (await client.get(f"{USERS}/{target}", headers=headers)).json()["follower_count"] == 1
        assert (await client.get(f"{USERS}/me", headers=headers)).json()["following_count"] == 1

        followers = (await client.get(f"{USERS}/{target}/followers", headers=headers)).json()
        assert [f["id"] for f in followers] == [me["id"]]
        following = (await client.get(f"{USERS}/{me['id']}/following", headers=headers)).json()
        assert [f["id"] for f in following] == [target]

        response = await client.post(f"{USERS}/{target}/follow", headers=headers)
        assert response.json() == {"following": False}
        assert (await client.get(f"{USERS}/{target}", headers=headers)).json()["follower_count"] == 0
        assert (await client.get(f"{USERS}/me", headers=headers)).json()["following_count"] == 0
        assert (await client.get(f"{USERS}/{target}/followers", headers=headers)).json() == []

    async def test_cannot_follow_self(self, client, trainee):
        headers, me = trainee
        response = await client.post(f"{USERS}/{me['id']}/follow", headers=headers)
        assert response.status_code == 400

    async def test_follow_unknown_user(self, client, trainee):
        response = await client.post(f"{USERS}/{uuid.uuid4()}/follow", headers=trainee[0])
        assert response.status_code == 404


class TestMetrics:
    async def test_requires_a_measurement(self, client, trainee):
        response = await client.post(f"{USERS}/me/metrics", json={}, headers=trainee[0])
        assert response.status_code == 422

    async def test_list_newest_first_and_stats(self, client, trainee):
        headers, _ = trainee
        now = datetime.now(timezone.utc)
        for entry in (
            {"weight_kg": 90, "date_recorded": (now - timedelta(days=45)).isoformat()},
            {"weight_kg": 84, "height_cm": 180, "date_recorded": (now - timedelta(days=1)).isoformat()},
        ):
            response = await client.post(f"{USERS}/me/metrics", json=entry, headers=headers)
            assert response.status_code == 201

        metrics = (await client.get(f"{USERS}/me/metrics", headers=headers)).json()
        assert [m["weight_kg"] for m in metrics] == [84, 90]

        stats = (await client.get(f"{USERS}/me/metrics/stats", headers=headers)).json()
        assert stats["current_weight"] == 84
        assert stats["current_height"] == 180
        assert stats["weight_change_this_month"] == -6
        assert stats["bmi"] == 25.9
        assert stats["total_entries"] == 2

    async def test_stats_without_entries(self, client, trainee):
        stats = (await client.get(f"{USERS}/me/metrics/stats", headers=trainee[0])).json()
        assert stats["current_weight"] is None
        assert stats["total_entries"] == 0
