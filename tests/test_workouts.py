"""Tests for workout CRUD, exercises, set logging and the session view."""

import uuid

import pytest

WORKOUTS = "/api/v1/workouts"
EXERCISES = "/api/v1/exercises"


@pytest.fixture
async def workout(client, trainer):
    response = await client.post(WORKOUTS, json={"name": "Push Day"}, headers=trainer[0])
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def exercise(client, trainer, workout):
    response = await client.post(
        f"{WORKOUTS}/{workout['id']}/exercises",
        json={"name": "Bench Press", "target_muscle": "Chest", "content_type": "video"},
        headers=trainer[0],
    )
    assert response.status_code == 201
    return response.json()


class TestWorkoutCrud:
    async def test_create_and_list(self, client, trainer, workout):
        assert workout["creator_id"] == trainer[1]["id"]
        listed = (await client.get(WORKOUTS, headers=trainer[0])).json()
        assert [w["id"] for w in listed] == [workout["id"]]

    async def test_update(self, client, trainer, workout):
        response = await client.patch(
            f"{WORKOUTS}/{workout['id']}", json={"image_url": "https://img.example/push.png"}, headers=trainer[0]
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Push Day"
        assert response.json()["image_url"] == "https://img.example/push.png"

    async def test_only_owner_can_delete(self, client, trainee, workout):
        response = await client.delete(f"{WORKOUTS}/{workout['id']}", headers=trainee[0])
        assert response.status_code == 403
        assert response.json()["detail"] == "You can only delete your own workouts"

    async def test_delete_cascades(self, client, trainer, workout, exercise):
        response = await client.delete(f"{WORKOUTS}/{workout['id']}", headers=trainer[0])
        assert response.status_code == 204
        assert (await client.get(f"{WORKOUTS}/{workout['id']}", headers=trainer[0])).status_code == 404
        assert (await client.get(f"{EXERCISES}/{exercise['id']}", headers=trainer[0])).status_code == 404

    async def test_missing_workout(self, client, trainer):
        response = await client.get(f"{WORKOUTS}/{uuid.uuid4()}", headers=trainer[0])
        assert response.status_code == 404


class TestExercises:
    async def test_add_and_list(self, client, trainer, workout, exercise):
        assert exercise["exercise_sets"] == []
        listed = (await client.get(f"{WORKOUTS}/{workout['id']}/exercises", headers=trainer[0])).json()
        assert [e["name"] for e in listed] == ["Bench Press"]

    async def test_only_owner_can_add(self, client, trainee, workout):
        response = await client.post(
            f"{WORKOUTS}/{workout['id']}/exercises",
            json={"name": "Dips", "target_muscle": "Triceps"},
            headers=trainee[0],
        )
        assert response.status_code == 403

    async def test_delete(self, client, trainer, trainee, exercise):
        response = await client.delete(f"{EXERCISES}/{exercise['id']}", headers=trainee[0])
        assert response.status_code == 403
        response = await client.delete(f"{EXERCISES}/{exercise['id']}", headers=trainer[0])
        assert response.status_code == 204


class TestSetLogging:
    async def test_upsert(self, client, trainee, exercise):
        url = f"{EXERCISES}/{exercise['id']}/sets/2"
        first = await client.put(url, json={"reps": 10, "weight_kg": 50}, headers=trainee[0])
        assert first.status_code == 200
        assert first.json()["set_index"] == 1

        second = await client.put(url, json={"reps": 12, "weight_kg": 55}, headers=trainee[0])
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["reps"] == 12

        sets = (await client.get(f"{EXERCISES}/{exercise['id']}", headers=trainee[0])).json()["exercise_sets"]
        assert len(sets) == 1

    async def test_set_number_must_be_positive(self, client, trainee, exercise):
        response = await client.put(
            f"{EXERCISES}/{exercise['id']}/sets/0", json={"reps": 10, "weight_kg": 50}, headers=trainee[0]
        )
        assert response.status_code == 422

    async def test_unknown_exercise(self, client, trainee):
        response = await client.put(
            f"{EXERCISES}/{uuid.uuid4()}/sets/1", json={"reps": 10, "weight_kg": 50}, headers=trainee[0]
        )
        assert response.status_code == 404


class TestSessionView:
    async def test_details_and_progress(self, client, trainer, trainee, workout, exercise):
        await client.put(
            f"{EXERCISES}/{exercise['id']}/sets/1", json={"reps": 10, "weight_kg": 40}, headers=trainee[0]
        )
        await client.put(
            f"{EXERCISES}/{exercise['id']}/sets/4", json={"reps": 6, "weight_kg": 60}, headers=trainee[0]
        )

        details = (await client.get(f"{WORKOUTS}/{workout['id']}/details", headers=trainee[0])).json()
        assert details["duration_minutes"] == 45
        assert details["description"].startswith("Workout created on ")
        bench = details["exercises"][0]
        assert bench["sets"] == 4
        assert bench["reps"] == "6-10"
        assert bench["weight_kg"] == 50
        assert [s["completed"] for s in bench["completed_sets"]] == [True, False, False, True]

        progress = (await client.get(f"{WORKOUTS}/{workout['id']}/progress", headers=trainee[0])).json()
        assert progress == {"total_sets": 4, "completed_sets": 2, "percentage": 50.0}

    async def test_progress_for_unlogged_workout(self, client, trainee, workout, exercise):
        progress = (await client.get(f"{WORKOUTS}/{workout['id']}/progress", headers=trainee[0])).json()
        assert progress == {"total_sets": 3, "completed_sets": 0, "percentage": 0.0}

    async def test_complete(self, client, trainee, workout):
        response = await client.post(f"{WORKOUTS}/{workout['id']}/complete", headers=trainee[0])
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["completed_at"]
