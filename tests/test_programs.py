"""Tests for program authoring, assignment and workout ordering."""

import uuid

import pytest

PROGRAMS = "/api/v1/programs"
WORKOUTS = "/api/v1/workouts"


@pytest.fixture
async def program(client, trainer):
    response = await client.post(PROGRAMS, json={"name": "Strength Block"}, headers=trainer[0])
    assert response.status_code == 201
    return response.json()


async def test_trainee_cannot_create_program(client, trainee):
    response = await client.post(PROGRAMS, json={"name": "Mine"}, headers=trainee[0])
    assert response.status_code == 403


async def test_list_trainer_programs(client, trainer, program):
    response = await client.get(PROGRAMS, headers=trainer[0])
    assert [p["id"] for p in response.json()] == [program["id"]]


async def test_get_missing_program(client, trainer):
    response = await client.get(f"{PROGRAMS}/{uuid.uuid4()}", headers=trainer[0])
    assert response.status_code == 404


class TestAssignment:
    async def test_assign_and_list(self, client, trainer, trainee, program):
        trainee_id = trainee[1]["id"]
        response = await client.post(
            f"{PROGRAMS}/{program['id']}/trainees", json={"trainee_id": trainee_id}, headers=trainer[0]
        )
        assert response.status_code == 201

        trainees = (await client.get(f"{PROGRAMS}/{program['id']}/trainees", headers=trainer[0])).json()
        assert [t["id"] for t in trainees] == [trainee_id]
        assert trainees[0]["email"] == "tess@example.com"
        assert trainees[0]["joined_at"]

        assigned = (await client.get(f"{PROGRAMS}/assigned", headers=trainee[0])).json()
        assert [p["id"] for p in assigned] == [program["id"]]
        assert assigned[0]["joined_at"]

        clients = (await client.get(f"{PROGRAMS}/clients", headers=trainer[0])).json()
        assert [c["id"] for c in clients] == [trainee_id]
        assert [p["id"] for p in clients[0]["programs"]] == [program["id"]]

    async def test_duplicate_assignment(self, client, trainer, trainee, program):
        url = f"{PROGRAMS}/{program['id']}/trainees"
        payload = {"trainee_id": trainee[1]["id"]}
        await client.post(url, json=payload, headers=trainer[0])
        response = await client.post(url, json=payload, headers=trainer[0])
        assert response.status_code == 409
        assert response.json()["detail"] == "Trainee is already assigned to this program"

    async def test_assign_unknown_trainee(self, client, trainer, program):
        response = await client.post(
            f"{PROGRAMS}/{program['id']}/trainees", json={"trainee_id": str(uuid.uuid4())}, headers=trainer[0]
        )
        assert response.status_code == 404

    async def test_only_owner_can_assign(self, client, sign_up, trainee, program):
        other_headers, _ = await sign_up("other@example.com", name="Other Coach", user_type="trainer")
        response = await client.post(
            f"{PROGRAMS}/{program['id']}/trainees", json={"trainee_id": trainee[1]["id"]}, headers=other_headers
        )
        assert response.status_code == 403

    async def test_unassign(self, client, trainer, trainee, program):
        trainee_id = trainee[1]["id"]
        await client.post(
            f"{PROGRAMS}/{program['id']}/trainees", json={"trainee_id": trainee_id}, headers=trainer[0]
        )
        response = await client.delete(f"{PROGRAMS}/{program['id']}/trainees/{trainee_id}", headers=trainer[0])
        assert response.status_code == 204
        assert (await client.get(f"{PROGRAMS}/assigned", headers=trainee[0])).json() == []

    async def test_clients_requires_trainer(self, client, trainee):
        response = await client.get(f"{PROGRAMS}/clients", headers=trainee[0])
        assert response.status_code == 403


class TestProgramWorkouts:
    async def _workout(self, client, headers, name):
        response = await client.post(WORKOUTS, json={"name": name}, headers=headers)
        return response.json()

    async def test_ordered_with_exercises_and_sets(self, client, trainer, program):
        headers = trainer[0]
        legs = await self._workout(client, headers, "Legs")
        push = await self._workout(client, headers, "Push")
        exercise = (
            await client.post(
                f"{WORKOUTS}/{push['id']}/exercises",
                json={"name": "Bench Press", "target_muscle": "Chest"},
                headers=headers,
            )
        ).json()
        await client.put(
            f"/api/v1/exercises/{exercise['id']}/sets/1", json={"reps": 8, "weight_kg": 60}, headers=headers
        )

        url = f"{PROGRAMS}/{program['id']}/workouts"
        await client.post(url, json={"workout_id": legs["id"], "order_index": 2}, headers=headers)
        await client.post(url, json={"workout_id": push["id"], "order_index": 1}, headers=headers)

        workouts = (await client.get(url, headers=headers)).json()
        assert [w["name"] for w in workouts] == ["Push", "Legs"]
        assert workouts[0]["order_index"] == 1
        sets = workouts[0]["exercises"][0]["exercise_sets"]
        assert [(s["set_index"], s["reps"]) for s in sets] == [(0, 8)]

    async def test_duplicate_workout(self, client, trainer, program):
        workout = await self._workout(client, trainer[0], "Legs")
        url = f"{PROGRAMS}/{program['id']}/workouts"
        await client.post(url, json={"workout_id": workout["id"]}, headers=trainer[0])
        response = await client.post(url, json={"workout_id": workout["id"]}, headers=trainer[0])
        assert response.status_code == 409

    async def test_remove_workout(self, client, trainer, program):
        workout = await self._workout(client, trainer[0], "Legs")
        url = f"{PROGRAMS}/{program['id']}/workouts"
        await client.post(url, json={"workout_id": workout["id"]}, headers=trainer[0])
        response = await client.delete(f"{url}/{workout['id']}", headers=trainer[0])
        assert response.status_code == 204
        assert (await client.get(url, headers=trainer[0])).json() == []
