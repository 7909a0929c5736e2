"""Progress tests: listing levels and the keep-the-best-score rule."""

import pytest
from sqlalchemy import text

from game_api.services import progress as progress_service
from game_api.services.progress import MSG_KEPT, MSG_NEW, MSG_UPDATED, save_best_score


async def save(client, user_id, level_number, stars):
    return await client.post(
        "/save-progress",
        json={"user_id": user_id, "level_number": level_number, "stars": stars},
    )


class TestGetProgress:
    async def test_empty_for_new_user(self, client, player):
        response = await client.get(f"/progress/{player['id']}")

        assert response.status_code == 200
        assert response.json() == []

    async def test_empty_for_unknown_user(self, client):
        response = await client.get("/progress/777")

        assert response.status_code == 200
        assert response.json() == []

    async def test_single_level(self, client, player):
        await save(client, player["id"], 1, 3)

        response = await client.get(f"/progress/{player['id']}")

        assert response.json() == [{"level_number": 1, "stars": 3, "completed": True}]

    async def test_insertion_order(self, client, player):
        for level in (3, 1, 2):
            await save(client, player["id"], level, level)

        response = await client.get(f"/progress/{player['id']}")

        assert [row["level_number"] for row in response.json()] == [3, 1, 2]

    async def test_non_numeric_id(self, client):
        response = await client.get("/progress/abc")

        assert response.status_code == 400


    async def test_id_beyond_64_bits(self, client):
        response = await client.get(f"/progress/{2**70}")

        assert response.status_code == 400
        assert "error" in response.json()

    async def test_store_error_message_is_returned(self, client, session_factory):
        async with session_factory() as session:
            await session.execute(text("DROP TABLE user_progress"))
            await session.commit()

        response = await client.get("/progress/1")

        assert response.status_code == 400
        assert response.json() == {"error": "no such table: user_progress"}


class TestSaveProgress:
    async def test_scores_never_regress(self, client, player):
        """Stars [2, 5, 3] leave 5 stored, with one message per outcome."""
        messages = []
        for stars in (2, 5, 3):
            response = await save(client, player["id"], 1, stars)
            assert response.status_code == 200
            messages.append(response.json()["message"])

        assert messages == [
            "New progress saved successfully",
            "Progress updated with higher score",
            "Existing score is higher, no changes made",
        ]
        progress = await client.get(f"/progress/{player['id']}")
        assert progress.json() == [{"level_number": 1, "stars": 5, "completed": True}]

    async def test_equal_score_is_not_an_update(self, client, player):
        await save(client, player["id"], 1, 4)

        response = await save(client, player["id"], 1, 4)

        assert response.json() == {"message": "Existing score is higher, no changes made"}

    async def test_levels_are_independent(self, client, player):
        await save(client, player["id"], 1, 5)

        response = await save(client, player["id"], 2, 1)

        assert response.json() == {"message": "New progress saved successfully"}

    async def test_zero_stars_first_save(self, client, player):
        await save(client, player["id"], 1, 0)

        progress = await client.get(f"/progress/{player['id']}")

        assert progress.json() == [{"level_number": 1, "stars": 0, "completed": True}]

    async def test_unknown_user_rejected(self, client):
        response = await save(client, 999, 1, 3)

        assert response.status_code == 400
        assert "FOREIGN KEY" in response.json()["error"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"level_number": 1, "stars": 3},
            {"user_id": 1, "stars": 3},
            {"user_id": 1, "level_number": 1},
            {"user_id": 1, "level_number": 1, "stars": "lots"},
            {"user_id": 1, "level_number": 1, "stars": 2**70},
            {"user_id": 2**70, "level_number": 1, "stars": 3},
            {"user_id": 1, "level_number": -(2**70), "stars": 3},
        ],
    )
    async def test_malformed_body(self, client, payload):
        response = await client.post("/save-progress", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()


class TestSaveBestScoreInterleaving:
    """Writes that interleave with another save for the same level."""

    async def test_stale_read_cannot_lower_score(self, session_factory, player, monkeypatch):
        async with session_factory() as session:
            assert await save_best_score(session, player["id"], 1, 5) == MSG_NEW

        async def stale_read(db, user_id, level_number):
            # What a request that read before the 5-star save would have seen
            return type("Row", (), {"stars": 1, "completed": True})()

        monkeypatch.setattr(progress_service, "get_level_progress", stale_read)
        async with session_factory() as session:
            assert await save_best_score(session, player["id"], 1, 3) == MSG_KEPT

        monkeypatch.undo()
        async with session_factory() as session:
            row = await progress_service.get_level_progress(session, player["id"], 1)
        assert row.stars == 5

    async def test_lost_insert_race_becomes_update(self, session_factory, player, monkeypatch):
        async with session_factory() as session:
            await save_best_score(session, player["id"], 1, 2)

        real_read = progress_service.get_level_progress
        calls = []

        async def miss_first_read(db, user_id, level_number):
            calls.append(level_number)
            if len(calls) == 1:
                return None
            return await real_read(db, user_id, level_number)

        monkeypatch.setattr(progress_service, "get_level_progress", miss_first_read)
        async with session_factory() as session:
            assert await save_best_score(session, player["id"], 1, 4) == MSG_UPDATED

        monkeypatch.undo()
        async with session_factory() as session:
            row = await progress_service.get_level_progress(session, player["id"], 1)
        assert row.stars == 4
