import pytest

from conftest import auth_headers
from promptshare.models.database_models import PromptVisibility

pytestmark = pytest.mark.anyio


async def _vote_count(client, prompt_id, headers=None):
    response = await client.get(f"/api/prompts/{prompt_id}", headers=headers)
    return response.json()["vote_count"]


async def test_vote_and_unvote(client, make_user, make_prompt):
    author = await make_user()
    voter = await make_user()
    prompt = await make_prompt(author)
    headers = auth_headers(voter)

    response = await client.post(f"/api/prompts/{prompt.id}/vote", headers=headers)
    assert response.status_code == 201
    vote = response.json()
    assert vote["user_id"] == voter.id
    assert vote["prompt_id"] == prompt.id

    details = (await client.get(f"/api/prompts/{prompt.id}", headers=headers)).json()
    assert details["vote_count"] == 1
    assert details["has_voted"] is True

    response = await client.delete(f"/api/prompts/{prompt.id}/vote", headers=headers)
    assert response.status_code == 204

    details = (await client.get(f"/api/prompts/{prompt.id}", headers=headers)).json()
    assert details["vote_count"] == 0
    assert details["has_voted"] is False


async def test_vote_requires_login(client, make_user, make_prompt):
    prompt = await make_prompt(await make_user())
    assert (await client.post(f"/api/prompts/{prompt.id}/vote")).status_code == 401
    assert (await client.delete(f"/api/prompts/{prompt.id}/vote")).status_code == 401


async def test_duplicate_vote_conflicts_and_keeps_count(client, make_user, make_prompt):
    author = await make_user()
    voter = await make_user()
    prompt = await make_prompt(author)
    headers = auth_headers(voter)

    assert (await client.post(f"/api/prompts/{prompt.id}/vote", headers=headers)).status_code == 201
    response = await client.post(f"/api/prompts/{prompt.id}/vote", headers=headers)
    assert response.status_code == 409
    assert response.json()["detail"] == "You have already voted for this prompt."

    assert await _vote_count(client, prompt.id) == 1


async def test_counts_votes_from_several_users(client, make_user, make_prompt):
    prompt = await make_prompt(await make_user())
    for _ in range(3):
        voter = await make_user()
        await client.post(f"/api/prompts/{prompt.id}/vote", headers=auth_headers(voter))

    assert await _vote_count(client, prompt.id) == 3


async def test_authors_may_vote_for_their_own_prompt(client, make_user, make_prompt):
    author = await make_user()
    prompt = await make_prompt(author, visibility=PromptVisibility.PRIVATE)
    response = await client.post(f"/api/prompts/{prompt.id}/vote", headers=auth_headers(author))
    assert response.status_code == 201


async def test_unvote_without_vote_is_not_found(client, make_user, make_prompt):
    prompt = await make_prompt(await make_user())
    voter = await make_user()

    response = await client.delete(f"/api/prompts/{prompt.id}/vote", headers=auth_headers(voter))
    assert response.status_code == 404
    assert await _vote_count(client, prompt.id) == 0


async def test_vote_on_missing_prompt(client, make_user):
    voter = await make_user()
    response = await client.post("/api/prompts/999/vote", headers=auth_headers(voter))
    assert response.status_code == 404


async def test_vote_on_deleted_prompt(client, make_user, make_prompt):
    prompt = await make_prompt(await make_user(), is_deleted=True)
    voter = await make_user()
    response = await client.post(f"/api/prompts/{prompt.id}/vote", headers=auth_headers(voter))
    assert response.status_code == 404


async def test_vote_on_someone_elses_private_prompt(client, make_user, make_prompt):
    prompt = await make_prompt(await make_user(), visibility=PromptVisibility.PRIVATE)
    voter = await make_user()
    response = await client.post(f"/api/prompts/{prompt.id}/vote", headers=auth_headers(voter))
    assert response.status_code == 404


async def test_batch_check_votes(client, make_user, make_prompt, add_votes):
    author = await make_user()
    voter = await make_user()
    voted = await make_prompt(author)
    not_voted = await make_prompt(author)
    await add_votes(voted, [voter])

    response = await client.post(
        "/api/votes/batch-check",
        json={"prompt_ids": [not_voted.id, voted.id, 4242, voted.id]},
        headers=auth_headers(voter),
    )
    assert response.status_code == 200
    assert response.json() == [
        {"prompt_id": not_voted.id, "has_voted": False},
        {"prompt_id": voted.id, "has_voted": True},
        {"prompt_id": 4242, "has_voted": False},
    ]


@pytest.mark.parametrize("prompt_ids", [[], list(range(1, 102))])
async def test_batch_check_votes_limits(client, make_user, prompt_ids):
    voter = await make_user()
    response = await client.post(
        "/api/votes/batch-check", json={"prompt_ids": prompt_ids}, headers=auth_headers(voter)
    )
    assert response.status_code == 422


async def test_batch_check_votes_requires_login(client):
    response = await client.post("/api/votes/batch-check", json={"prompt_ids": [1]})
    assert response.status_code == 401
