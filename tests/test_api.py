from tepi.main import app
from tepi.services.feed_state import FeedStateRegistry


async def test_health(demo_client):
    response = await demo_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_ready_reports_demo_mode(demo_client):
    response = await demo_client.get("/ready")
    assert response.status_code == 200
    assert response.json()["mode"] == "demo"


# --- Demo mode ---

async def test_demo_feed_without_token(demo_client):
    response = await demo_client.get("/api/v1/feed")
    assert response.status_code == 200
    body = response.json()
    assert body["section"] == "public"
    assert body["status"] == "ready"
    assert body["mode"] == "demo"
    assert body["loading"] is False
    assert body["error"] is None
    assert [p["id"] for p in body["posts"]] == ["1"]
    assert body["posts"][0]["_count"] == {"likes": 5, "comments": 2}


async def test_demo_like_twice_round_trips(demo_client):
    await demo_client.get("/api/v1/feed")
    liked = (await demo_client.post("/api/v1/feed/posts/1/like")).json()
    assert liked["posts"][0]["_count"]["likes"] == 6
    unliked = (await demo_client.post("/api/v1/feed/posts/1/like")).json()
    assert unliked["posts"][0]["_count"]["likes"] == 5


async def test_demo_comment_confirms(demo_client):
    response = await demo_client.post("/api/v1/feed/posts/1/comments", json={"content": "hi"})
    assert response.status_code == 200
    assert response.json()["notice"] == "Comment added! (Demo mode)"


async def test_blank_comment_is_422(demo_client):
    response = await demo_client.post("/api/v1/feed/posts/1/comments", json={"content": "   "})
    assert response.status_code == 422


async def test_demo_community_is_empty_with_call_to_action(demo_client):
    body = (await demo_client.get("/api/v1/feed", params={"section": "c-cars"})).json()
    assert body["status"] == "empty"
    assert body["posts"] == []
    assert body["empty_state"]["title"] == "No public posts yet"


async def test_demo_marketplace_filters(demo_client):
    body = (await demo_client.get("/api/v1/marketplace", params={"search": "KEYBOARD"})).json()
    assert body["categories"][0] == "all"
    assert [i["id"] for i in body["items"]] == ["m1"]
    assert body["items"][0]["price_display"] == "₩45,000"


async def test_unknown_marketplace_category_is_400(demo_client):
    response = await demo_client.get("/api/v1/marketplace", params={"category": "boats"})
    assert response.status_code == 400


# --- Live mode ---

async def test_live_requires_token(live_client):
    response = await live_client.get("/api/v1/feed")
    assert response.status_code == 401


async def test_live_rejects_bad_token(live_client):
    response = await live_client.get("/api/v1/feed", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


async def test_live_anonymous_feed(live_client, auth_headers):
    response = await live_client.get("/api/v1/feed", params={"section": "anonymous"}, headers=auth_headers())
    body = response.json()
    assert body["mode"] == "live"
    assert len(body["posts"]) == 1
    post = body["posts"][0]
    assert post["profile"] is None
    assert post["user_id"] is None
    assert len(post["comments"]) == 2
    assert all(c["profile"] is None for c in post["comments"])


async def test_live_like_and_comment(live_client, auth_headers):
    headers = auth_headers("u-carol")
    await live_client.get("/api/v1/feed", headers=headers)

    body = (await live_client.post("/api/v1/feed/posts/p-pub-old/like", headers=headers)).json()
    post = next(p for p in body["posts"] if p["id"] == "p-pub-old")
    assert post["_count"]["likes"] == 2

    body = (
        await live_client.post(
            "/api/v1/feed/posts/p-pub-old/comments", json={"content": "great shot"}, headers=headers
        )
    ).json()
    post = next(p for p in body["posts"] if p["id"] == "p-pub-old")
    assert post["_count"]["comments"] == 1
    assert post["comments"][0]["profile"]["username"] == "carol"


async def test_live_create_post(live_client, auth_headers):
    response = await live_client.post("/api/v1/feed/posts", json={"content": "hello world"}, headers=auth_headers("u-bob"))
    assert response.status_code == 201
    body = response.json()
    assert body["posts"][0]["content"] == "hello world"
    assert body["posts"][0]["profile"]["username"] == "bob"


async def test_live_viewers_have_separate_state(live_client, auth_headers):
    await live_client.get("/api/v1/feed", params={"section": "anonymous"}, headers=auth_headers("u-alice"))
    body = (await live_client.post("/api/v1/feed/retry", headers=auth_headers("u-bob"))).json()
    assert body["section"] == "public"
    assert len(body["posts"]) == 3


async def test_live_feed_states_are_bounded(live_client, auth_headers):
    registry = FeedStateRegistry(app.state.provider, max_viewers=3)
    app.state.feed_states = registry
    for n in range(10):
        response = await live_client.get("/api/v1/feed", headers=auth_headers(f"u-viewer-{n}"))
        assert response.status_code == 200
    assert len(registry) == 3
    assert "u-viewer-9" in registry
    assert "u-viewer-0" not in registry
