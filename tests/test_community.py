"""Community feed, like and comment tests."""

import base64

from mindbloom.models.community import PostComment, PostLike

PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nfake").decode()


def create_post(client, headers, content="Hello, everyone", **extra):
    response = client.post(
        "/api/v1/community/posts", headers=headers, json={"content": content, **extra}
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_post(client, auth_headers):
    """A new post starts with zero counts and carries its author."""
    post = create_post(client, auth_headers, "First post!")
    assert post["content"] == "First post!"
    assert post["user_id"] == auth_headers.user_id
    assert post["author"]["name"] == "Alice"
    assert "email" not in post["author"]
    assert post["likes_count"] == 0
    assert post["comments_count"] == 0
    assert post["user_liked"] is False


def test_create_post_with_image_url(client, auth_headers):
    """Linked images are stored as given."""
    post = create_post(client, auth_headers, image_url="https://img.example.com/a.png")
    assert post["image_url"] == "https://img.example.com/a.png"


def test_create_post_with_inline_image(client, auth_headers):
    """An inline capture is stored as its data URL and wins over a link."""
    post = create_post(
        client,
        auth_headers,
        image_base64=PNG_DATA_URL,
        image_url="https://img.example.com/ignored.png",
    )
    assert post["image_url"] == PNG_DATA_URL


def test_create_post_rejects_bad_inline_image(client, auth_headers):
    """Inline images must be base64 image data URLs."""
    for bad in ("not a data url", "data:text/plain;base64,aGVsbG8=", "data:image/png;base64,@@@"):
        response = client.post(
            "/api/v1/community/posts",
            headers=auth_headers,
            json={"content": "pic", "image_base64": bad},
        )
        assert response.status_code == 422, bad


def test_create_post_requires_content(client, auth_headers):
    """Empty posts are rejected."""
    response = client.post("/api/v1/community/posts", headers=auth_headers, json={"content": ""})
    assert response.status_code == 422


def test_feed_is_public_and_newest_first(client, auth_headers, bob_headers):
    """Anyone can read the feed."""
    first = create_post(client, auth_headers, "one")
    second = create_post(client, bob_headers, "two")

    response = client.get("/api/v1/community/posts")
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [second["id"], first["id"]]
    assert all(p["user_liked"] is False for p in response.json())


def test_feed_pagination(client, auth_headers):
    """Limit and offset page through the feed."""
    ids = [create_post(client, auth_headers, f"post {i}")["id"] for i in range(5)]

    page = client.get("/api/v1/community/posts?limit=2&offset=1").json()
    assert [p["id"] for p in page] == [ids[3], ids[2]]

    assert client.get("/api/v1/community/posts?limit=0").status_code == 422
    assert client.get("/api/v1/community/posts?limit=101").status_code == 422


def test_like_scenario(client, auth_headers, bob_headers):
    """Alice posts, Bob likes: the count and flags are relative to the caller."""
    post = create_post(client, auth_headers, "Feeling grateful today")

    response = client.post(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    assert response.status_code == 200
    assert response.json() == {"post_id": post["id"], "liked": True, "likes_count": 1}

    bob_view = client.get("/api/v1/community/posts", headers=bob_headers).json()[0]
    assert bob_view["likes_count"] == 1
    assert bob_view["user_liked"] is True

    alice_view = client.get("/api/v1/community/posts", headers=auth_headers).json()[0]
    assert alice_view["likes_count"] == 1
    assert alice_view["user_liked"] is False

    anonymous_view = client.get("/api/v1/community/posts").json()[0]
    assert anonymous_view["likes_count"] == 1
    assert anonymous_view["user_liked"] is False


def test_like_is_idempotent(client, auth_headers, bob_headers, db):
    """Liking twice leaves a single like."""
    post = create_post(client, auth_headers)

    client.post(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    response = client.post(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    assert response.status_code == 200
    assert response.json()["likes_count"] == 1
    assert db.query(PostLike).count() == 1


def test_unlike(client, auth_headers, bob_headers):
    """Unlike removes the caller's like only."""
    post = create_post(client, auth_headers)
    client.post(f"/api/v1/community/posts/{post['id']}/like", headers=auth_headers)
    client.post(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)

    response = client.delete(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    assert response.status_code == 200
    assert response.json() == {"post_id": post["id"], "liked": False, "likes_count": 1}

    view = client.get("/api/v1/community/posts", headers=auth_headers).json()[0]
    assert view["user_liked"] is True


def test_unlike_never_liked_is_noop(client, auth_headers, bob_headers):
    """Unliking without a like succeeds and changes nothing."""
    post = create_post(client, auth_headers)
    client.post(f"/api/v1/community/posts/{post['id']}/like", headers=auth_headers)

    response = client.delete(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    assert response.status_code == 200
    assert response.json()["likes_count"] == 1


def test_like_missing_post(client, auth_headers):
    """Likes on a nonexistent post are 404."""
    response = client.post("/api/v1/community/posts/nope/like", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Post not found"


def test_update_post_owner_only(client, auth_headers, bob_headers):
    """Only the author can edit a post."""
    post = create_post(client, auth_headers, "original")

    response = client.patch(
        f"/api/v1/community/posts/{post['id']}", headers=bob_headers, json={"content": "hacked"}
    )
    assert response.status_code == 404

    response = client.patch(
        f"/api/v1/community/posts/{post['id']}", headers=auth_headers, json={"content": "edited"}
    )
    assert response.status_code == 200
    assert response.json()["content"] == "edited"


def test_delete_post_owner_only(client, auth_headers, bob_headers, db):
    """Another user's delete is a 404; the author's removes likes and comments too."""
    post = create_post(client, auth_headers)
    client.post(f"/api/v1/community/posts/{post['id']}/like", headers=bob_headers)
    client.post(
        f"/api/v1/community/posts/{post['id']}/comments",
        headers=bob_headers,
        json={"content": "Nice"},
    )

    response = client.delete(f"/api/v1/community/posts/{post['id']}", headers=bob_headers)
    assert response.status_code == 404
    assert len(client.get("/api/v1/community/posts").json()) == 1

    response = client.delete(f"/api/v1/community/posts/{post['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/community/posts").json() == []

    db.expire_all()
    assert db.query(PostLike).count() == 0
    assert db.query(PostComment).count() == 0


def test_comments(client, auth_headers, bob_headers):
    """Comments are public, oldest first, and counted on the post."""
    post = create_post(client, auth_headers)

    first = client.post(
        f"/api/v1/community/posts/{post['id']}/comments",
        headers=bob_headers,
        json={"content": "Sending hugs"},
    )
    assert first.status_code == 201
    assert first.json()["author"]["name"] == "Bob"
    client.post(
        f"/api/v1/community/posts/{post['id']}/comments",
        headers=auth_headers,
        json={"content": "Thank you"},
    )

    comments = client.get(f"/api/v1/community/posts/{post['id']}/comments").json()
    assert [c["content"] for c in comments] == ["Sending hugs", "Thank you"]

    feed = client.get("/api/v1/community/posts").json()
    assert feed[0]["comments_count"] == 2


def test_comment_on_missing_post(client, auth_headers):
    """Comments need an existing post."""
    response = client.post(
        "/api/v1/community/posts/nope/comments", headers=auth_headers, json={"content": "hi"}
    )
    assert response.status_code == 404
    assert client.get("/api/v1/community/posts/nope/comments").status_code == 404


def test_delete_comment_commenter_only(client, auth_headers, bob_headers):
    """Only the commenter can remove a comment, even on the post author's own post."""
    post = create_post(client, auth_headers)
    comment = client.post(
        f"/api/v1/community/posts/{post['id']}/comments",
        headers=bob_headers,
        json={"content": "Bob was here"},
    ).json()
    path = f"/api/v1/community/posts/{post['id']}/comments/{comment['id']}"

    response = client.delete(path, headers=auth_headers)
    assert response.status_code == 404

    response = client.delete(
        f"/api/v1/community/posts/other-post/comments/{comment['id']}", headers=bob_headers
    )
    assert response.status_code == 404

    response = client.delete(path, headers=bob_headers)
    assert response.status_code == 204
    assert client.get(f"/api/v1/community/posts/{post['id']}/comments").json() == []


def test_feed_with_invalid_token_is_anonymous(client, auth_headers):
    """A bad token on the public feed is treated as no token."""
    create_post(client, auth_headers)

    response = client.get(
        "/api/v1/community/posts", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 200
    assert response.json()[0]["user_liked"] is False
