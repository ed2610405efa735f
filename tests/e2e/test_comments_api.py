"""End-to-end tests for comment endpoints."""

from uuid import uuid4

from inkwell.domain.value import CommentStatus, UserId
from tests.factories import auth_cookie, make_comment, make_post


class TestCommentCreation:
    """Creating comments over HTTP."""

    def test_create_requires_auth(self, client, seed):
        post = seed.post(make_post())

        response = client.post(
            "/comments",
            json={"blog_post_id": str(post.id), "content": "A valid comment body"},
        )

        assert response.status_code == 401

    def test_create_comment(self, client, seed):
        """Authenticated users create pending comments as themselves."""
        # Arrange
        post = seed.post(make_post())
        user_id = str(uuid4())

        # Act
        response = client.post(
            "/comments",
            json={"blog_post_id": str(post.id), "content": "A valid comment body"},
            cookies=auth_cookie(user_id=user_id),
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["comment"]["status"] == "pending"
        assert body["comment"]["author_id"] == user_id
        assert body["spam_score"] is None

    def test_short_comment_is_bad_request(self, client, seed):
        post = seed.post(make_post())

        response = client.post(
            "/comments",
            json={"blog_post_id": str(post.id), "content": "short"},
            cookies=auth_cookie(),
        )

        assert response.status_code == 400
        assert "at least 10" in response.json()["detail"]

    def test_unknown_post_is_not_found(self, client):
        response = client.post(
            "/comments",
            json={"blog_post_id": str(uuid4()), "content": "A valid comment body"},
            cookies=auth_cookie(),
        )

        assert response.status_code == 404

    def test_spam_detection_endpoint(self, client, seed):
        post = seed.post(make_post())

        response = client.post(
            "/comments/with-spam-detection",
            json={
                "blog_post_id": str(post.id),
                "content": "<i>Buy now</i> http://a.example http://b.example",
            },
            cookies=auth_cookie(),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["spam_score"] == 0.8
        assert body["comment"]["content"] == "Buy now http://a.example http://b.example"
        assert body["comment"]["status"] == "pending"


class TestModeration:
    """Moderating comments over HTTP."""

    def test_approve_requires_moderator(self, client, seed):
        post = seed.post(make_post())
        comment = seed.comment(make_comment(post.id))

        response = client.put(
            f"/comments/{comment.id}/approve", cookies=auth_cookie("user")
        )

        assert response.status_code == 403

    def test_approve_twice(self, client, seed):
        """Approving an approved comment succeeds and changes nothing."""
        post = seed.post(make_post())
        comment = seed.comment(make_comment(post.id))
        cookies = auth_cookie("moderator")

        first = client.put(f"/comments/{comment.id}/approve", cookies=cookies)
        second = client.put(f"/comments/{comment.id}/approve", cookies=cookies)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["status"] == "approved"

    def test_bulk_approve_partial_failure(self, client, seed):
        # Arrange
        post = seed.post(make_post())
        good = seed.comment(make_comment(post.id))
        missing = str(uuid4())

        # Act
        response = client.post(
            "/comments/bulk-approve",
            json={"comment_ids": [str(good.id), missing, "not-a-uuid"]},
            cookies=auth_cookie("moderator"),
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [c["comment_id"] for c in body["succeeded"]] == [str(good.id)]
        assert {f["id"] for f in body["failed"]} == {missing, "not-a-uuid"}

    def test_bulk_over_cap_is_bad_request(self, client):
        response = client.post(
            "/comments/bulk-reject",
            json={"comment_ids": [str(uuid4()) for _ in range(51)]},
            cookies=auth_cookie("admin"),
        )

        assert response.status_code == 400

    def test_pending_queue(self, client, seed):
        post = seed.post(make_post())
        pending = seed.comment(make_comment(post.id))
        seed.comment(make_comment(post.id, status=CommentStatus.APPROVED))

        response = client.get("/comments/pending", cookies=auth_cookie("moderator"))

        assert response.status_code == 200
        body = response.json()
        assert [c["comment_id"] for c in body["data"]] == [str(pending.id)]
        assert body["pagination"]["total"] == 1


class TestReadAndEdit:
    """Reading, editing and deleting comments over HTTP."""

    def test_public_threads(self, client, seed):
        post = seed.post(make_post())
        top = seed.comment(make_comment(post.id, status=CommentStatus.APPROVED))
        seed.comment(
            make_comment(post.id, status=CommentStatus.APPROVED, parent_id=top.id)
        )
        seed.comment(make_comment(post.id))

        response = client.get(f"/comments/post/{post.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["total_comments"] == 2
        assert len(body["data"]) == 1
        assert body["data"][0]["replies_count"] == 1

    def test_get_malformed_id(self, client):
        response = client.get("/comments/not-a-uuid")

        assert response.status_code == 400

    def test_author_edits_pending_comment(self, client, seed):
        post = seed.post(make_post())
        author = UserId(uuid4())
        author_id = str(author)
        comment = seed.comment(make_comment(post.id))
        own = seed.comment(make_comment(post.id, author_id=author))

        forbidden = client.put(
            f"/comments/{comment.id}",
            json={"content": "Trying to edit someone else"},
            cookies=auth_cookie(user_id=author_id),
        )
        allowed = client.put(
            f"/comments/{own.id}",
            json={"content": "Editing my own comment"},
            cookies=auth_cookie(user_id=author_id),
        )

        assert forbidden.status_code == 403
        assert allowed.status_code == 200
        assert allowed.json()["content"] == "Editing my own comment"

    def test_hard_delete_requires_admin(self, client, seed):
        post = seed.post(make_post())
        comment = seed.comment(make_comment(post.id))

        as_moderator = client.delete(
            f"/comments/{comment.id}",
            params={"hard": "true"},
            cookies=auth_cookie("moderator"),
        )
        as_admin = client.delete(
            f"/comments/{comment.id}",
            params={"hard": "true"},
            cookies=auth_cookie("admin"),
        )

        assert as_moderator.status_code == 403
        assert as_admin.status_code == 200
        assert client.get(f"/comments/{comment.id}").status_code == 404

    def test_author_listing_is_private(self, client):
        author_id = str(uuid4())

        other = client.get(f"/comments/author/{author_id}", cookies=auth_cookie())
        own = client.get(
            f"/comments/author/{author_id}", cookies=auth_cookie(user_id=author_id)
        )

        assert other.status_code == 403
        assert own.status_code == 200


class TestAdministration:
    """Statistics and maintenance endpoints."""

    def test_stats(self, client, seed):
        post = seed.post(make_post())
        seed.comment(make_comment(post.id, status=CommentStatus.APPROVED))

        response = client.get("/comments/stats", cookies=auth_cookie("moderator"))

        assert response.status_code == 200
        body = response.json()
        assert body["stats"]["approved"] == 1
        assert body["engagement"]["average_comments_per_post"] == 1.0
        assert body["top_posts"][0]["blog_post_id"] == str(post.id)

    def test_cleanup_requires_admin(self, client):
        response = client.post("/comments/cleanup", cookies=auth_cookie("moderator"))

        assert response.status_code == 403

    def test_cleanup(self, client):
        response = client.post(
            "/comments/cleanup", json={"days_old": 7}, cookies=auth_cookie("admin")
        )

        assert response.status_code == 200
        assert response.json() == {"deactivated": 0}
