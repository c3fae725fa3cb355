import pytest


@pytest.fixture
def create_blog(client):
    def _create(author, **overrides):
        data = {
            "title": "How I survived finals",
            "content": "Sleep, water, past papers.",
            "category": "Exam Preparation",
            "tags": ["exams", "tips"],
            **overrides,
        }
        response = client.post("/blogs", data=data, headers=author.headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


class TestBlogCrud:
    def test_create(self, make_user, create_blog):
        author = make_user()
        blog = create_blog(author)
        assert blog["author"]["id"] == author.id
        assert blog["tags"] == ["exams", "tips"]
        assert blog["likes"] == []
        assert blog["comments"] == []
        assert blog["views"] == 0

    def test_comma_separated_tags(self, make_user, create_blog):
        blog = create_blog(make_user(), tags="python, fastapi ,python")
        assert blog["tags"] == ["python", "fastapi"]

    def test_unknown_category_rejected(self, client, make_user):
        author = make_user()
        response = client.post(
            "/blogs",
            data={"title": "t", "content": "c", "category": "Gossip"},
            headers=author.headers,
        )
        assert response.status_code == 400

    def test_every_fetch_counts_a_view(self, client, make_user, create_blog):
        blog = create_blog(make_user())
        assert client.get(f"/blogs/{blog['id']}").json()["views"] == 1
        assert client.get(f"/blogs/{blog['id']}").json()["views"] == 2
        assert client.get(f"/blogs/{blog['id']}").json()["views"] == 3

    def test_update_and_delete_guarded(self, client, make_user, create_blog):
        author, stranger = make_user(), make_user()
        blog = create_blog(author)

        assert client.put(f"/blogs/{blog['id']}", data={"title": "x"}, headers=stranger.headers).status_code == 401
        response = client.put(f"/blogs/{blog['id']}", data={"title": "Updated"}, headers=author.headers)
        assert response.status_code == 200
        assert response.json()["title"] == "Updated"

        assert client.delete(f"/blogs/{blog['id']}", headers=stranger.headers).status_code == 401
        assert client.delete(f"/blogs/{blog['id']}", headers=author.headers).status_code == 200
        assert client.get(f"/blogs/{blog['id']}").status_code == 404

    def test_delete_blog_with_comments_and_likes(self, client, make_user, create_blog):
        author, reader = make_user(), make_user()
        blog = create_blog(author)
        client.put(f"/blogs/{blog['id']}/like", headers=reader.headers)
        client.post(f"/blogs/{blog['id']}/comment", json={"comment": "Nice"}, headers=reader.headers)

        assert client.delete(f"/blogs/{blog['id']}", headers=author.headers).status_code == 200

    def test_listing_filters(self, client, make_user, create_blog):
        author = make_user()
        create_blog(author, title="Django tips", category="Technology", tags=["web"])
        create_blog(author, title="Internship story", category="Experiences", tags=["career"])
        create_blog(author, title="Notes", content="All about Django ORM", category="Study Tips", tags=["orm"])

        tech = client.get("/blogs", params={"category": "Technology"}).json()
        assert [b["title"] for b in tech["blogs"]] == ["Django tips"]

        # unknown category is ignored rather than rejected
        assert client.get("/blogs", params={"category": "Nope"}).json()["total"] == 3

        found = client.get("/blogs", params={"search": "django"}).json()
        assert {b["title"] for b in found["blogs"]} == {"Django tips", "Notes"}

        by_tag = client.get("/blogs", params={"search": "career"}).json()
        assert [b["title"] for b in by_tag["blogs"]] == ["Internship story"]

    def test_tag_search_matches_single_tags_only(self, client, make_user, create_blog):
        author = make_user()
        create_blog(author, title="Untagged", tags=[])
        create_blog(author, title="Two tags", tags=["alpha", "beta"])

        def total(term):
            return client.get("/blogs", params={"search": term}).json()["total"]

        assert total("[") == 0
        assert total('", "') == 0
        assert total("alph") == 1

    def test_tag_search_with_non_ascii(self, client, make_user, create_blog):
        author = make_user()
        create_blog(author, title="Coffee", tags=["café"])
        found = client.get("/blogs", params={"search": "café"}).json()
        assert [b["title"] for b in found["blogs"]] == ["Coffee"]

    def test_user_blogs(self, client, make_user, create_blog):
        author, other = make_user(), make_user()
        create_blog(author, title="Mine")
        create_blog(other, title="Theirs")
        assert [b["title"] for b in client.get(f"/blogs/user/{author.id}").json()] == ["Mine"]


class TestLikes:
    def test_toggle_twice_restores_unliked_state(self, client, make_user, create_blog):
        author, reader = make_user(), make_user()
        blog = create_blog(author)

        liked = client.put(f"/blogs/{blog['id']}/like", headers=reader.headers).json()
        assert liked["likes"] == [reader.id]

        unliked = client.put(f"/blogs/{blog['id']}/like", headers=reader.headers).json()
        assert unliked["likes"] == []

    def test_likes_from_different_users(self, client, make_user, create_blog):
        author, a, b = make_user(), make_user(), make_user()
        blog = create_blog(author)
        client.put(f"/blogs/{blog['id']}/like", headers=a.headers)
        body = client.put(f"/blogs/{blog['id']}/like", headers=b.headers).json()
        assert sorted(body["likes"]) == sorted([a.id, b.id])

    def test_like_missing_blog(self, client, make_user):
        assert client.put("/blogs/555/like", headers=make_user().headers).status_code == 404


class TestComments:
    def test_add_comment(self, client, make_user, create_blog):
        author, reader = make_user(), make_user()
        blog = create_blog(author)
        response = client.post(f"/blogs/{blog['id']}/comment", json={"comment": "Great post"}, headers=reader.headers)
        assert response.status_code == 201
        comments = response.json()["comments"]
        assert len(comments) == 1
        assert comments[0]["comment"] == "Great post"
        assert comments[0]["user"]["id"] == reader.id

    def test_empty_comment_rejected(self, client, make_user, create_blog):
        blog = create_blog(make_user())
        response = client.post(f"/blogs/{blog['id']}/comment", json={"comment": "  "}, headers=make_user().headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("deleter", ["commenter", "blog_author", "admin"])
    def test_allowed_deleters_remove_exactly_that_comment(self, client, make_user, create_blog, deleter):
        author, commenter, admin = make_user(), make_user(), make_user(role="admin")
        blog = create_blog(author)
        client.post(f"/blogs/{blog['id']}/comment", json={"comment": "first"}, headers=commenter.headers)
        body = client.post(f"/blogs/{blog['id']}/comment", json={"comment": "second"}, headers=commenter.headers).json()
        first_id, second_id = [c["id"] for c in body["comments"]]

        actor = {"commenter": commenter, "blog_author": author, "admin": admin}[deleter]
        response = client.delete(f"/blogs/{blog['id']}/comment/{first_id}", headers=actor.headers)
        assert response.status_code == 200
        assert [c["id"] for c in response.json()["comments"]] == [second_id]

    def test_other_user_cannot_delete_comment(self, client, make_user, create_blog):
        author, commenter, stranger = make_user(), make_user(), make_user()
        blog = create_blog(author)
        body = client.post(f"/blogs/{blog['id']}/comment", json={"comment": "hi"}, headers=commenter.headers).json()
        comment_id = body["comments"][0]["id"]

        response = client.delete(f"/blogs/{blog['id']}/comment/{comment_id}", headers=stranger.headers)
        assert response.status_code == 401
        assert len(client.get(f"/blogs/{blog['id']}").json()["comments"]) == 1

    def test_missing_comment_is_404(self, client, make_user, create_blog):
        author = make_user()
        blog = create_blog(author)
        response = client.delete(f"/blogs/{blog['id']}/comment/999", headers=author.headers)
        assert response.status_code == 404
