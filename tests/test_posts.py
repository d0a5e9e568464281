POST = {
    "title": "Banga laimėjo derbį",
    "content": "<p>Rungtynių apžvalga</p>",
    "url": "https://fkbanga.lt/naujienos/derbis",
    "published_date": "2026-04-12T18:00:00Z",
    "category": "Naujienos",
}


def seed_posts(supabase, count):
    supabase.tables["banga_posts"] = [
        {"id": f"post-{i}", "title": f"Naujiena {i}", "url": f"https://fkbanga.lt/{i}",
         "published_date": f"2026-04-{i + 1:02d}T12:00:00+00:00",
         "source": "fkbanga" if i % 2 else "lff", "category": "Naujienos"}
        for i in range(count)
    ]


def test_list_posts_pages_newest_first(client, supabase):
    seed_posts(supabase, 5)

    response = client.get("/api/posts", params={"page": 1, "limit": 2})

    body = response.json()
    assert [p["id"] for p in body["posts"]] == ["post-4", "post-3"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 5, "total_pages": 3}


def test_list_posts_is_never_cached(client, supabase):
    seed_posts(supabase, 1)

    response = client.get("/api/posts")

    assert response.headers["cache-control"] == "no-cache, no-store, must-revalidate"
    assert response.headers["pragma"] == "no-cache"
    assert response.headers["expires"] == "0"


def test_list_posts_by_source(client, supabase):
    seed_posts(supabase, 4)

    body = client.get("/api/posts", params={"source": "lff"}).json()

    assert [p["id"] for p in body["posts"]] == ["post-2", "post-0"]
    assert body["pagination"]["total"] == 2


def test_create_post_assigns_id(client, supabase):
    response = client.post("/api/posts", json=POST)

    assert response.status_code == 201
    assert response.json()["id"]
    assert supabase.rows("banga_posts")[0]["title"] == POST["title"]


def test_create_post_requires_admin(client, as_fan):
    assert client.post("/api/posts", json=POST).status_code == 403


def test_update_and_delete_post(client, supabase):
    seed_posts(supabase, 1)

    updated = client.put("/api/posts/post-0", json={"title": "Pataisyta"})
    deleted = client.delete("/api/posts/post-0")
    missing = client.get("/api/posts/post-0")

    assert updated.json()["title"] == "Pataisyta"
    assert deleted.json() == {"success": True}
    assert missing.status_code == 404
