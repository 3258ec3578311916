from uuid import UUID, uuid4

from sqlalchemy import func, select

from tests.base import ApiTestCase

from newsdesk.models.news import News


class TopicApiTests(ApiTestCase):
    def _create_topic(self, name: str) -> dict:
        response = self.client.post("/api/v1/topics", json={"name": name})
        self.assertEqual(response.status_code, 201)
        return response.json()["data"]

    def test_create_returns_envelope(self):
        response = self.client.post("/api/v1/topics", json={"name": "Tech News", "slug": "ignored"})
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["code"], 201)
        self.assertEqual(body["status"], "success")
        self.assertEqual(body["data"]["slug"], "tech-news")
        UUID(body["data"]["id"])

    def test_blank_name_is_rejected(self):
        response = self.client.post("/api/v1/topics", json={"name": "   "})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["status"], "error")
        self.assertIn("name", body["message"])

    def test_malformed_id_is_400_and_unknown_id_is_404(self):
        bad = self.client.get("/api/v1/topics/not-a-uuid")
        self.assertEqual(bad.status_code, 400)
        self.assertIn("not-a-uuid", bad.json()["message"])

        missing = self.client.get(f"/api/v1/topics/{uuid4()}")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json()["message"], "Topic not found")

    def test_list_with_search(self):
        self._create_topic("Technology")
        self._create_topic("Travel")
        response = self.client.get("/api/v1/topics", params={"search": "tech"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["name"] for t in response.json()["data"]], ["Technology"])

    def test_put_and_patch_recompute_slug(self):
        topic = self._create_topic("First")
        put = self.client.put(f"/api/v1/topics/{topic['id']}", json={"name": "Second Name"})
        self.assertEqual(put.status_code, 200)
        self.assertEqual(put.json()["data"]["slug"], "second-name")

        patch = self.client.patch(f"/api/v1/topics/{topic['id']}", json={"name": "Third"})
        self.assertEqual(patch.status_code, 200)
        self.assertEqual(patch.json()["data"]["slug"], "third")

        empty = self.client.patch(f"/api/v1/topics/{topic['id']}", json={})
        self.assertEqual(empty.status_code, 200)
        self.assertEqual(empty.json()["data"]["name"], "Third")

    def test_delete_twice(self):
        topic = self._create_topic("Short Lived")
        first = self.client.delete(f"/api/v1/topics/{topic['id']}")
        self.assertEqual(first.status_code, 200)
        self.assertIsNone(first.json()["data"])
        second = self.client.delete(f"/api/v1/topics/{topic['id']}")
        self.assertEqual(second.status_code, 404)


class NewsApiTests(ApiTestCase):
    def _create_topic(self, name: str) -> str:
        response = self.client.post("/api/v1/topics", json={"name": name})
        self.assertEqual(response.status_code, 201)
        return response.json()["data"]["id"]

    def _news_count(self) -> int:
        with self.SessionLocal() as db:
            return db.execute(select(func.count(News.id))).scalar_one()

    def test_end_to_end_topic_and_news_lifecycle(self):
        tech = self._create_topic("Tech News")
        world = self._create_topic("World")

        created = self.client.post(
            "/api/v1/news",
            json={
                "title": "Hello World",
                "status": "draft",
                "content": "First post",
                "topics": [{"topic_id": tech}, {"topic_id": world}],
            },
        )
        self.assertEqual(created.status_code, 201)
        news = created.json()["data"]
        self.assertEqual(news["slug"], "hello-world")
        self.assertEqual({t["id"] for t in news["topics"]}, {tech, world})

        listed = self.client.get("/api/v1/news", params={"search": "first"})
        self.assertEqual([n["id"] for n in listed.json()["data"]], [news["id"]])

        patched = self.client.patch(f"/api/v1/news/{news['id']}", json={"status": "published"})
        self.assertEqual(patched.status_code, 200)
        self.assertEqual(patched.json()["data"]["status"], "published")
        self.assertEqual(patched.json()["data"]["title"], "Hello World")
        self.assertEqual(len(patched.json()["data"]["topics"]), 2)

        replaced = self.client.put(
            f"/api/v1/news/{news['id']}",
            json={"title": "Hello Again", "status": "published", "content": "Rewritten", "topics": [{"topic_id": world}]},
        )
        self.assertEqual(replaced.status_code, 200)
        data = replaced.json()["data"]
        self.assertEqual(data["slug"], "hello-again")
        self.assertEqual([t["id"] for t in data["topics"]], [world])

        self.assertEqual(self.client.delete(f"/api/v1/topics/{world}").status_code, 200)
        fetched = self.client.get(f"/api/v1/news/{news['id']}")
        self.assertEqual(fetched.json()["data"]["topics"], [])

        self.assertEqual(self.client.delete(f"/api/v1/news/{news['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/v1/news/{news['id']}").status_code, 404)
        self.assertEqual(self.client.get("/api/v1/news").json()["data"], [])

    def test_put_without_topics_clears_them(self):
        tech = self._create_topic("Tech")
        created = self.client.post(
            "/api/v1/news",
            json={"title": "T", "status": "draft", "content": "C", "topics": [{"topic_id": tech}]},
        ).json()["data"]
        replaced = self.client.put(
            f"/api/v1/news/{created['id']}",
            json={"title": "T", "status": "draft", "content": "C"},
        )
        self.assertEqual(replaced.status_code, 200)
        self.assertEqual(replaced.json()["data"]["topics"], [])

    def test_put_requires_every_text_field(self):
        created = self.client.post(
            "/api/v1/news", json={"title": "T", "status": "draft", "content": "C"}
        ).json()["data"]
        response = self.client.put(f"/api/v1/news/{created['id']}", json={"title": "Only title"})
        self.assertEqual(response.status_code, 400)

    def test_malformed_topic_id_creates_nothing(self):
        response = self.client.post(
            "/api/v1/news",
            json={"title": "T", "status": "draft", "content": "C", "topics": [{"topic_id": "garbage"}]},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid topic ID: garbage")
        self.assertEqual(self._news_count(), 0)

    def test_unknown_topic_id_is_404_and_creates_nothing(self):
        missing = str(uuid4())
        response = self.client.post(
            "/api/v1/news",
            json={"title": "T", "status": "draft", "content": "C", "topics": [{"topic_id": missing}]},
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], f"Topic not found: {missing}")
        self.assertEqual(self._news_count(), 0)

    def test_deleted_topic_is_rejected_on_put(self):
        kept = self._create_topic("Kept")
        gone = self._create_topic("Gone")
        created = self.client.post(
            "/api/v1/news",
            json={"title": "T", "status": "draft", "content": "C", "topics": [{"topic_id": kept}]},
        ).json()["data"]
        self.assertEqual(self.client.delete(f"/api/v1/topics/{gone}").status_code, 200)

        response = self.client.put(
            f"/api/v1/news/{created['id']}",
            json={"title": "T", "status": "draft", "content": "C", "topics": [{"topic_id": gone}]},
        )
        self.assertEqual(response.status_code, 404)
        self.assertIn(gone, response.json()["message"])
        topics = self.client.get(f"/api/v1/news/{created['id']}").json()["data"]["topics"]
        self.assertEqual([t["id"] for t in topics], [kept])

    def test_unknown_news_is_404(self):
        response = self.client.patch(f"/api/v1/news/{uuid4()}", json={"title": "x"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "News not found")


class RootEndpointsTests(ApiTestCase):
    def test_landing_and_health(self):
        landing = self.client.get("/")
        self.assertEqual(landing.status_code, 200)
        self.assertEqual(landing.json()["message"], "All is well!")
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_metrics_report_repository_and_http_calls(self):
        self.client.post("/api/v1/topics", json={"name": "Metered"})
        response = self.client.get("/metrics")
        self.assertEqual(response.status_code, 200)
        snapshot = response.json()["data"]
        self.assertTrue(snapshot["enabled"])
        components = {c["component"] for c in snapshot["calls"]}
        self.assertIn("repo.topic", components)
        self.assertIn("http", components)
