"""
Tests for projects, project configs, changelogs and system endpoints.
"""

from feedhub.db.models import Changelog
from feedhub.db.session import async_session
from feedhub.main import app


def test_project_slug_from_name(client, project):
    assert project["slug"] == "acme-hub"
    assert client.get("/api/v1/projects/acme-hub").json()["name"] == "Acme Hub"


def test_duplicate_slug(client, project):
    res = client.post("/api/v1/projects/", json={"name": "Other", "slug": "Acme Hub"})
    assert res.status_code == 409


def test_update_and_delete_project(client, project, make_feedback):
    res = client.patch("/api/v1/projects/acme-hub", json={"name": "Acme"})
    assert res.json()["name"] == "Acme"

    make_feedback("Dark mode")
    assert client.delete("/api/v1/projects/acme-hub").status_code == 204
    assert client.get("/api/v1/projects/acme-hub").status_code == 404
    assert client.get("/api/v1/projects/").json() == []


def test_project_config(client, project):
    config = client.get("/api/v1/projects/acme-hub/config").json()
    assert config["integration_discord_status"] is False
    assert config["changelog_preview_style"] == "summary"

    updated = client.patch(
        "/api/v1/projects/acme-hub/config",
        json={"integration_discord_status": True, "integration_discord_webhook": "https://discord.test/hook"},
    ).json()
    assert updated["integration_discord_status"] is True
    assert updated["integration_discord_webhook"] == "https://discord.test/hook"


def test_changelog_draft_then_publish(client, redis, project):
    base = "/api/v1/projects/acme-hub/changelogs"
    draft = client.post(f"{base}/", json={"title": "March Update", "summary": "Lots"}).json()
    assert draft["slug"] == "march-update"
    assert draft["published"] is False
    assert draft["publish_date"] is None
    assert redis.jobs == []

    assert client.get(f"{base}/", params={"published": True}).json() == []

    published = client.patch(f"{base}/{draft['id']}", json={"published": True}).json()
    assert published["published"] is True
    assert published["publish_date"] is not None
    assert redis.jobs == [("notify_changelog_published", (draft["id"],))]

    # already published: no second announcement
    client.patch(f"{base}/{draft['id']}", json={"summary": "Even more"})
    assert len(redis.jobs) == 1

    assert client.post(f"{base}/", json={"title": "March update"}).status_code == 409


def test_changelog_delete(client, project):
    base = "/api/v1/projects/acme-hub/changelogs"
    created = client.post(f"{base}/", json={"title": "v1", "published": True}).json()
    assert client.delete(f"{base}/{created['id']}").status_code == 204
    assert client.get(f"{base}/{created['id']}").status_code == 404


def test_system_stats(client, project, make_feedback):
    created = make_feedback("Dark mode")
    client.post(f"/api/v1/projects/acme-hub/feedback/{created['id']}/upvotes", json={"profile_id": "a"})

    stats = client.get("/api/system/stats").json()
    assert stats == {"projects": 1, "feedback": 1, "upvotes": 1, "changelogs": 0}


def test_health_reports_missing_worker(client, redis):
    res = client.get("/api/health")
    assert res.status_code == 503
    assert res.json()["database"] == "connected"
    assert res.json()["worker"] == "not reporting"

    redis.values["arq:heartbeat"] = "1700000000.0"
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["worker"].startswith("running")


class ChangelogReadingQueue:
    """Job queue that reads the changelog back the way the worker would."""

    def __init__(self):
        self.seen = []

    async def enqueue_job(self, function, *args, **kwargs):
        async with async_session() as db:
            changelog = await db.get(Changelog, args[0])
            visible = bool(changelog and changelog.published and changelog.publish_date)
        self.seen.append((function, visible))


def test_changelog_is_committed_before_announcing(client, project):
    queue = ChangelogReadingQueue()
    app.state.redis = queue
    base = "/api/v1/projects/acme-hub/changelogs"

    client.post(f"{base}/", json={"title": "v1", "published": True})
    draft = client.post(f"{base}/", json={"title": "v2"}).json()
    client.patch(f"{base}/{draft['id']}", json={"published": True})

    assert queue.seen == [
        ("notify_changelog_published", True),
        ("notify_changelog_published", True),
    ]


def test_changelog_patch_rejects_null_required_fields(client, project):
    base = "/api/v1/projects/acme-hub/changelogs"
    created = client.post(f"{base}/", json={"title": "v1", "summary": "first"}).json()

    for body in ({"title": None}, {"published": None}, {"title": "  "}):
        res = client.patch(f"{base}/{created['id']}", json=body)
        assert res.status_code == 400, body

    cleared = client.patch(f"{base}/{created['id']}", json={"summary": None})
    assert cleared.status_code == 200
    assert cleared.json()["summary"] is None
    assert cleared.json()["title"] == "v1"


def test_config_patch_rejects_null_required_fields(client, project):
    url = "/api/v1/projects/acme-hub/config"
    assert client.patch(url, json={"integration_discord_status": None}).status_code == 400
    assert client.patch(url, json={"changelog_preview_style": None}).status_code == 400

    res = client.patch(url, json={"integration_discord_webhook": None})
    assert res.status_code == 200
    assert res.json()["integration_discord_status"] is False


def test_project_rename_to_blank_is_rejected(client, project):
    res = client.patch("/api/v1/projects/acme-hub", json={"name": "   "})
    assert res.status_code == 400
    assert client.get("/api/v1/projects/acme-hub").json()["name"] == "Acme Hub"
