"""
Tests des routes web avec TestClient.

Le Container de l'application est surcharge : source en memoire, hebergeur
d'images mocke et Settings isoles.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers
from fastapi import Request
from fastapi.testclient import TestClient

from anime_collection.container import Container
from anime_collection.core.exceptions import (
    ConfigurationError,
    MediaUploadError,
    RecordSourceError,
)
from anime_collection.utils.constants import ADMIN_COOKIE_NAME
from anime_collection.web import deps
from anime_collection.web.app import create_app
from tests.conftest import InMemoryAnimeRepository


@pytest.fixture
def container(test_settings, repository, media_host) -> Container:
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.anime_repository.override(providers.Object(repository))
    container.media_host.override(providers.Object(media_host))
    return container


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container), follow_redirects=False)


@pytest.fixture
def admin_client(client) -> TestClient:
    """Client connecte a l'administration."""
    response = client.post("/admin/login", data={"password": "s3cret-test"})
    assert response.status_code == 303
    return client


class TestHome:
    """Tests pour GET /."""

    def test_home_groups_by_language(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Anime Collection" in response.text
        html = response.text.split('id="gallery"', 1)[1]
        # Groupes dans l'ordre d'apparition apres tri "newest"
        assert html.index("Japanese") < html.index("Chinese") < html.index("Korean")
        # Mises en avant en tete du groupe
        assert html.index("Frieren") < html.index("One Piece") < html.index("Naruto Shippuden")
        assert "Seasons 1-3" in html

    def test_search_is_case_insensitive(self, client):
        html = client.get("/", params={"q": "NARUTO"}).text
        assert "Naruto Shippuden" in html
        assert "One Piece" not in html

    def test_language_filter(self, client):
        html = client.get("/", params={"language": "Korean"}).text
        assert "Solo Leveling" in html
        assert "Frieren" not in html

    def test_no_match(self, client):
        html = client.get("/", params={"q": "zzz"}).text
        assert "No anime found matching your criteria." in html

    def test_htmx_request_returns_fragment(self, client):
        response = client.get("/", headers={"HX-Request": "true"})
        assert response.status_code == 200
        assert "<html" not in response.text
        assert "Frieren" in response.text
        assert response.headers["Vary"] == "HX-Request"

    def test_source_failure_shows_notice(self, container, client):
        failing = AsyncMock(spec=InMemoryAnimeRepository)
        failing.list_all.side_effect = RecordSourceError("Could not reach the database")
        container.anime_repository.override(providers.Object(failing))

        response = client.get("/")
        assert response.status_code == 200
        assert "Could not reach the database" in response.text

    def test_disconnected_client_gets_499(self, container, client, monkeypatch):
        async def hang():
            await asyncio.Event().wait()

        slow = AsyncMock(spec=InMemoryAnimeRepository)
        slow.list_all.side_effect = hang
        container.anime_repository.override(providers.Object(slow))
        monkeypatch.setattr(deps, "_DISCONNECT_POLL_SECONDS", 0.01)
        monkeypatch.setattr(Request, "is_disconnected", AsyncMock(return_value=True))

        response = client.get("/")
        assert response.status_code == 499
        assert response.text == ""


class TestLanguagePage:
    """Tests pour GET /language/{lang}."""

    def test_language_page_case_insensitive(self, client):
        html = client.get("/language/japanese").text
        assert "Frieren" in html
        assert "Naruto Shippuden" in html
        assert "Solo Leveling" not in html
        assert html.index("Frieren") < html.index("One Piece")

    def test_unknown_language(self, client):
        html = client.get("/language/Klingon").text
        assert "No anime found for this language." in html

    def test_source_failure_shows_notice(self, container, client):
        failing = AsyncMock(spec=InMemoryAnimeRepository)
        failing.list_all.side_effect = RecordSourceError("Could not reach the database")
        container.anime_repository.override(providers.Object(failing))

        response = client.get("/language/Japanese")
        assert response.status_code == 200
        assert "Could not load the collection: Could not reach the database" in response.text
        assert "No anime found for this language." in response.text


class TestAdminAuth:
    """Tests pour la connexion a l'administration."""

    def test_admin_requires_login(self, client):
        response = client.get("/admin")
        assert response.status_code == 303
        assert response.headers["location"] == "/admin/login"

    def test_export_requires_login(self, client):
        assert client.get("/admin/export").status_code == 303

    def test_login_page(self, client):
        response = client.get("/admin/login")
        assert response.status_code == 200
        assert 'name="password"' in response.text

    def test_wrong_password(self, client):
        response = client.post("/admin/login", data={"password": "nope"})
        assert response.status_code == 401
        assert "Incorrect password" in response.text
        assert ADMIN_COOKIE_NAME not in client.cookies

    def test_login_sets_cookie_and_redirects(self, admin_client):
        assert ADMIN_COOKIE_NAME in admin_client.cookies
        assert admin_client.get("/admin").status_code == 200

    def test_login_page_redirects_when_logged_in(self, admin_client):
        response = admin_client.get("/admin/login")
        assert response.status_code == 303
        assert response.headers["location"] == "/admin"

    def test_logout(self, admin_client):
        response = admin_client.post("/admin/logout")
        assert response.status_code == 303
        assert admin_client.get("/admin").status_code == 303

    def test_login_disabled_without_password(self, container, test_settings):
        container.config.override(
            providers.Object(test_settings.model_copy(update={"admin_password": None}))
        )
        client = TestClient(create_app(container), follow_redirects=False)
        response = client.post("/admin/login", data={"password": ""})
        assert response.status_code == 503
        assert "not configured" in response.text


class TestAdminManage:
    """Tests pour la gestion du catalogue."""

    def test_index_lists_and_searches(self, admin_client):
        html = admin_client.get("/admin", params={"q": "solo"}).text
        assert "Solo Leveling" in html
        assert "Frieren" not in html
        assert "1 of 5" in html

    def test_status_notice(self, admin_client):
        html = admin_client.get("/admin", params={"status": "deleted"}).text
        assert "Anime deleted" in html

    def test_create_anime(self, admin_client, repository, media_host):
        response = admin_client.post(
            "/admin/animes",
            data={"name": "Dandadan", "language": "Japanese", "season": "1", "total_episodes": "12"},
            files={"image": ("cover.jpg", b"\xff\xd8\xff fake", "image/jpeg")},
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/admin?status=created"
        media_host.upload.assert_awaited_once()
        created = [e for e in repository.entries.values() if e.name == "Dandadan"]
        assert len(created) == 1
        assert created[0].total_episodes == 12

    def test_create_without_name_keeps_form(self, admin_client, media_host):
        response = admin_client.post(
            "/admin/animes",
            data={"name": "", "season": "Final Season"},
            files={"image": ("cover.jpg", b"\xff\xd8\xff fake", "image/jpeg")},
        )
        assert response.status_code == 400
        assert "Anime name is required" in response.text
        assert "Final Season" in response.text
        media_host.upload.assert_not_awaited()

    def test_create_without_image(self, admin_client):
        response = admin_client.post("/admin/animes", data={"name": "Dandadan"})
        assert response.status_code == 400
        assert "Please select an image" in response.text

    def test_create_upload_failure(self, admin_client, media_host, repository):
        media_host.upload.side_effect = MediaUploadError("Upload preset not found")
        response = admin_client.post(
            "/admin/animes",
            data={"name": "Dandadan"},
            files={"image": ("cover.jpg", b"\xff\xd8\xff fake", "image/jpeg")},
        )
        assert response.status_code == 502
        assert "Upload preset not found" in response.text
        assert len(repository.entries) == 5

    def test_edit_form(self, admin_client):
        response = admin_client.get("/admin/animes/naruto/edit")
        assert response.status_code == 200
        assert 'value="Naruto Shippuden"' in response.text

    def test_edit_missing(self, admin_client):
        assert admin_client.get("/admin/animes/missing/edit").status_code == 404

    def test_update_anime(self, admin_client, repository):
        response = admin_client.post(
            "/admin/animes/naruto",
            data={"name": "Naruto", "language": "Japanese", "season": "", "total_episodes": "220"},
        )
        assert response.status_code == 303
        assert repository.entries["naruto"].name == "Naruto"
        assert repository.entries["naruto"].season is None

    def test_update_invalid_episodes(self, admin_client):
        response = admin_client.post(
            "/admin/animes/naruto",
            data={"name": "Naruto", "total_episodes": "lots"},
        )
        assert response.status_code == 400
        assert "Total episodes must be a whole number" in response.text

    def test_edit_form_carries_cover_url(self, admin_client):
        html = admin_client.get("/admin/animes/naruto/edit").text
        assert (
            '<input type="hidden" name="image_url" '
            'value="https://res.cloudinary.com/demo/naruto.jpg">'
        ) in html

    def test_update_error_keeps_cover_preview(self, admin_client):
        response = admin_client.post(
            "/admin/animes/naruto",
            data={
                "name": "",
                "image_url": "https://res.cloudinary.com/demo/naruto.jpg",
            },
        )
        assert response.status_code == 400
        assert 'class="cover-preview" src="https://res.cloudinary.com/demo/naruto.jpg"' in response.text

    def test_create_without_media_host_config(self, admin_client, media_host, repository):
        media_host.upload.side_effect = ConfigurationError(
            "Cloudinary configuration is missing."
        )
        response = admin_client.post(
            "/admin/animes",
            data={"name": "Dandadan"},
            files={"image": ("cover.jpg", b"\xff\xd8\xff fake", "image/jpeg")},
        )
        assert response.status_code == 503
        assert "Cloudinary configuration is missing." in response.text
        assert len(repository.entries) == 5

    def test_set_rank(self, admin_client, repository):
        response = admin_client.post("/admin/animes/solo/rank", data={"featured_rank": "3"})
        assert response.headers["location"] == "/admin?status=ranked"
        assert repository.entries["solo"].featured_rank == 3

    def test_set_rank_invalid(self, admin_client):
        response = admin_client.post("/admin/animes/solo/rank", data={"featured_rank": "x"})
        assert response.status_code == 303
        assert response.headers["location"].startswith("/admin?error=")

    def test_delete(self, admin_client, repository):
        response = admin_client.post("/admin/animes/link/delete")
        assert response.headers["location"] == "/admin?status=deleted"
        assert "link" not in repository.entries


class TestAdminExport:
    """Tests pour GET /admin/export."""

    def test_default_fields(self, admin_client):
        response = admin_client.get("/admin/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "anime-collection-export.txt" in response.headers["content-disposition"]
        assert response.text.startswith("Anime Collection Export\nTotal: 5\n")
        assert "Naruto Shippuden | Season: Seasons 1-3 | Episodes: 500" in response.text

    def test_selected_fields(self, admin_client):
        response = admin_client.get("/admin/export", params={"fields": ["name", "featured_rank"]})
        assert "One Piece | Featured rank: 2" in response.text
        assert "Episodes:" not in response.text


class TestUnconfiguredFirestore:
    """Source Firestore choisie sans identifiant de projet."""

    @pytest.fixture
    def client(self, test_settings, media_host) -> TestClient:
        container = Container()
        container.config.override(
            providers.Object(
                test_settings.model_copy(
                    update={"record_source": "firestore", "firestore_project_id": None}
                )
            )
        )
        container.media_host.override(providers.Object(media_host))
        return TestClient(create_app(container), follow_redirects=False)

    def test_home_shows_configuration_notice(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "ANIMECOL_FIRESTORE_PROJECT_ID" in response.text

    def test_language_page_shows_configuration_notice(self, client):
        response = client.get("/language/Japanese")
        assert response.status_code == 200
        assert "ANIMECOL_FIRESTORE_PROJECT_ID" in response.text

    def test_admin_index_shows_configuration_notice(self, admin_client):
        response = admin_client.get("/admin")
        assert response.status_code == 200
        assert "ANIMECOL_FIRESTORE_PROJECT_ID" in response.text

    def test_update_returns_503(self, admin_client):
        response = admin_client.post("/admin/animes/naruto", data={"name": "Naruto"})
        assert response.status_code == 503
        assert "ANIMECOL_FIRESTORE_PROJECT_ID" in response.text

    @pytest.mark.parametrize(
        "method, url",
        [
            ("get", "/admin/animes/naruto/edit"),
            ("post", "/admin/animes/naruto/rank"),
            ("post", "/admin/animes/naruto/delete"),
            ("get", "/admin/export"),
        ],
    )
    def test_admin_actions_redirect_with_error(self, admin_client, method, url):
        response = getattr(admin_client, method)(url)
        assert response.status_code == 303
        assert response.headers["location"].startswith("/admin?error=")
        assert "ANIMECOL_FIRESTORE_PROJECT_ID" in response.headers["location"]
