"""Tests for the JSON API routes."""

import json


class TestListApplications:
    def test_lists_ids_with_versions(self, app, client):
        resp = client.get("/api/applications")
        assert resp.status_code == 200
        data = resp.get_json()
        assert [a["id"] for a in data] == ["*", "Infobox"]
        infobox = data[1]
        bundle = app.extensions["repository"].get_application_by_id("Infobox")
        assert infobox["version"] == bundle.version_hash()
        assert infobox["pages"] == ["Style:Infobox.css"]
        assert infobox["unresolved"] == []


class TestEvents:
    def test_dependent_page_saved(self, site, client):
        client.get("/api/applications")
        site.save("Style:Infobox.css", ".infobox{color:red}")
        resp = client.post("/api/events/saved", json={"title": "Style:Infobox.css"})
        assert resp.status_code == 202
        assert resp.get_json() == {"title": "Style:Infobox.css", "invalidated": True}
        assert client.get("/styles/Infobox.css").get_data(as_text=True) == ".infobox{color:red}"

    def test_unrelated_page(self, client):
        client.get("/api/applications")
        resp = client.post("/api/events/purged", json={"title": "Home"})
        assert resp.status_code == 202
        assert resp.get_json()["invalidated"] is False

    def test_deleted(self, site, client):
        client.get("/api/applications")
        site.delete("Style:Base.css")
        resp = client.post("/api/events/deleted", json={"title": "Style:Base.css"})
        assert resp.get_json()["invalidated"] is True
        assert client.get("/styles/*.css").get_data(as_text=True) == ""

    def test_unknown_kind(self, client):
        assert client.post("/api/events/moved", json={"title": "A"}).status_code == 400

    def test_missing_title(self, client):
        assert client.post("/api/events/saved", json={}).status_code == 400
        assert client.post("/api/events/saved", json={"title": "  "}).status_code == 400
        assert client.post("/api/events/saved", data="not json").status_code == 400


class TestValidate:
    def test_valid(self, client):
        text = json.dumps({"Infobox": {"coatings": ["Infobox.css"]}})
        resp = client.post("/api/validate", json={"text": text})
        assert resp.status_code == 200
        assert resp.get_json() == {"valid": True, "diagnostics": []}

    def test_invalid(self, client):
        text = json.dumps({"*": {"coatings": ["Base.css"], "variables": {"--bad": "x"}}})
        resp = client.post("/api/validate", json={"text": text})
        assert resp.status_code == 422
        data = resp.get_json()
        assert data["valid"] is False
        assert data["diagnostics"][0]["kind"] == "invalid-variable-name"
        assert data["diagnostics"][0]["path"] == ".*.variables.--bad"

    def test_deeply_nested_text(self, client):
        resp = client.post("/api/validate", json={"text": "[" * 200000})
        assert resp.status_code == 422
        assert resp.get_json()["diagnostics"][0]["kind"] == "invalid-data-type"

    def test_traversal_is_an_invalid_title(self, client):
        text = json.dumps({"*": {"coatings": ["../../secret.css"]}})
        resp = client.post("/api/validate", json={"text": text})
        assert resp.status_code == 422
        assert "invalid-title" in resp.get_json()["diagnostics"][0]["message"]

    def test_wikitext_model(self, client):
        resp = client.post(
            "/api/validate",
            json={"text": "== Navbox ==\n=== Base.css ===\n", "content_model": "wikitext"},
        )
        assert resp.status_code == 422
        assert resp.get_json()["diagnostics"][0]["kind"] == "invalid-base"

    def test_missing_text(self, client):
        assert client.post("/api/validate", json={}).status_code == 400
