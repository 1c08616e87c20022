"""Exceptions raised by views become RFC 9457 problem responses."""

from __future__ import annotations

from tests.helpers.assertions import problem_body
from tests.helpers.http import accept


def test_domain_not_found_error(client) -> None:
    response = client.get("/items/99")

    body = problem_body(response)
    assert response.status_code == 404
    assert body["type"] == "https://problem/not-found"
    assert body["detail"] == "Item 99 does not exist"
    assert body["instance"] == "/items/99"
    assert response.headers["X-Trace-Id"] == body["error_ref"]


def test_value_error_is_a_bad_request(client) -> None:
    body = problem_body(client.get("/bad-value"))

    assert body["status"] == 400
    assert body["title"] == "Domain Error"


def test_authentication_error(client) -> None:
    assert problem_body(client.get("/login-required"))["status"] == 401


def test_marshmallow_validation_error(client) -> None:
    response = client.post("/items", json={})

    body = problem_body(response)
    assert response.status_code == 422
    assert body["errors"] == {"name": ["Missing data for required field."]}


def test_unhandled_error_hides_details(client) -> None:
    response = client.get("/boom")

    body = problem_body(response)
    assert response.status_code == 500
    assert "detail" not in body
    assert "trace" not in body
    assert "hunter2" not in response.get_data(as_text=True)


def test_dev_mode_exposes_trace(dev_app) -> None:
    body = problem_body(dev_app.test_client().get("/boom"))

    assert body["detail"] == "database password is hunter2"
    assert body["trace"]["message"] == "database password is hunter2"
    assert body["trace"]["trace"]


def test_unknown_route_keeps_http_status(client) -> None:
    response = client.get("/nowhere")

    body = problem_body(response)
    assert response.status_code == 404
    assert body["type"] == "about:blank"
    assert body["title"] == "Not Found"
    assert body["instance"] == "/nowhere"


def test_method_not_allowed(client) -> None:
    response = client.put("/items/1")

    assert problem_body(response)["status"] == 405


def test_problem_is_json_even_when_csv_was_negotiated(client) -> None:
    response = client.get("/items/99", headers=accept("text/csv"))

    assert problem_body(response)["status"] == 404


class TestDownloads:
    def test_missing_download_hides_server_path(self, app, client, tmp_path):
        private = tmp_path / "private"
        private.mkdir()
        app.config["DOWNLOAD_DIR"] = str(private)

        response = client.get("/downloads/report.csv")

        body = problem_body(response)
        assert response.status_code == 404
        assert body["detail"] == "File not found or not readable: report.csv"
        assert str(private) not in response.get_data(as_text=True)

    def test_existing_download_is_served(self, app, client, tmp_path):
        (tmp_path / "report.csv").write_text("id,name\n1,a\n")
        app.config["DOWNLOAD_DIR"] = str(tmp_path)

        response = client.get("/downloads/report.csv")

        assert response.status_code == 200
        assert response.headers["Content-Disposition"].startswith("attachment")
        assert response.get_data(as_text=True) == "id,name\n1,a\n"
