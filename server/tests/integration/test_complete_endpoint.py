from fastapi.testclient import TestClient

from inline_calc.main import create_app


def create_test_client() -> TestClient:
    return TestClient(create_app())


def test_complete_suggests_result_for_trailing_equals() -> None:
    client = create_test_client()

    response = client.post("/complete", json={"linePrefix": "offset = 0o1000 + 1 ="})

    assert response.status_code == 200
    assert response.json() == {
        "items": [
            {"label": "0o1001", "detail": " 0o1000 + 1  = 0o1001"},
        ]
    }


def test_complete_returns_no_items_without_trigger() -> None:
    client = create_test_client()

    response = client.post("/complete", json={"linePrefix": "no math here"})

    assert response.status_code == 200
    assert response.json() == {"items": []}


def test_complete_returns_no_items_for_unsuccessful_expression() -> None:
    client = create_test_client()

    response = client.post("/complete", json={"linePrefix": "1.1**2.2 ="})

    assert response.json() == {"items": []}


def test_complete_requires_line_prefix() -> None:
    client = create_test_client()

    response = client.post("/complete", json={})

    assert response.status_code == 422


def test_complete_renders_results_past_int_string_limit() -> None:
    client = create_test_client()

    response = client.post("/complete", json={"linePrefix": "1e5000 ="})

    assert response.status_code == 200
    assert response.json()["items"][0]["label"] == "1" + "0" * 5000
