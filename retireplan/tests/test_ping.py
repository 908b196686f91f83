import json

from flask.testing import FlaskClient

from retireplan import __version__
from retireplan.app import create_app
from retireplan.models import ProjectionResult
from retireplan.tests.conftest import example_plan


def test_ping_returns_pong(client: FlaskClient):
    response = client.get("/api/ping")

    assert response.status_code == 200
    assert response.json == {"message": "pong", "version": __version__}


def test_responses_keep_model_field_order(client: FlaskClient):
    response = client.post("/api/projection", json=example_plan())

    assert response.status_code == 200
    result = json.loads(response.get_data(as_text=True))["result"]
    assert list(result) == list(ProjectionResult.model_fields)


def test_key_sorting_can_be_switched_on():
    app = create_app({"TESTING": True, "LOG_LEVEL": "WARNING", "JSON_SORT_KEYS": True})

    with app.test_client() as test_client:
        response = test_client.post("/api/projection", json=example_plan())

    result = json.loads(response.get_data(as_text=True))["result"]
    assert list(result) == sorted(result)


def test_every_api_route_and_handler_has_a_docstring(app):
    from retireplan.app.api import routes

    api_views = {name: view for name, view in app.view_functions.items() if name.startswith("api.")}
    assert "api.projection_chart" in api_views
    for name, view in api_views.items():
        assert view.__doc__, name
    assert routes._handle_validation_error.__doc__
    assert routes._handle_invalid_input.__doc__
