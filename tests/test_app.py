from fastapi.testclient import TestClient

from todo_app.errors import INTERNAL_ERROR_MESSAGE


def test_health(client):
    res = client.get("/v1/health")
    assert res.status_code == 200
    assert res.json() == {"status": "server is running"}


def test_unknown_route_uses_error_shape(client):
    res = client.get("/v1/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_shape(client):
    res = client.get("/v1/login")
    assert res.status_code == 405
    assert "error" in res.json()


def test_unhandled_exception_becomes_json_500(app):
    def boom():
        raise RuntimeError("something broke")

    app.add_api_route("/v1/boom", boom, methods=["GET"])
    with TestClient(app) as c:
        res = c.get("/v1/boom")
        assert res.status_code == 500
        assert res.json() == {"error": INTERNAL_ERROR_MESSAGE}

        # the server keeps serving afterwards
        assert c.get("/v1/health").status_code == 200


def test_engine_pool_released_on_shutdown(app):
    with TestClient(app):
        pool = app.state.engine.pool
    # dispose() closes the pool and swaps in a fresh one
    assert app.state.engine.pool is not pool
