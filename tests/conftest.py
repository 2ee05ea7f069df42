import pytest
from fastapi import Body, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.testclient import TestClient

from kafka_connect.client import ConnectClient

WORKER_ID = "127.0.0.1:8083"

SERVER_ERROR_PAGE = """<html>
<head><title>Error 500 Internal Server Error</title></head>
<body><h2>HTTP ERROR 500</h2><p>Problem accessing /connectors.</p></body>
</html>"""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error_code": status_code, "message": message}, status_code=status_code)


def create_fake_connect() -> FastAPI:
    """An in-memory stand-in for the Kafka Connect REST API.

    Connectors get a single task. A connector whose config sets
    ``fail=true`` reports that task as FAILED with a trace.
    """
    app = FastAPI(title="Fake Kafka Connect")
    app.state.connectors = {}
    app.state.requests = []
    app.state.rebalancing = False
    connectors = app.state.connectors

    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        app.state.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "headers": dict(request.headers),
            }
        )
        return await call_next(request)

    def info(name: str) -> dict:
        return {
            "name": name,
            "config": connectors[name]["config"],
            "tasks": [{"connector": name, "task": 0}],
            "type": "source",
        }

    def not_found(name: str) -> JSONResponse:
        return _error(404, f"Connector {name} not found")

    @app.get("/connectors")
    def list_connectors():
        return list(connectors)

    @app.post("/connectors")
    def create_connector(body: dict = Body(...)):
        # Connect answers some malformed creates with an HTML page
        if not isinstance(body.get("config"), dict):
            return HTMLResponse(SERVER_ERROR_PAGE, status_code=500)
        name = body.get("name", "")
        if name in connectors:
            return _error(409, f"Connector {name} already exists")
        connectors[name] = {"config": body["config"], "state": "RUNNING"}
        return JSONResponse(info(name), status_code=201)

    @app.get("/connectors/{name}")
    def get_connector(name: str):
        if name not in connectors:
            return not_found(name)
        return info(name)

    @app.get("/connectors/{name}/config")
    def get_config(name: str):
        if name not in connectors:
            return not_found(name)
        return connectors[name]["config"]

    @app.put("/connectors/{name}/config")
    def put_config(name: str, config: dict[str, str] = Body(...)):
        status_code = 200 if name in connectors else 201
        state = connectors.get(name, {}).get("state", "RUNNING")
        connectors[name] = {"config": config, "state": state}
        return JSONResponse(info(name), status_code=status_code)

    @app.get("/connectors/{name}/tasks")
    def get_tasks(name: str):
        if name not in connectors:
            return not_found(name)
        config = connectors[name]["config"]
        return [
            {
                "id": {"connector": name, "task": 0},
                "config": {**config, "task.class": "org.example.FakeTask"},
            }
        ]

    @app.get("/connectors/{name}/status")
    def get_status(name: str):
        if name not in connectors:
            return not_found(name)
        entry = connectors[name]
        task = {"id": 0, "state": entry["state"], "worker_id": WORKER_ID}
        if entry["config"].get("fail") == "true":
            task["state"] = "FAILED"
            task["trace"] = "org.apache.kafka.connect.errors.ConnectException: boom"
        return {
            "name": name,
            "connector": {"state": entry["state"], "worker_id": WORKER_ID},
            "tasks": [task],
            "type": "source",
        }

    @app.delete("/connectors/{name}")
    def delete_connector(name: str):
        if name not in connectors:
            return not_found(name)
        del connectors[name]
        return Response(status_code=204)

    @app.put("/connectors/{name}/pause")
    def pause_connector(name: str):
        if name not in connectors:
            return not_found(name)
        connectors[name]["state"] = "PAUSED"
        return Response(status_code=202)

    @app.put("/connectors/{name}/resume")
    def resume_connector(name: str):
        if name not in connectors:
            return not_found(name)
        connectors[name]["state"] = "RUNNING"
        return Response(status_code=202)

    @app.post("/connectors/{name}/restart")
    def restart_connector(name: str):
        if name not in connectors:
            return not_found(name)
        if app.state.rebalancing:
            return _error(
                409,
                "Cannot complete request momentarily due to stale configuration "
                "(typically caused by a concurrent config change)",
            )
        return Response(status_code=204)

    return app


@pytest.fixture
def connect_app():
    return create_fake_connect()


@pytest.fixture
def http(connect_app):
    return TestClient(connect_app)


@pytest.fixture
def client(http):
    return ConnectClient(http=http)


@pytest.fixture
def seed(connect_app):
    """Add connectors directly to the fake server's store."""

    def _seed(name: str, config: dict | None = None, state: str = "RUNNING"):
        connect_app.state.connectors[name] = {"config": config or {}, "state": state}

    return _seed
