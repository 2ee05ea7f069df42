"""Operations on Kafka Connect connectors.

Each function maps to one REST endpoint and performs a single request.
Functions that decode a body return ``(value, response)`` so callers can
inspect the status code; lifecycle actions return the response alone.

See: https://docs.confluent.io/platform/current/connect/references/restapi.html
"""

import httpx

from kafka_connect.client import ConnectClient
from kafka_connect.errors import InvalidArgumentError
from kafka_connect.schemas import Connector, ConnectorConfig, ConnectorStatus, Task


def list_connectors(client: ConnectClient) -> tuple[list[str], httpx.Response]:
    names, response = client.get("connectors", list[str])
    return names or [], response


def create_connector(
    client: ConnectClient, connector: Connector
) -> tuple[Connector, httpx.Response]:
    """Create a new connector instance.

    The connector must not list any tasks yet; the server assigns them. On
    success ``connector`` is updated in place with the server's view of it.
    """
    if connector.tasks:
        raise InvalidArgumentError(
            f"connector {connector.name} cannot be created with existing tasks"
        )

    request = client.build(
        "POST", "connectors", connector.model_dump(mode="json", include={"name", "config"})
    )
    created, response = client.execute(request, Connector)
    if created is not None:
        for field in Connector.model_fields:
            setattr(connector, field, getattr(created, field))
    return connector, response


def get_connector(client: ConnectClient, name: str) -> tuple[Connector, httpx.Response]:
    return client.get(f"connectors/{name}", Connector)


def get_connector_config(
    client: ConnectClient, name: str
) -> tuple[ConnectorConfig, httpx.Response]:
    return client.get(f"connectors/{name}/config", ConnectorConfig)


def get_connector_tasks(client: ConnectClient, name: str) -> tuple[list[Task], httpx.Response]:
    """List the tasks currently running for a connector."""
    tasks, response = client.get(f"connectors/{name}/tasks", list[Task])
    return tasks or [], response


def get_connector_status(
    client: ConnectClient, name: str
) -> tuple[ConnectorStatus, httpx.Response]:
    return client.get(f"connectors/{name}/status", ConnectorStatus)


def update_connector_config(
    client: ConnectClient, name: str, config: ConnectorConfig
) -> tuple[Connector, httpx.Response]:
    """Update a connector's configuration, creating it if it does not exist.

    The response status tells the two apart: 201 when created, 200 when an
    existing connector was updated.
    """
    request = client.build("PUT", f"connectors/{name}/config", config)
    return client.execute(request, Connector)


def delete_connector(client: ConnectClient, name: str) -> httpx.Response:
    """Delete a connector, halting its tasks and removing its configuration."""
    return client.delete(f"connectors/{name}")


def pause_connector(client: ConnectClient, name: str) -> httpx.Response:
    """Pause a connector and its tasks.

    Pausing is asynchronous: tasks reach the PAUSED state some time after
    this returns. Poll ``get_connector_status`` to observe it.
    """
    _, response = client.execute(client.build("PUT", f"connectors/{name}/pause"))
    return response


def resume_connector(client: ConnectClient, name: str) -> httpx.Response:
    """Resume a paused connector. Asynchronous, like ``pause_connector``."""
    _, response = client.execute(client.build("PUT", f"connectors/{name}/resume"))
    return response


def restart_connector(client: ConnectClient, name: str) -> httpx.Response:
    """Restart a connector.

    The server answers 409 Conflict while a rebalance is in progress; that
    surfaces as an ``APIError`` and is not retried.
    """
    _, response = client.execute(client.build("POST", f"connectors/{name}/restart"))
    return response
