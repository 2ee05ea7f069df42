from kafka_connect.client import ConnectClient
from kafka_connect.config import VERSION as __version__
from kafka_connect.connectors import (
    create_connector,
    delete_connector,
    get_connector,
    get_connector_config,
    get_connector_status,
    get_connector_tasks,
    list_connectors,
    pause_connector,
    restart_connector,
    resume_connector,
    update_connector_config,
)
from kafka_connect.errors import (
    APIError,
    ConnectError,
    DecodeError,
    InvalidArgumentError,
    MalformedPathError,
    ResponseError,
    UnclassifiedHTTPError,
)
from kafka_connect.schemas import (
    Connector,
    ConnectorConfig,
    ConnectorState,
    ConnectorStatus,
    Task,
    TaskID,
    TaskState,
)

__all__ = [
    "APIError",
    "ConnectClient",
    "ConnectError",
    "Connector",
    "ConnectorConfig",
    "ConnectorState",
    "ConnectorStatus",
    "DecodeError",
    "InvalidArgumentError",
    "MalformedPathError",
    "ResponseError",
    "Task",
    "TaskID",
    "TaskState",
    "UnclassifiedHTTPError",
    "__version__",
    "create_connector",
    "delete_connector",
    "get_connector",
    "get_connector_config",
    "get_connector_status",
    "get_connector_tasks",
    "list_connectors",
    "pause_connector",
    "restart_connector",
    "resume_connector",
    "update_connector_config",
]
