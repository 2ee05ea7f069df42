from pydantic import BaseModel

ConnectorConfig = dict[str, str]


class TaskID(BaseModel):
    """Identifies one task of a connector."""

    connector: str
    task: int


class Connector(BaseModel):
    name: str
    config: ConnectorConfig = {}
    tasks: list[TaskID] = []
    type: str | None = None


class Task(BaseModel):
    id: TaskID
    config: ConnectorConfig = {}


class ConnectorState(BaseModel):
    state: str
    worker_id: str
    trace: str | None = None


class TaskState(BaseModel):
    id: int
    state: str
    worker_id: str
    trace: str | None = None


class ConnectorStatus(BaseModel):
    name: str
    connector: ConnectorState
    tasks: list[TaskState] = []
    type: str | None = None


class ErrorBody(BaseModel):
    """Error payload returned by the REST API on failed requests."""

    error_code: int = 0
    message: str | None = None
