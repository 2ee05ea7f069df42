import os

VERSION = "0.9.0"

# Kafka Connect REST API defaults
DEFAULT_HOST_URL = "http://localhost:8083/"
HOST_ENV = "KAFKA_CONNECT_CLI_HOST"
TIMEOUT = float(os.environ.get("KAFKA_CONNECT_CLI_TIMEOUT", "10.0"))

USER_AGENT = f"kafka-connect-client/{VERSION} connect/{VERSION}"
