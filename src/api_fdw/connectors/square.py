from api_fdw.connectors.base import BaseConnector
from api_fdw.errors import ConfigError


class SquareConnector(BaseConnector):
    provider = "square"
    default_base_url = "https://connect.squareup.com/v2"
    user_agent = "SquareCustomers FDW"

    def collection_url(self, base_url: str, object_name: str) -> str:
        # The list endpoint and the response array share the object's name,
        # e.g. GET /v2/customers -> {"customers": [...], "cursor": "..."}.
        return f"{base_url.rstrip('/')}/{object_name.strip('/')}"

    def records_field(self, object_name: str) -> str:
        return object_name.strip("/").rsplit("/", 1)[-1]


CONNECTORS: dict[str, type[BaseConnector]] = {
    SquareConnector.provider: SquareConnector,
}


def get_connector(name: str) -> BaseConnector:
    connector_cls = CONNECTORS.get(name)
    if connector_cls is None:
        raise ConfigError(
            f"unknown connector `{name}` (expected one of: {', '.join(sorted(CONNECTORS))})"
        )
    return connector_cls()
