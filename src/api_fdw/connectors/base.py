from __future__ import annotations

from abc import ABC, abstractmethod


class BaseConnector(ABC):
    """Describes where a remote collection lives and how its pages are shaped."""

    provider: str
    default_base_url: str
    user_agent: str
    cursor_field: str = "cursor"
    cursor_param: str = "cursor"
    limit_param: str = "limit"

    @abstractmethod
    def collection_url(self, base_url: str, object_name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def records_field(self, object_name: str) -> str:
        raise NotImplementedError
