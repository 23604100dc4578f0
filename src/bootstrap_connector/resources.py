"""
Read access to the content resource tree.

The connector only reads the tree through a short-lived resolver obtained for
a fixed subservice identity. `MappingResourceResolverFactory` backs the tree
with nested dictionaries, which is enough for hosts that keep their language
lists in a YAML file.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterator, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

import yaml

from .exceptions import LoginError

logger = logging.getLogger(__name__)

_BOOL_TAG = "tag:yaml.org,2002:bool"


class ResourceTreeLoader(yaml.SafeLoader):
    """
    A safe YAML loader that only reads `true` and `false` as booleans.

    Language codes such as `no` and values such as `on` stay strings instead
    of turning into YAML 1.1 booleans.
    """


ResourceTreeLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ResourceTreeLoader.add_implicit_resolver(_BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF"))


class Resource(ABC):
    """A node of the resource tree."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The last segment of the resource path."""
        raise NotImplementedError

    @abstractmethod
    def list_children(self) -> Iterator["Resource"]:
        """Iterate over the direct children in their natural order."""
        raise NotImplementedError

    @abstractmethod
    def get_property(self, name: str) -> Any:  # noqa: ANN401
        """Return the value of a property, or None if it is not set."""
        raise NotImplementedError


class ResourceResolver(ABC):
    """A session on the resource tree. Must be closed once it is no longer used."""

    @abstractmethod
    def get_resource(self, path: str) -> Resource | None:
        """Return the resource at `path`, or None if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the session."""
        raise NotImplementedError

    def __enter__(self) -> "ResourceResolver":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class ResourceResolverFactory(ABC):
    """Hands out resource resolvers authenticated as a service user."""

    @abstractmethod
    def get_service_resource_resolver(self, subservice: str) -> ResourceResolver:
        """
        Open a resolver for the service user mapped to `subservice`.

        Raises:
            LoginError: If no service user is mapped or login fails.

        """
        raise NotImplementedError


class MappingResource(Resource):
    """A resource whose dict values are child resources and scalar values are properties."""

    def __init__(self, name: str, data: Mapping[str, Any]) -> None:
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    def list_children(self) -> Iterator[Resource]:
        for key, value in self._data.items():
            if isinstance(value, Mapping):
                yield MappingResource(str(key), value)

    def get_property(self, name: str) -> str | None:
        """Return the property as a string, or None if it is unset or names a child."""
        value = self._lookup(name)
        if value is None or isinstance(value, Mapping):
            return None
        return str(value)

    def get_child(self, name: str) -> "MappingResource | None":
        value = self._lookup(name)
        return MappingResource(name, value) if isinstance(value, Mapping) else None

    def _lookup(self, name: str) -> Any:  # noqa: ANN401
        if name in self._data:
            return self._data[name]
        # Non-string keys (e.g. `1:` in YAML) are addressed by their string form.
        return next((v for k, v in self._data.items() if str(k) == name), None)


class MappingResourceResolver(ResourceResolver):
    """A resolver over a nested-dict resource tree."""

    def __init__(self, tree: Mapping[str, Any]) -> None:
        self._root = MappingResource("", tree)
        self.closed = False

    def get_resource(self, path: str) -> Resource | None:
        if self.closed:
            msg = "Resource resolver is already closed."
            raise RuntimeError(msg)
        resource: MappingResource | None = self._root
        for segment in (s for s in path.split("/") if s):
            resource = resource.get_child(segment)
            if resource is None:
                return None
        return resource

    def close(self) -> None:
        self.closed = True


class MappingResourceResolverFactory(ResourceResolverFactory):
    """
    Opens resolvers over a shared nested-dict resource tree.

    If `allowed_subservices` is given, only those subservices can log in.
    """

    def __init__(self, tree: Mapping[str, Any], allowed_subservices: Collection[str] | None = None) -> None:
        self._tree = tree
        self._allowed_subservices = set(allowed_subservices) if allowed_subservices is not None else None

    @classmethod
    def from_yaml(cls, yaml_path: str | Path, allowed_subservices: Collection[str] | None = None) -> "MappingResourceResolverFactory":
        """
        Build a factory from a YAML file holding the resource tree.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file does not hold a YAML mapping.

        """
        path = Path(yaml_path)
        if not path.is_file():
            msg = f"Resource tree file not found at: {yaml_path}"
            raise FileNotFoundError(msg)
        with path.open(encoding="utf-8") as f:
            data = yaml.load(f, Loader=ResourceTreeLoader) or {}  # noqa: S506
        if not isinstance(data, dict):
            msg = f"Resource tree file {yaml_path} must be a YAML mapping (dictionary)."
            raise ValueError(msg)  # noqa: TRY004
        return cls(data, allowed_subservices)

    def get_service_resource_resolver(self, subservice: str) -> ResourceResolver:
        if self._allowed_subservices is not None and subservice not in self._allowed_subservices:
            msg = f"No service user is mapped for subservice '{subservice}'."
            raise LoginError(msg)
        logger.debug("Opened resource resolver for subservice '%s'", subservice)
        return MappingResourceResolver(self._tree)
