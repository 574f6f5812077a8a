"""Route catalog: the navigable pages of an application and their modules.

The catalog is owned by the routing layer. The same catalog instance is
handed to the router and to the permission resolver so the two never drift
apart.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class RouteEntry:
    """A navigable page.

    A ``module`` of None marks a route that no role may access.
    """

    path: str
    module: Optional[str] = None
    label: str = ""
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "module": self.module,
            "label": self.label,
            "icon": self.icon,
        }


def normalize_path(path: Any) -> Optional[str]:
    """Normalize a request path for catalog lookups.

    Drops surrounding whitespace, any query string or fragment, and a
    trailing slash (except for the root). Returns None for non-strings and
    empty paths.
    """
    if not isinstance(path, str):
        return None
    path = path.strip()
    for sep in ("?", "#"):
        path = path.split(sep, 1)[0]
    if not path:
        return None
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


class RouteCatalog:
    """Ordered, immutable sequence of :class:`RouteEntry` records."""

    def __init__(self, entries: Iterable[Union[RouteEntry, Mapping[str, Any]]] = ()):
        parsed = []
        for entry in entries:
            parsed.append(_parse_entry(entry))
        self._entries: Tuple[RouteEntry, ...] = tuple(parsed)

        # A path may repeat only with the same module
        index: Dict[str, Optional[str]] = {}
        for entry in self._entries:
            key = normalize_path(entry.path)
            if key in index and index[key] != entry.module:
                raise ConfigurationError(
                    f"Route {key!r} is mapped to both {index[key]!r} and {entry.module!r}"
                )
            index.setdefault(key, entry.module)
        self._modules = index

    @classmethod
    def coerce(cls, catalog: Any) -> "RouteCatalog":
        """Return ``catalog`` as a RouteCatalog, building one if needed."""
        if isinstance(catalog, RouteCatalog):
            return catalog
        if catalog is None:
            return cls()
        return cls(catalog)

    @property
    def entries(self) -> Tuple[RouteEntry, ...]:
        return self._entries

    def module_for(self, path: Any) -> Optional[str]:
        """Get the module a route maps to, or None if it is unmapped."""
        key = normalize_path(path)
        if key is None:
            return None
        return self._modules.get(key)

    def paths(self) -> list[str]:
        return [entry.path for entry in self._entries]

    def to_list(self) -> list[dict]:
        return [entry.to_dict() for entry in self._entries]

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> RouteEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"RouteCatalog({len(self._entries)} entries)"


def _parse_entry(entry: Union[RouteEntry, Mapping[str, Any]]) -> RouteEntry:
    if isinstance(entry, RouteEntry):
        if normalize_path(entry.path) is None:
            raise ConfigurationError(f"Route entry has an invalid path: {entry.path!r}")
        return entry
    if not isinstance(entry, Mapping):
        raise ConfigurationError(
            f"Route entry must be a mapping, got {type(entry).__name__}"
        )

    path = entry.get("path")
    if normalize_path(path) is None:
        raise ConfigurationError(f"Route entry has an invalid path: {path!r}")

    module = entry.get("module")
    if module is not None and (not isinstance(module, str) or not module):
        raise ConfigurationError(f"Route {path!r} has an invalid module: {module!r}")

    return RouteEntry(
        path=path,
        module=module,
        label=str(entry.get("label") or ""),
        icon=entry.get("icon"),
    )
