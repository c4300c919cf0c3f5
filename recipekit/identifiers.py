from __future__ import annotations

import re
from dataclasses import dataclass

_NAMESPACE_RE = re.compile(r"^[a-z0-9_.-]+$")
_PATH_RE = re.compile(r"^[a-z0-9_./-]+$")


@dataclass(frozen=True)
class Identifier:
    """Namespaced id (`namespace:path`). A missing namespace prints as the bare path."""

    path: str
    namespace: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path.strip():
            raise TypeError("Identifier.path must be a non-empty string")
        path = self.path.strip()
        if not _PATH_RE.match(path):
            raise ValueError(f"Invalid identifier path: {self.path!r}")
        if any(segment in ("", ".", "..") for segment in path.split("/")):
            raise ValueError(f"Invalid identifier path segment: {self.path!r}")
        object.__setattr__(self, "path", path)

        if self.namespace is not None:
            if not isinstance(self.namespace, str) or not self.namespace.strip():
                raise TypeError("Identifier.namespace must be a non-empty string or None")
            namespace = self.namespace.strip()
            if not _NAMESPACE_RE.match(namespace):
                raise ValueError(f"Invalid identifier namespace: {self.namespace!r}")
            object.__setattr__(self, "namespace", namespace)

    @classmethod
    def parse(cls, raw: "str | Identifier") -> "Identifier":
        if isinstance(raw, Identifier):
            return raw
        if not isinstance(raw, str) or not raw.strip():
            raise TypeError("identifier must be a non-empty string")
        text = raw.strip()
        if ":" in text:
            namespace, path = text.split(":", 1)
            return cls(path=path, namespace=namespace)
        return cls(path=text)

    def with_namespace(self, default: str) -> "Identifier":
        if self.namespace is not None:
            return self
        return Identifier(path=self.path, namespace=default)

    def prefixed(self, prefix: str) -> "Identifier":
        return Identifier(path=f"{prefix}{self.path}", namespace=self.namespace)

    def __str__(self) -> str:
        if self.namespace is None:
            return self.path
        return f"{self.namespace}:{self.path}"


@dataclass(frozen=True)
class ItemTag:
    """Reference to a named group of items, resolved by the crafting engine."""

    id: Identifier

    @classmethod
    def of(cls, raw: "str | Identifier") -> "ItemTag":
        return cls(id=Identifier.parse(raw))

    def __str__(self) -> str:
        return str(self.id)
