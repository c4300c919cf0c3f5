"""Strict mapping reader with consumed-keys enforcement for `recipekit` definitions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable

_MISSING = object()


def _join_path(parent: str, key: str) -> str:
    if not parent:
        return key
    return f"{parent}.{key}"


@dataclass
class ConfigNamespace:
    """Reads typed values out of a mapping and remembers which keys were read.

    `assert_consumed()` fails on any key nobody asked for, so typos in YAML
    definitions surface as errors instead of silently doing nothing.
    """

    data: Mapping[str, Any]
    path: str
    _consumed: set[str] = field(default_factory=set, init=False, repr=False)
    _children: dict[str, "ConfigNamespace"] = field(default_factory=dict, init=False, repr=False)

    def consumed_keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._consumed))

    def unconsumed_keys(self) -> tuple[str, ...]:
        return tuple(sorted(str(k) for k in self.data.keys() if k not in self._consumed))

    def assert_consumed(self) -> None:
        unknown = list(self.unconsumed_keys())
        if unknown:
            path = self.path or "<root>"
            consumed = ", ".join(self.consumed_keys()) or "<none>"
            raise ValueError(
                f"Unknown config keys under {path}: {', '.join(unknown)} (consumed: {consumed})"
            )
        for child in self._children.values():
            child.assert_consumed()

    def has(self, key: str) -> bool:
        return key.strip() in self.data

    def _key(self, key: str) -> str:
        if not isinstance(key, str) or not key.strip():
            raise TypeError("ConfigNamespace key must be a non-empty string")
        normalized = key.strip()
        if normalized in self._children:
            raise ValueError(
                f"{_join_path(self.path, normalized)} already accessed as a nested namespace"
            )
        return normalized

    def get_raw(self, key: str, *, default: Any = _MISSING) -> Any:
        normalized = self._key(key)
        if normalized not in self.data:
            if default is _MISSING:
                raise ValueError(f"Missing required config key: {_join_path(self.path, normalized)}")
            self._consumed.add(normalized)
            return default

        self._consumed.add(normalized)
        return self.data.get(normalized)

    def child_path(self, key: str) -> str:
        return _join_path(self.path, key.strip())

    def namespace(
        self,
        key: str,
        *,
        default: Mapping[str, Any] | None | object = _MISSING,
    ) -> "ConfigNamespace":
        normalized = (key or "").strip()
        if not normalized:
            raise TypeError("ConfigNamespace key must be a non-empty string")
        if normalized in self._children:
            return self._children[normalized]

        child_path = _join_path(self.path, normalized)
        raw = self.data.get(normalized)
        if raw is None:
            if default is _MISSING:
                raise ValueError(f"Missing required config namespace: {child_path}")
            if default is not None and not isinstance(default, Mapping):
                raise TypeError(f"default for {child_path} must be a mapping or None")
            raw = dict(default or {})
        elif not isinstance(raw, Mapping):
            raise TypeError(f"{child_path} must be a mapping (type={type(raw).__name__})")

        self._consumed.add(normalized)
        child = ConfigNamespace(dict(raw), path=child_path)
        self._children[normalized] = child
        return child

    def get_bool(self, key: str, *, default: bool | object = _MISSING) -> bool:
        if default is not _MISSING and not isinstance(default, bool):
            raise TypeError(f"{self.child_path(key)} default must be a boolean")

        value = self.get_raw(key, default=default)
        if not isinstance(value, bool):
            raise TypeError(
                f"{self.child_path(key)} must be a boolean (type={type(value).__name__})"
            )
        return value

    def get_int(
        self,
        key: str,
        *,
        default: int | object = _MISSING,
        min_value: int | None = None,
    ) -> int:
        if default is not _MISSING and (isinstance(default, bool) or not isinstance(default, int)):
            raise TypeError(f"{self.child_path(key)} default must be an int")

        raw = self.get_raw(key, default=default)
        if raw is default and default is not _MISSING:
            return int(default)  # type: ignore[arg-type]
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(
                f"{self.child_path(key)} must be an int (type={type(raw).__name__})"
            )
        value = int(raw)
        if min_value is not None and value < int(min_value):
            raise ValueError(f"{self.child_path(key)} must be >= {int(min_value)} (got {value})")
        return value

    def get_optional_int(self, key: str) -> int | None:
        """Parse an int that may be missing or explicitly null.

        Range checks are left to the caller: recipe builders own their own
        constraints and report them with their own error types.
        """

        raw = self.get_raw(key, default=None)
        if raw is None:
            return None
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeError(
                f"{self.child_path(key)} must be an int or null (type={type(raw).__name__})"
            )
        return int(raw)

    def get_str(
        self,
        key: str,
        *,
        default: str | None | object = _MISSING,
        choices: Iterable[str] | None = None,
    ) -> str | None:
        if default is not _MISSING and default is not None and not isinstance(default, str):
            raise TypeError(f"{self.child_path(key)} default must be a string or None")

        raw = self.get_raw(key, default=default)
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise TypeError(
                f"{self.child_path(key)} must be a string (type={type(raw).__name__})"
            )
        value = raw.strip()
        if not value:
            raise ValueError(f"{self.child_path(key)} cannot be empty")
        if choices is not None:
            choice_set = {str(item).strip() for item in choices if str(item).strip()}
            if value not in choice_set:
                allowed = ", ".join(sorted(choice_set)) or "<none>"
                raise ValueError(
                    f"{self.child_path(key)} must be one of: {allowed} (got {value!r})"
                )
        return value

    def get_list_str(self, key: str) -> list[str]:
        raw = self.get_raw(key)
        if not isinstance(raw, (list, tuple)):
            raise TypeError(
                f"{self.child_path(key)} must be a list[str] (type={type(raw).__name__})"
            )

        items: list[str] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, str):
                raise TypeError(
                    f"{self.child_path(key)}[{idx}] must be a string (type={type(item).__name__})"
                )
            trimmed = item.strip()
            if not trimmed:
                raise ValueError(f"{self.child_path(key)}[{idx}] cannot be empty")
            items.append(trimmed)

        if not items:
            raise ValueError(f"{self.child_path(key)} cannot be empty")
        return items

    def get_list_mapping(
        self,
        key: str,
        *,
        default: list[Mapping[str, Any]] | object = _MISSING,
        allow_empty: bool = False,
    ) -> list[dict[str, Any]]:
        """Parse a list of mapping objects (converted to dicts)."""

        raw = self.get_raw(key, default=default)
        if raw is default and default is not _MISSING:
            raw = list(default)  # type: ignore[arg-type]

        if not isinstance(raw, (list, tuple)):
            raise TypeError(
                f"{self.child_path(key)} must be a list[dict] (type={type(raw).__name__})"
            )

        items: list[dict[str, Any]] = []
        for idx, item in enumerate(raw):
            if not isinstance(item, Mapping):
                raise TypeError(
                    f"{self.child_path(key)}[{idx}] must be a mapping (type={type(item).__name__})"
                )
            items.append(dict(item))

        if not items and not allow_empty:
            raise ValueError(f"{self.child_path(key)} cannot be empty")
        return items
