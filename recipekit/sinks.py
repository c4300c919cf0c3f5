"""Document sinks: where finished recipe documents go.

Builders call `accept(identifier, document)` exactly once per finished
document. Uniqueness of identifiers within a run is the sink's concern.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Protocol

from recipekit.identifiers import Identifier

logger = logging.getLogger(__name__)


class DocumentSink(Protocol):
    def accept(self, identifier: Identifier, document: Mapping[str, Any]) -> None:
        ...


@dataclass
class CollectingSink:
    """In-memory sink; keeps documents in insertion order."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)

    def accept(self, identifier: Identifier, document: Mapping[str, Any]) -> None:
        key = str(identifier)
        if key in self.documents:
            raise ValueError(f"Duplicate recipe id: {key}")
        self.documents[key] = dict(document)

    def get(self, identifier: "Identifier | str") -> dict[str, Any]:
        key = str(identifier)
        document = self.documents.get(key)
        if document is None:
            available = ", ".join(self.documents) or "<none>"
            raise KeyError(f"Unknown recipe id: {key} (available: {available})")
        return document

    def ids(self) -> tuple[str, ...]:
        return tuple(self.documents)

    def __len__(self) -> int:
        return len(self.documents)


@dataclass
class JsonDirectorySink:
    """Writes `<root>/<namespace>/recipes/<path>.json`.

    Identifiers without a namespace are written under `default_namespace`.
    """

    root: str | os.PathLike[str]
    default_namespace: str
    folder: str = "recipes"
    written: list[Path] = field(default_factory=list, init=False)
    _seen: set[str] = field(default_factory=set, init=False, repr=False)

    def path_for(self, identifier: Identifier) -> Path:
        resolved = identifier.with_namespace(self.default_namespace)
        return Path(self.root) / str(resolved.namespace) / self.folder / f"{resolved.path}.json"

    def accept(self, identifier: Identifier, document: Mapping[str, Any]) -> None:
        key = str(identifier.with_namespace(self.default_namespace))
        if key in self._seen:
            raise ValueError(f"Duplicate recipe id: {key}")
        self._seen.add(key)

        out_path = self.path_for(identifier)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with out_path.open("w", encoding="utf-8") as handle:
            json.dump(dict(document), handle, ensure_ascii=False, indent=2)
            handle.write("\n")
        self.written.append(out_path)
        logger.debug("Wrote recipe %s -> %s", key, out_path)
