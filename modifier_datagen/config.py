from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from recipekit.config_namespace import ConfigNamespace

DEFAULT_NAMESPACE = "tconstruct"
DEFAULT_RECIPE_FOLDER = "tools/modifiers/"
DEFAULT_SALVAGE_FOLDER = "tools/modifiers/salvage/"


@dataclass(frozen=True)
class DatagenConfig:
    namespace: str
    output_path: str | None
    recipe_folder: str
    salvage_folder: str
    log_path: str | None
    strict: bool

    @staticmethod
    def from_dict(
        cfg: Mapping[str, Any], *, base_dir: str | None = None
    ) -> tuple["DatagenConfig", list[str]]:
        """
        Parse the `datagen:` section, returning (DatagenConfig, warnings).

        Unknown keys are warnings unless `datagen.strict` is true.

        Raises:
            ValueError/TypeError: if a key is missing or has the wrong type.
        """

        if not isinstance(cfg, Mapping):
            raise ValueError("Config must be a mapping")

        warnings: list[str] = []
        root = ConfigNamespace(cfg, path="")
        ns = root.namespace("datagen", default=None)

        strict = ns.get_bool("strict", default=False)
        namespace = ns.get_str("namespace", default=DEFAULT_NAMESPACE)
        recipe_folder = _normalize_folder(ns.get_str("recipe_folder", default=DEFAULT_RECIPE_FOLDER))
        salvage_folder = _normalize_folder(ns.get_str("salvage_folder", default=DEFAULT_SALVAGE_FOLDER))
        output_path = _normalize_path(ns.get_str("output_path", default=None), base_dir)
        log_path = _normalize_path(ns.get_str("log_path", default=None), base_dir)

        if recipe_folder == salvage_folder:
            raise ValueError(
                "datagen.recipe_folder and datagen.salvage_folder must differ "
                f"(both {recipe_folder!r})"
            )

        unknown = [f"datagen.{key}" for key in ns.unconsumed_keys()]
        unknown.extend(root.unconsumed_keys())
        if unknown:
            if strict:
                raise ValueError("Unknown config keys: " + ", ".join(sorted(unknown)))
            warnings.extend(f"Unknown config key: {key}" for key in sorted(unknown))

        return (
            DatagenConfig(
                namespace=str(namespace),
                output_path=output_path,
                recipe_folder=recipe_folder,
                salvage_folder=salvage_folder,
                log_path=log_path,
                strict=strict,
            ),
            warnings,
        )


def _normalize_folder(value: str | None) -> str:
    folder = (value or "").strip().strip("/")
    return f"{folder}/" if folder else ""


def _normalize_path(value: str | None, base_dir: str | None) -> str | None:
    if value is None:
        return None
    expanded = os.path.expandvars(os.path.expanduser(value))
    if not os.path.isabs(expanded) and base_dir:
        expanded = os.path.join(base_dir, expanded)
    return os.path.abspath(expanded)
