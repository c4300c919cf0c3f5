from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from recipekit.sinks import CollectingSink, JsonDirectorySink

from modifier_datagen.config import DatagenConfig
from modifier_datagen.datagen import run_definitions
from modifier_datagen.definitions import load_definitions
from modifier_datagen.errors import RecipeConfigError
from modifier_datagen.foundation.config_io import load_config
from modifier_datagen.foundation.logging_utils import setup_logger

EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="modifier-datagen", add_help=True)
    parser.add_argument(
        "--config",
        default=None,
        help="Explicit config.yaml path (otherwise MODIFIER_DATAGEN_CONFIG, or config/config.yaml + config/config.local.yaml).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Write recipe JSON files for a definitions file")
    generate.add_argument("definitions", help="YAML recipe definitions")
    generate.add_argument("--output", default=None, help="Output root (default: datagen.output_path)")

    show = sub.add_parser("show", help="Print the recipe documents for a definitions file")
    show.add_argument("definitions", help="YAML recipe definitions")

    return parser


def _load_datagen_config(config_path: str | None, logger: logging.Logger) -> DatagenConfig:
    try:
        cfg_dict, meta = load_config(config_path)
    except FileNotFoundError:
        if config_path is not None:
            raise
        logger.info("No config file found; using datagen defaults")
        cfg_dict, meta = {}, {"paths": [], "repo_root": None}

    base_dir = meta.get("repo_root")
    if base_dir is None and meta.get("paths"):
        base_dir = str(Path(meta["paths"][0]).parent)
    cfg, warnings = DatagenConfig.from_dict(cfg_dict, base_dir=base_dir)
    for warning in warnings:
        logger.warning("%s", warning)
    if meta.get("paths"):
        logger.debug("Loaded config: %s", ", ".join(meta["paths"]))
    return cfg


def _generate(args: argparse.Namespace, cfg: DatagenConfig, logger: logging.Logger) -> int:
    output = args.output or cfg.output_path
    if not output:
        raise ValueError("No output directory: pass --output or set datagen.output_path")

    definitions = load_definitions(args.definitions, config=cfg)
    sink = JsonDirectorySink(root=output, default_namespace=cfg.namespace)
    summary = run_definitions(definitions, sink)
    logger.info("Wrote %d recipe files under %s", summary.total, output)
    return 0


def _show(args: argparse.Namespace, cfg: DatagenConfig) -> int:
    definitions = load_definitions(args.definitions, config=cfg)
    sink = CollectingSink()
    run_definitions(definitions, sink)
    payload: dict[str, Any] = dict(sink.documents)
    sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logger = setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = _load_datagen_config(args.config, logger)
        if cfg.log_path:
            logger = setup_logger(
                level=logging.DEBUG if args.verbose else logging.INFO, log_path=cfg.log_path
            )

        if args.command == "generate":
            return _generate(args, cfg, logger)
        if args.command == "show":
            return _show(args, cfg)
    except (RecipeConfigError, ValueError, TypeError, FileNotFoundError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return EXIT_CONFIG_ERROR

    raise AssertionError(f"Unhandled command: {args.command}")


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main(sys.argv[1:]))
