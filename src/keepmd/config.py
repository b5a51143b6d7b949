"""Configuration management for keepmd."""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "namespace_root": "06-google-keep",
    "nest_labels": False,
    "labels_file": None,
    "max_filename_length": 50,
}

LABELS_FILE_NAME = "Labels.txt"
# Numbered listings prefix each label with its line number and an arrow.
NUMBERED_LINE_RE = re.compile(r"^\s*\d+→(.*)$")


def _find_config_file() -> Path | None:
    """Look for config.yaml in standard locations."""
    candidates = [
        Path.cwd() / "config" / "config.yaml",
        Path.cwd() / "config.yaml",
        Path.home() / ".keepmd" / "config.yaml",
    ]
    for p in candidates:
        if p.exists():
            return p
    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging defaults with file and env vars."""
    cfg = dict(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else _find_config_file()
    if path and path.exists():
        with open(path, encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
        if not isinstance(file_cfg, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        cfg.update(file_cfg)

    # Env overrides
    if root := os.environ.get("KEEPMD_NAMESPACE_ROOT"):
        cfg["namespace_root"] = root

    if cfg.get("labels_file"):
        cfg["labels_file"] = str(Path(cfg["labels_file"]).expanduser().resolve())

    return cfg


def find_labels_file(input_dir: str | Path | None = None) -> Path | None:
    """Look for Labels.txt in the working directory, then the export itself."""
    candidates = [Path.cwd() / LABELS_FILE_NAME]
    if input_dir:
        candidates.append(Path(input_dir) / LABELS_FILE_NAME)
    for p in candidates:
        if p.is_file():
            return p
    return None


def load_valid_labels(labels_path: str | Path | None) -> list[str]:
    """Read raw label names, one per line.

    A missing file is not an error: it yields no labels, so every hashtag in
    note content will be escaped.
    """
    if not labels_path or not Path(labels_path).is_file():
        logger.warning(f"{LABELS_FILE_NAME} not found, every hashtag in note content will be escaped")
        return []

    labels = []
    text = Path(labels_path).read_text(encoding="utf-8", errors="replace")
    for line in text.splitlines():
        if match := NUMBERED_LINE_RE.match(line):
            line = match.group(1)
        line = line.strip()
        if line:
            labels.append(line)

    logger.info(f"Loaded {len(labels)} valid labels from {labels_path}")
    return labels

