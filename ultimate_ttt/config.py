from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from ultimate_ttt.mcts import MCTSConfig


@dataclass
class ExperimentConfig:
    episodes: int = 1000
    workers: int = 1
    seed: Optional[int] = None
    mcts_config: MCTSConfig = field(default_factory=MCTSConfig)
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, cfg: Dict) -> "ExperimentConfig":
        mcts_cfg = dict(cfg.get("mcts") or {})
        return cls(
            episodes=int(cfg.get("episodes", cls.episodes)),
            workers=int(cfg.get("workers", cls.workers)),
            seed=cfg.get("seed"),
            mcts_config=MCTSConfig(**mcts_cfg),
            log_file=cfg.get("log_file"),
        )


def load_yaml_config(path_str: Optional[str]) -> Dict:
    """Read a YAML mapping; a missing file yields an empty config."""
    if not path_str:
        return {}
    path = Path(path_str)
    if not path.exists():
        return {}
    cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    return cfg
