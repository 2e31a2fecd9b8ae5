# gamesolver/config.py
from dataclasses import dataclass, field
from typing import Optional
import os
import tomllib  # python >=3.11

@dataclass
class SearchConfig:
    threads: int = 0  # 0 lets the executor pick (cpu count based)
    parallel: bool = False  # evaluate root moves on a thread pool in Solver.best_moves

@dataclass
class TableConfig:
    max_entries: Optional[int] = None  # None means an unbounded dict
    shards: int = 16  # lock shards of the concurrent table

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    table: TableConfig = field(default_factory=TableConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "gamesolver.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "table"):
            if section in raw:
                target = getattr(cfg, section)
                for k, v in raw[section].items():
                    if hasattr(target, k):
                        setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("GAMESOLVER_CONFIG_TOML", "gamesolver.toml"))
# allow env override of the worker count for quick experiments
try:
    override_threads = os.environ.get("GAMESOLVER_THREADS")
    if override_threads:
        CONFIG.search.threads = int(override_threads)
except ValueError:
    pass
