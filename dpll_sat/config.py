"""
Configuration for the solver, the DIMACS front end and the benchmark harness.

Defaults live in the dataclasses below. load_config() layers a YAML file and
dotlist overrides (e.g. "solver.verify=false") on top of them with OmegaConf,
which also type-checks every value against the dataclass fields.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from omegaconf import DictConfig, OmegaConf


@dataclass
class SolverConfig:
    use_feasibility_check: bool = True  # prune branches that contradict a unit clause
    verify: bool = True                 # check every witness against the input formula
    recursion_limit: int = 10000        # search depth grows with the variable count
    trace: bool = False


@dataclass
class DimacsConfig:
    variable_prefix: str = "x"


@dataclass
class RandomFormulaConfig:
    count: int = 0
    var_min: int = 5
    var_max: int = 15
    clause_length: int = 3
    seed: Optional[int] = None


@dataclass
class BenchConfig:
    files: List[str] = field(default_factory=list)
    random: RandomFormulaConfig = field(default_factory=RandomFormulaConfig)
    repeat: int = 1
    pysat_check: bool = False
    output: Optional[str] = None


@dataclass
class Config:
    solver: SolverConfig = field(default_factory=SolverConfig)
    dimacs: DimacsConfig = field(default_factory=DimacsConfig)
    bench: BenchConfig = field(default_factory=BenchConfig)
    log_level: str = "INFO"


def default_config() -> DictConfig:
    """Structured config holding every default."""
    return OmegaConf.structured(Config)


def load_config(path: Optional[str] = None, overrides: Iterable[str] = ()) -> DictConfig:
    """
    Build the effective configuration.

    Args:
        path: Optional YAML file merged over the defaults.
        overrides: Dotlist entries such as "solver.trace=true", applied last.

    Returns:
        The merged DictConfig.
    """
    cfg = default_config()
    if path:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
    overrides = list(overrides)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
    return cfg
