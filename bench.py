"""
Benchmark entry point: time the solver on DIMACS files and random formulas.

Usage:
    python bench.py bench.files='[aim-50-1_6-yes1-4.cnf]'
    python bench.py bench.random.count=200 bench.random.var_max=20
    python bench.py bench.pysat_check=true bench.output=results/bench.json
"""

import logging
from itertools import chain

import hydra
from omegaconf import DictConfig, OmegaConf

from dpll_sat.collector import collect_results, file_formulas, random_formulas, save_results
from dpll_sat.config import Config

logger = logging.getLogger(__name__)


def resolve_path(path: str) -> str:
    """Resolve a potentially relative path against the original working directory."""
    return hydra.utils.to_absolute_path(path)


@hydra.main(version_base=None, config_path="configs", config_name="bench")
def main(cfg: DictConfig):
    cfg = OmegaConf.merge(OmegaConf.structured(Config), cfg)
    logger.info("Config:\n%s", OmegaConf.to_yaml(cfg))

    prefix = cfg.dimacs.variable_prefix
    sources = [file_formulas([resolve_path(p) for p in cfg.bench.files], prefix=prefix)]
    if cfg.bench.random.count > 0:
        sources.append(random_formulas(
            count=cfg.bench.random.count,
            var_min=cfg.bench.random.var_min,
            var_max=cfg.bench.random.var_max,
            clause_length=cfg.bench.random.clause_length,
            seed=cfg.bench.random.seed,
            prefix=prefix,
        ))

    data = collect_results(
        chain(*sources),
        config=cfg.solver,
        repeat=cfg.bench.repeat,
        pysat_check=cfg.bench.pysat_check,
    )

    summary = data["summary"]
    logger.info(
        "%d problems (%d SAT, %d UNSAT) in %.2f s, slowest %.2f ms",
        summary["problems"], summary["sat"], summary["unsat"],
        summary["total_elapsed"], summary["max_elapsed"] * 1000
    )

    if cfg.bench.output:
        save_results(data, resolve_path(cfg.bench.output))


if __name__ == "__main__":
    main()
