from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
from pathlib import Path

from .core import Workload
from .schedulers import Scheduler, normalize_policy
from .simulator import simulate, SimulationResult


@dataclass
class KernelConfig:
    policies: Tuple[str, ...] = Scheduler.ALL
    precision: int = 2
    export_dir: Optional[str] = None
    plot_dir: Optional[str] = None


class OSKernel:
    """Runs one workload under every configured policy.

    Each policy gets a fresh copy of the workload, since a simulation run
    consumes the process records it is given.
    """

    def __init__(self, config: KernelConfig | None = None):
        self.config = config or KernelConfig()
        self.config.policies = tuple(normalize_policy(p) for p in self.config.policies)

    def run(self, workload: Union[Workload, Iterable[Sequence[int]]]) -> Dict[str, SimulationResult]:
        if not isinstance(workload, Workload):
            workload = Workload.from_pairs(workload)

        results: Dict[str, SimulationResult] = {}
        for policy in self.config.policies:
            results[policy] = simulate(workload.fresh(), policy)

        if self.config.export_dir:
            self.export(results, self.config.export_dir)
        if self.config.plot_dir:
            self.plot(results, self.config.plot_dir)
        return results

    @staticmethod
    def export(results: Dict[str, SimulationResult], out_dir: str) -> None:
        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)
        for policy, result in results.items():
            base = out / policy.lower()
            result.logger.export_json(str(base.with_suffix(".json")))
            result.logger.export_csv(str(base))

    @staticmethod
    def plot(results: Dict[str, SimulationResult], out_dir: str) -> None:
        from .visualizer import plot_gantt, plot_waiting_comparison

        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)
        for policy, result in results.items():
            plot_gantt(result, str(out / f"{policy.lower()}_gantt.png"))
        plot_waiting_comparison(results, str(out / "avg_waiting.png"))
