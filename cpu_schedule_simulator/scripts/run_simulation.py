
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from cpu_schedule_simulator.backend.core import Workload, WorkloadValidationError
from cpu_schedule_simulator.backend.schedulers import Scheduler
from cpu_schedule_simulator.backend.os_kernel import OSKernel, KernelConfig
from cpu_schedule_simulator.backend.utils import format_schedule, format_average, generate_workload
from cpu_schedule_simulator.backend.manual_terminal import run_terminal


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Single-core CPU scheduling simulator (FCFS, SJF, SRTF)")
    p.add_argument("workload", nargs="*", help="Arrival time and burst length pairs, e.g. 0 7 2 4")
    p.add_argument("--policy", choices=[*Scheduler.ALL, "ALL"], default="ALL")
    p.add_argument("--random", type=int, default=None, metavar="N", help="Simulate N synthetic processes")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--precision", type=int, default=2)
    p.add_argument("--table", action="store_true", help="Print a comparison table")
    p.add_argument("--export", type=str, default=None, metavar="DIR", help="Write event logs (JSON/CSV)")
    p.add_argument("--plot", type=str, default=None, metavar="DIR", help="Write Gantt charts")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    policies = Scheduler.ALL if args.policy == "ALL" else (args.policy,)
    config = KernelConfig(policies=policies, precision=args.precision, export_dir=args.export, plot_dir=args.plot)

    if args.random is None and not args.workload:
        run_terminal(config)
        return 0

    try:
        if args.random is not None:
            workload = Workload.from_pairs(generate_workload(args.random, args.seed))
        else:
            workload = Workload.from_tokens(args.workload)
    except WorkloadValidationError as e:
        print(f"ERROR! {e}", file=sys.stderr)
        return 2

    results = OSKernel(config).run(workload)
    for policy, result in results.items():
        print(f"{policy}: {format_schedule(result.schedule)}")
        print(f"Average Waiting Time: {format_average(result.avg_waiting_time, args.precision)}")
        print()

    if args.table:
        from cpu_schedule_simulator.backend.report import results_frame
        print(results_frame(results).to_string(float_format=lambda v: format_average(v, args.precision)))
    if args.export:
        print(f"Logs written to {args.export}")
    if args.plot:
        print(f"Plots written to {args.plot}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
