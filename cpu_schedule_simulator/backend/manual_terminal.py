
from __future__ import annotations

import shlex
from typing import Dict, List, Optional
from colorama import Fore, Style, init as colorama_init

from .core import Workload, WorkloadValidationError
from .os_kernel import OSKernel, KernelConfig
from .simulator import SimulationResult
from .utils import format_schedule, format_average

PROMPT = "Enter process arrival times and burst lengths: "
RULE = "-" * 69
QUIT_WORDS = {"q", "quit", "exit"}


class ManualTerminal:
    def __init__(self, config: KernelConfig | None = None) -> None:
        self.kernel = OSKernel(config)
        self.last_results: Optional[Dict[str, SimulationResult]] = None

    def prompt(self) -> None:
        while True:
            try:
                raw = input(Fore.GREEN + "\n" + PROMPT + Style.RESET_ALL)
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if raw.strip().lower() in QUIT_WORDS:
                break
            if not raw.strip():
                continue
            self.handle_command(raw)
            print(RULE)
        print("Good-bye!")

    def handle_command(self, raw: str) -> None:
        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(Fore.RED + f"ERROR! {e}" + Style.RESET_ALL)
            return
        if not parts:
            return
        cmd, *args = parts
        cmd = cmd.lower()
        if cmd == "help":
            self._help()
        elif cmd == "table":
            self._table()
        elif cmd == "plot":
            self._plot(args)
        else:
            self._run(parts)

    def _help(self) -> None:
        print("Commands:")
        print("  <arrival> <burst> [<arrival> <burst> ...]   simulate a workload, e.g. 0 7 2 4")
        print("  table          compare the policies of the last run")
        print("  plot <dir>     save Gantt charts of the last run")
        print("  q              quit")

    def _run(self, tokens: List[str]) -> None:
        try:
            workload = Workload.from_tokens(tokens)
        except WorkloadValidationError as e:
            print(Fore.RED + f"ERROR! {e}" + Style.RESET_ALL)
            return

        self.last_results = self.kernel.run(workload)
        print()
        for policy, result in self.last_results.items():
            print(Style.BRIGHT + f"{policy}: " + Style.RESET_ALL + format_schedule(result.schedule))
            print(f"Average Waiting Time: {format_average(result.avg_waiting_time, self.kernel.config.precision)}")
            print()

    def _table(self) -> None:
        if not self.last_results:
            print("No simulation yet")
            return
        from .report import results_frame

        df = results_frame(self.last_results)
        print(df.to_string(float_format=lambda v: format_average(v, self.kernel.config.precision)))

    def _plot(self, args: List[str]) -> None:
        if not self.last_results:
            print("No simulation yet")
            return
        if not args:
            print(Fore.RED + "Usage: plot <dir>" + Style.RESET_ALL)
            return
        self.kernel.plot(self.last_results, args[0])
        print(Fore.CYAN + f"Saved plots to {args[0]}" + Style.RESET_ALL)


def run_terminal(config: KernelConfig | None = None) -> None:
    colorama_init()
    ManualTerminal(config).prompt()


def main() -> None:
    run_terminal()


if __name__ == "__main__":
    main()
