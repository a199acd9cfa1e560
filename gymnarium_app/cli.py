"""
Gymnarium Application - command line interface.

Sub-commands:
    command_line   every choice is given as an argument
    interactive    every choice is asked for on the terminal
    list           show variants, their options and the compatibility tables
"""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional, Sequence

from . import __version__
from .availables.configuration import Selected, available_configurations, select, split_config
from .availables.registry import parse_variant, variants_of
from .availables.variants import (
    AgentVariant,
    Axis,
    ExitConditionVariant,
    Variant,
    VisualiserVariant,
)
from .compatibility.tables import DEFAULT_MATRIX, describe_matrix
from .compatibility.validator import Selection
from .errors import AssemblyError, GymnariumError, UnknownVariantError
from .runner import RunOptions, run_session
from .session.builder import SessionBuilder

APP_NAME = "Gymnarium Application"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INCOMPATIBLE = 2

# (axis, variant flag, configuration flag, default variant)
_AXIS_ARGUMENTS = (
    (Axis.ENVIRONMENT, ("-e", "--environment"), ("-f", "--environment-configuration"), None),
    (Axis.AGENT, ("-a", "--agent"), ("-b", "--agent-configuration"), AgentVariant.RANDOM),
    (Axis.VISUALISER, ("-v", "--visualiser"), ("-w", "--visualiser-configuration"), VisualiserVariant.NONE),
    (Axis.EXIT_CONDITION, ("-x", "--exit-condition"), ("-y", "--exit-condition-configuration"),
     ExitConditionVariant.EPISODES_SIMULATED),
)


def format_variant(variant: Variant) -> str:
    return f"- {variant.nice_name} ({variant.long_name}, {variant.short_name})"


def format_configuration_options(variant: Variant) -> str:
    options = available_configurations(variant)
    if not options:
        return f"- {variant.nice_name}: n/a"
    lines = [f"- {variant.nice_name}:"]
    for option in options:
        lines.append(f"  > {option.name} [{option.data_type}; default: {option.default}]")
        lines.append(f"    {option.description}")
    return "\n".join(lines)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gymnarium",
        description=f"{APP_NAME}: run an environment with an agent, a visualiser and an exit condition",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("interactive", help="asks every configurable option interactively")
    subparsers.add_parser("list", help="lists variants, their configuration and compatibility")

    p_cli = subparsers.add_parser(
        "command_line",
        help="only accepts command line arguments; see `command_line --help` for help",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    for axis, variant_flags, config_flags, default in _AXIS_ARGUMENTS:
        label = axis.label.lower()
        p_cli.add_argument(
            *variant_flags,
            dest=axis.name.lower(),
            required=default is None,
            default=default.nice_name if default else None,
            metavar=axis.name,
            help=f"specifies the {label}; one of: "
                 + "; ".join(format_variant(v)[2:] for v in variants_of(axis)),
        )
        p_cli.add_argument(
            *config_flags,
            dest=f"{axis.name.lower()}_configuration",
            default="",
            metavar=f"{axis.name}_CONFIGURATION",
            help=f'configures the {label} as "key=value;key=value" ("\\" escapes ";", "=" and "\\")',
        )
    p_cli.add_argument("-s", "--seed", default=None,
                       help="seed string for the random number generators (random if omitted)")
    p_cli.add_argument("-r", "--not-reset-environment-on-done", action="store_true",
                       help="do not reset the environment when an episode is done")
    p_cli.add_argument("-q", "--reset-agent-on-done", action="store_true",
                       help="reset the agent when an episode is done")
    p_cli.add_argument("-j", "--environment-load-path", default=None, metavar="PATH",
                       help="load the environment state from this .json file before the start")
    p_cli.add_argument("-p", "--environment-store-path", default=None, metavar="PATH",
                       help="store the environment state in this .json file after the run")
    p_cli.add_argument("-i", "--agent-load-path", default=None, metavar="PATH",
                       help="load the agent state from this .json file before the start")
    p_cli.add_argument("-o", "--agent-store-path", default=None, metavar="PATH",
                       help="store the agent state in this .json file after the run")
    p_cli.add_argument("--quiet", action="store_true", help="reduce output verbosity")

    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# command_line
# ---------------------------------------------------------------------------

def selection_from_args(args: argparse.Namespace) -> Selection:
    """Resolve variants and their configuration strings from parsed arguments."""
    chosen: Dict[Axis, Selected] = {}
    for axis, _, _, _ in _AXIS_ARGUMENTS:
        variant = parse_variant(axis, getattr(args, axis.name.lower()))
        configuration = split_config(getattr(args, f"{axis.name.lower()}_configuration"))
        chosen[axis] = select(variant, configuration)
    return Selection(
        environment=chosen[Axis.ENVIRONMENT],
        agent=chosen[Axis.AGENT],
        visualiser=chosen[Axis.VISUALISER],
        exit_condition=chosen[Axis.EXIT_CONDITION],
    )


def run_options_from_args(args: argparse.Namespace) -> RunOptions:
    return RunOptions(
        seed=args.seed,
        reset_environment_on_done=not args.not_reset_environment_on_done,
        reset_agent_on_done=args.reset_agent_on_done,
        environment_load_path=args.environment_load_path,
        environment_store_path=args.environment_store_path,
        agent_load_path=args.agent_load_path,
        agent_store_path=args.agent_store_path,
    )


def start(selection: Selection, options: RunOptions, verbose: bool = True,
          builder: Optional[SessionBuilder] = None) -> int:
    """Validate, assemble and run; returns the process exit status."""
    builder = builder or SessionBuilder()
    try:
        outcome = builder.build(selection)
    except AssemblyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if not outcome.is_ready:
        print("The selected combination cannot be run:", file=sys.stderr)
        for message in outcome.validation.messages():
            print(f"  - {message}", file=sys.stderr)
        return EXIT_INCOMPATIBLE

    try:
        run_session(outcome.unwrap(), options, verbose=verbose)
    except (GymnariumError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


# ---------------------------------------------------------------------------
# interactive
# ---------------------------------------------------------------------------

class Prompter:
    """Terminal questions; ``ask`` and ``say`` are injectable for tests."""

    def __init__(self, ask: Callable[[str], str] = input, say: Callable[[str], None] = print):
        self.ask = ask
        self.say = say

    def string(self, prompt_text: str, default: Optional[str], none_text: str) -> Optional[str]:
        self.say("")
        self.say(f"{prompt_text} (Default: {default if default is not None else none_text})")
        answer = self.ask("> ").strip()
        return answer or default

    def yes_no(self, prompt_text: str, default: bool) -> bool:
        self.say("")
        answer = self.ask(f"{prompt_text} ({'YES/no' if default else 'yes/NO'}) ").strip()
        if not answer:
            return default
        return answer.lower().startswith("y")

    def variant(self, axis: Axis, chosen: Sequence[Variant]) -> Selected:
        """Offer the variants compatible with ``chosen`` and ask for its configuration."""
        available = DEFAULT_MATRIX.compatible_variants(axis, chosen)
        unavailable = [v for v in variants_of(axis) if v not in available]

        self.say("")
        self.say(axis.headline)
        self.say("-" * len(axis.headline))
        if not available:
            raise GymnariumError(
                f"There are no {axis.headline.lower()} with the previous selections!"
            )
        for index, variant in enumerate(available):
            self.say(f"<{index}> {variant.nice_name}")
        if unavailable:
            self.say(
                "(Because of your previous choices following elements are not available: "
                + ", ".join(v.nice_name for v in unavailable) + ")"
            )

        while True:
            answer = self.ask("Your choice: ").strip()
            try:
                variant = self._resolve(axis, answer, available)
                break
            except (UnknownVariantError, IndexError, ValueError) as exc:
                self.say(f"Couldn't use {answer!r}: {exc}")

        configuration: Dict[str, str] = {}
        options = available_configurations(variant)
        if options:
            self.say("")
            self.say("There are configuration options for your choice. Please answer them.")
        for option in options:
            self.say("")
            self.say(f"{option.name} [{option.data_type}; default: {option.default}]")
            self.say(option.description)
            answer = self.ask("Your answer: ").strip()
            configuration[option.name] = answer or option.default
        return select(variant, configuration)

    @staticmethod
    def _resolve(axis: Axis, answer: str, available: Sequence[Variant]) -> Variant:
        if answer.isdigit():
            return available[int(answer)]
        variant = parse_variant(axis, answer)
        if variant not in available:
            raise ValueError(f"{variant} is not compatible with the previous choices")
        return variant


def start_interactively(prompter: Optional[Prompter] = None) -> int:
    prompter = prompter or Prompter()
    prompter.say(
        f"{APP_NAME} {__version__}\n\n"
        "In the following steps the necessary configuration values will be collected."
    )

    environment = prompter.variant(Axis.ENVIRONMENT, [])
    visualiser = prompter.variant(Axis.VISUALISER, [environment.variant])
    agent = prompter.variant(Axis.AGENT, [environment.variant, visualiser.variant])
    exit_condition = prompter.variant(
        Axis.EXIT_CONDITION, [environment.variant, visualiser.variant, agent.variant]
    )

    reset_environment_on_done = prompter.yes_no(
        "Should the ENVIRONMENT be reset, when the environment is done after a step?", True
    )
    reset_agent_on_done = prompter.yes_no(
        "Should the AGENT be reset, when the environment is done after a step?", False
    )
    seed = prompter.string("Seed for random number generator", None, "randomly chosen")
    environment_load_path = prompter.string(
        "From which file should the ENVIRONMENT be loaded?", None, "Do not load"
    )
    agent_load_path = prompter.string(
        "From which file should the AGENT be loaded?", None, "Do not load"
    )
    environment_store_path = prompter.string(
        "To which file should the ENVIRONMENT be stored?", environment_load_path, "Do not store"
    )
    agent_store_path = prompter.string(
        "To which file should the AGENT be stored?", agent_load_path, "Do not store"
    )

    selection = Selection(
        environment=environment, agent=agent, visualiser=visualiser, exit_condition=exit_condition
    )
    options = RunOptions(
        seed=seed,
        reset_environment_on_done=reset_environment_on_done,
        reset_agent_on_done=reset_agent_on_done,
        environment_load_path=environment_load_path,
        environment_store_path=environment_store_path,
        agent_load_path=agent_load_path,
        agent_store_path=agent_store_path,
    )
    return start(selection, options)


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------

def list_availables(say: Callable[[str], None] = print) -> int:
    for axis in Axis:
        say(axis.headline)
        say("-" * len(axis.headline))
        for variant in variants_of(axis):
            say(format_variant(variant))
        say("")
        say("Configuration options:")
        for variant in variants_of(axis):
            say(format_configuration_options(variant))
        say("")
    say("Compatibility")
    say("-------------")
    say(describe_matrix())
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.command == "list":
        return list_availables()

    try:
        if args.command == "interactive":
            return start_interactively()
        selection = selection_from_args(args)
        options = run_options_from_args(args)
    except GymnariumError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    return start(selection, options, verbose=not args.quiet)


if __name__ == "__main__":
    sys.exit(main())
