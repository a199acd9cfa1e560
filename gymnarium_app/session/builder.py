"""
Session Builder

Turns a selection into a Session.  The combination is validated again
before anything is constructed; an invalid one yields a REJECTED
AssemblyResult carrying every violation.  Construction is all-or-nothing:
if any variant implementation fails, the parts already built are closed
and AssemblyError is raised.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, List, Mapping, Optional, Union

from ..agents.base import AgentBehavior
from ..agents.input_agent import InputAgent
from ..agents.random_agent import RandomAgent
from ..availables.configuration import select
from ..availables.variants import (
    AgentVariant,
    Axis,
    EnvironmentVariant,
    ExitConditionVariant,
    Variant,
    VisualiserVariant,
)
from ..compatibility.tables import DEFAULT_MATRIX, CompatibilityMatrix
from ..compatibility.validator import Combination, Selection, ValidationResult, validate_combination
from ..environments.ai_learns_to_drive import AiLearnsToDriveEnvironment
from ..environments.base import EnvironmentBehavior
from ..environments.mountain_car import MountainCarEnvironment
from ..errors import AssemblyError, IncompatibleCombinationError
from ..exit_conditions.base import ExitConditionBehavior
from ..exit_conditions.episodes_simulated import EpisodesSimulated
from ..exit_conditions.visualiser_closed import VisualiserClosed
from ..visualisers.base import VisualiserBehavior
from ..visualisers.none import NoVisualiser
from ..visualisers.piston_2d import PistonIn2dVisualiser
from .session import Session

EnvironmentFactory = Callable[[Any], EnvironmentBehavior]
VisualiserFactory = Callable[[Any], VisualiserBehavior]
AgentFactory = Callable[[Any, EnvironmentBehavior, VisualiserBehavior], AgentBehavior]
ExitConditionFactory = Callable[[Any], ExitConditionBehavior]


class RunState(Enum):
    """Life cycle of a requested run up to the point the core hands it off."""
    REQUESTED = auto()
    VALIDATING = auto()
    VALID = auto()
    INVALID = auto()
    ASSEMBLING = auto()
    READY = auto()       # terminal
    REJECTED = auto()    # terminal


@dataclass
class AssemblyResult:
    validation: ValidationResult
    state: RunState
    history: List[RunState] = field(default_factory=list)
    session: Optional[Session] = None

    @property
    def is_ready(self) -> bool:
        return self.state is RunState.READY

    def unwrap(self) -> Session:
        """The session, or IncompatibleCombinationError when rejected."""
        if self.session is None:
            raise IncompatibleCombinationError(self.validation)
        return self.session


@dataclass(frozen=True)
class VariantFactories:
    """Constructors of the variant implementations, keyed by variant identity."""
    environments: Mapping[EnvironmentVariant, EnvironmentFactory]
    agents: Mapping[AgentVariant, AgentFactory]
    visualisers: Mapping[VisualiserVariant, VisualiserFactory]
    exit_conditions: Mapping[ExitConditionVariant, ExitConditionFactory]

    def lookup(self, variant: Variant) -> Callable[..., Any]:
        table = {
            Axis.ENVIRONMENT: self.environments,
            Axis.AGENT: self.agents,
            Axis.VISUALISER: self.visualisers,
            Axis.EXIT_CONDITION: self.exit_conditions,
        }[variant.axis]
        try:
            return table[variant]
        except KeyError:
            raise AssemblyError(variant, "no implementation registered") from None


def _input_agent(settings, environment: EnvironmentBehavior, visualiser: VisualiserBehavior) -> InputAgent:
    return InputAgent(visualiser.input_provider(), environment.input_to_action_mapper())


def default_factories() -> VariantFactories:
    return VariantFactories(
        environments={
            EnvironmentVariant.GYM_MOUNTAIN_CAR:
                lambda s: MountainCarEnvironment(goal_velocity=s.goal_velocity),
            EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE:
                lambda s: AiLearnsToDriveEnvironment(
                    sensor_lines_visible=s.sensor_lines_visible,
                    track_visible=s.track_visible,
                ),
        },
        agents={
            AgentVariant.RANDOM: lambda s, environment, visualiser: RandomAgent(environment.action_space),
            AgentVariant.INPUT: _input_agent,
        },
        visualisers={
            VisualiserVariant.NONE: lambda s: NoVisualiser(),
            VisualiserVariant.PISTON_IN_2D:
                lambda s: PistonIn2dVisualiser(s.window_title, s.window_dimension),
        },
        exit_conditions={
            ExitConditionVariant.EPISODES_SIMULATED: lambda s: EpisodesSimulated(s.count_of_episodes),
            ExitConditionVariant.VISUALISER_CLOSED: lambda s: VisualiserClosed(),
        },
    )


def selection_with_defaults(combination: Combination) -> Selection:
    """Selection using every variant's default configuration."""
    return Selection(
        environment=select(combination.environment),
        agent=select(combination.agent),
        visualiser=select(combination.visualiser),
        exit_condition=select(combination.exit_condition),
    )


class SessionBuilder:
    """
    Assembles sessions from selections.

    Args:
        factories: Variant implementations; defaults to the built-in ones.
        matrix: Compatibility tables used for the validation gate.
    """

    def __init__(
        self,
        factories: Optional[VariantFactories] = None,
        matrix: CompatibilityMatrix = DEFAULT_MATRIX,
    ):
        self.factories = factories or default_factories()
        self.matrix = matrix

    def build(self, request: Union[Selection, Combination]) -> AssemblyResult:
        """
        Validate and, when valid, assemble a session.

        Returns:
            AssemblyResult in state READY (with a session) or REJECTED (with
            the violations).

        Raises:
            AssemblyError: if a variant implementation could not be built.
        """
        selection = request if isinstance(request, Selection) else selection_with_defaults(request)
        history = [RunState.REQUESTED, RunState.VALIDATING]

        validation = validate_combination(selection.combination(), self.matrix)
        if not validation.is_valid:
            history += [RunState.INVALID, RunState.REJECTED]
            return AssemblyResult(validation, RunState.REJECTED, history)

        history += [RunState.VALID, RunState.ASSEMBLING]
        session = self._assemble(selection)
        history.append(RunState.READY)
        return AssemblyResult(validation, RunState.READY, history, session)

    def _assemble(self, selection: Selection) -> Session:
        built: List[Any] = []

        def construct(selected, *args):
            factory = self.factories.lookup(selected.variant)
            try:
                instance = factory(selected.settings, *args)
            except Exception as exc:
                raise AssemblyError(selected.variant, str(exc)) from exc
            built.append(instance)
            return instance

        try:
            environment = construct(selection.environment)
            visualiser = construct(selection.visualiser)
            agent = construct(selection.agent, environment, visualiser)
            exit_condition = construct(selection.exit_condition)
        except AssemblyError:
            self._discard(built)
            raise

        return Session(
            selection=selection,
            environment=environment,
            agent=agent,
            visualiser=visualiser,
            exit_condition=exit_condition,
        )

    @staticmethod
    def _discard(built: List[Any]) -> None:
        for instance in reversed(built):
            close = getattr(instance, "close", None)
            if close is None:
                continue
            try:
                close()
            except Exception as exc:
                warnings.warn(
                    f"Closing {type(instance).__name__} after failed assembly raised: {exc}",
                    RuntimeWarning,
                )


def build_session(request: Union[Selection, Combination]) -> AssemblyResult:
    """Convenience wrapper around a default SessionBuilder."""
    return SessionBuilder().build(request)
