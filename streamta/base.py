"""Base class for streaming technical indicators."""

from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar, Union
import math
import logging

from .exceptions import (
    InvalidParameterError,
    MissingInputError,
    InvalidDataError
)
from .quotes import DataPoint

logger = logging.getLogger(__name__)

Output = Union[float, Tuple[float, ...]]

# Input accepted by an indicator's `update` and `next`
InputT = TypeVar('InputT')


class BaseIndicator(ABC, Generic[InputT]):
    """
    Abstract base for streaming technical indicators.

    Every indicator follows the same contract:

    - construction validates configuration and raises
      ``InvalidParameterError`` on a bad value;
    - ``next(data_point)`` consumes exactly one tick and returns the value as
      of and including that tick;
    - ``reset()`` restores the freshly constructed state.

    Output depends only on configuration and the ticks seen since the last
    reset, so replaying a history through ``next`` reproduces the values a
    live run would have produced.
    """

    # Fields read from each data point, overridden by subclasses
    required_inputs: Tuple[str, ...] = ('close',)

    # Whether a bare number is accepted in place of a bar. The number is
    # used for every required field.
    accepts_scalar: bool = True

    def __init__(self, period: int, input_field: str = 'close'):
        """Initialize indicator with period and input field."""
        self._name = self.__class__.__name__
        self._validate_period(period, indicator_name=self._name)

        self.period = period
        self.input_field = input_field
        self.required_inputs = (input_field,)

        # State management
        self._ready_threshold = period
        self._data_count = 0

        # Composite pattern support
        self._children: List['BaseIndicator'] = []

        logger.debug(f"Initialized {self._name} with period={period}, input_field={input_field}")

    @abstractmethod
    def update(self, data_point: InputT) -> None:
        """
        Process a new data point and update the indicator state.

        Implementations must:
        1. Read the required fields through ``_read_inputs``
        2. Update internal state incrementally (O(1) amortized)
        3. Call ``_update_metadata`` once the tick is consumed

        Args:
            data_point: A number, a ``Quote``, or a mapping containing every
                field in ``required_inputs``.

        Raises:
            MissingInputError: If required input fields are missing.
            InvalidDataError: If input data contains invalid values.
        """

    @property
    @abstractmethod
    def value(self) -> Output:
        """
        Current value of the indicator.

        Simple indicators return a float, composite indicators a NamedTuple.
        Before the first tick (or when an indicator has no defined value yet)
        the result is ``math.nan`` or a NamedTuple of NaNs.
        """

    def next(self, data_point: InputT) -> Output:
        """
        Consume one tick and return the updated value.

        Args:
            data_point: A number, a ``Quote``, or a mapping with the fields in
                ``required_inputs``.

        Returns:
            The indicator value as of and including ``data_point``.
        """
        self.update(data_point)
        return self.value

    @property
    def is_ready(self) -> bool:
        """
        Check whether the warm-up span is complete.

        Values are emitted from the first tick; before ``is_ready`` they
        follow each indicator's partial-window convention.
        """
        return self._data_count >= self._ready_threshold

    @property
    def count(self) -> int:
        """Number of ticks consumed since construction or the last reset."""
        return self._data_count

    @property
    def children(self) -> List['BaseIndicator']:
        """
        Get the list of child indicators for composite patterns.

        Returns:
            List[BaseIndicator]: Owned sub-indicators. Empty for leaves.
        """
        return self._children.copy()

    @property
    def config(self) -> Dict[str, Any]:
        """Configuration the indicator was constructed with."""
        return {'period': self.period, 'input_field': self.input_field}

    def reset(self) -> None:
        """
        Reset the indicator to its initial state.

        Subclasses extend this to clear their own state and must call
        ``super().reset()``. Child indicators are reset recursively.
        """
        self._data_count = 0

        for child in self._children:
            child.reset()

        logger.debug(f"Reset {self._name} indicator state")

    def _read_inputs(self, data_point: DataPoint) -> Tuple[float, ...]:
        """
        Extract the required fields of a data point, in ``required_inputs`` order.

        Raises:
            MissingInputError: If a required field is absent.
            InvalidDataError: If a field is None, NaN or infinite.
        """
        if isinstance(data_point, Real) and not isinstance(data_point, bool):
            if not self.accepts_scalar:
                raise MissingInputError(list(self.required_inputs), list(self.required_inputs), self._name)
            values = (float(data_point),) * len(self.required_inputs)
        elif isinstance(data_point, Mapping):
            missing_fields = [field for field in self.required_inputs if field not in data_point]
            if missing_fields:
                raise MissingInputError(missing_fields, list(self.required_inputs), self._name)
            values = tuple(data_point[field] for field in self.required_inputs)
        else:
            # Attribute access; optional Quote fields default to None
            missing_fields = [
                field for field in self.required_inputs
                if getattr(data_point, field, None) is None
            ]
            if missing_fields:
                raise MissingInputError(missing_fields, list(self.required_inputs), self._name)
            values = tuple(getattr(data_point, field) for field in self.required_inputs)

        for field, value in zip(self.required_inputs, values):
            if value is None:
                raise InvalidDataError(field, value, "value is None", self._name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidDataError(field, value, "value is not numeric", self._name)
            if math.isnan(value):
                raise InvalidDataError(field, value, "value is NaN", self._name)
            if math.isinf(value):
                raise InvalidDataError(field, value, "value is infinite", self._name)

        return tuple(float(value) for value in values)

    def _update_metadata(self) -> None:
        """Count the tick that was just consumed."""
        self._data_count += 1

    @staticmethod
    def _validate_period(period: int, name: str = "period", indicator_name: Optional[str] = None) -> None:
        """
        Validate that a period parameter is a positive integer.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        if isinstance(period, bool) or not isinstance(period, int):
            raise InvalidParameterError(name, period, "positive integer", indicator_name)

        if period <= 0:
            raise InvalidParameterError(name, period, "positive integer (> 0)", indicator_name)

    def __repr__(self) -> str:
        """String representation of the indicator."""
        ready_status = "ready" if self.is_ready else f"warming up ({self._data_count}/{self._ready_threshold})"
        return f"{self._name}(period={self.period}, {ready_status})"

    def __str__(self) -> str:
        """Human-readable string representation."""
        return self.__repr__()
