"""
Recursive descent driver shared by every conversion domain.
"""
from typing import Generic, List, Optional

from .base import S, T, V, ConverterStrategy, TypeConverter
from .exceptions import ConversionError, UnsupportedTypeError

DEFAULT_MAX_DEPTH = 64


class ConversionContext(Generic[V, T, S]):
    """
    Converts values with the converters of a single ``ConverterStrategy``.

    Every call to ``convert`` pushes the value on a depth stack for the
    duration of the call. When a conversion fails, the full stack is captured
    once at the deepest frame and logged as one message when the failure
    reaches the top-level call, so a failure many levels down is reported
    exactly once with its complete path.

    A context is not safe for concurrent use. Create one per top-level
    conversion; strategies can be shared.
    """

    def __init__(self, strategy: ConverterStrategy[V, T, S], max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1.")
        self.strategy = strategy
        self.max_depth = max_depth
        self._conversion_depth_stack: List[V] = []
        self._error_stack: List[V] = []

        state = strategy.initial_state()
        self._state: S = state() if callable(state) else state

        logger = strategy.logger()
        # a logger has an ``error`` method, a factory does not
        self.logger = logger() if callable(logger) and not hasattr(logger, "error") else logger

    @property
    def state(self) -> S:
        """The run state shared by every converter for this context."""
        return self._state

    @property
    def depth(self) -> int:
        return len(self._conversion_depth_stack)

    def convert(self, value: V) -> T:
        self._conversion_depth_stack.append(value)
        try:
            if len(self._conversion_depth_stack) > self.max_depth:
                raise ConversionError(
                    f"Maximum conversion depth of {self.max_depth} exceeded. "
                    "The source type graph may be self-referential."
                )

            converter = self._select_converter(value)
            if converter is None:
                raise UnsupportedTypeError(
                    self.strategy.value_to_string(value),
                    self.strategy.name,
                    value=value,
                )
            return converter.convert(value, self)

        except ConversionError as e:
            self._log_exception(e)
            raise
        except Exception as e:
            error = ConversionError(f"{type(e).__name__}: {e}")
            self._log_exception(error)
            raise error from e
        finally:
            self._conversion_depth_stack.pop()

    def _select_converter(self, value: V) -> Optional[TypeConverter[V, T, S]]:
        for converter in self.strategy.type_converters():
            if converter.supports(value, self._state):
                return converter
        return None

    def _log_exception(self, error: ConversionError) -> None:
        """Logs an error once per top-level conversion, no matter how deep it was raised."""
        # First frame to see the error is the deepest one, the stack is complete here
        if not self._error_stack:
            self._error_stack.extend(self._conversion_depth_stack)
            error.path = [self.strategy.value_to_string(value) for value in self._error_stack]

        if len(self._conversion_depth_stack) == 1:
            lines = ["Error occurred during conversion.", error.message]
            for depth, value in enumerate(self._error_stack, start=1):
                lines.append("\t" * depth + "- " + self.strategy.value_to_string(value))
            self.logger.error(
                "\n".join(lines),
                strategy=self.strategy.name,
                depth=len(self._error_stack),
            )
            self._error_stack.clear()


def create_conversion_context(strategy: ConverterStrategy[V, T, S], max_depth: Optional[int] = None) -> ConversionContext[V, T, S]:
    """Creates a context bound to ``strategy``."""
    if max_depth is None:
        return ConversionContext(strategy)
    return ConversionContext(strategy, max_depth=max_depth)
