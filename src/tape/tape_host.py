"""Host implementations for Tape programs.

A host supplies every side effect a program can have: output, line input,
random numbers and timed delays.  The evaluator never touches the console,
the clock or the random module directly.
"""

from abc import ABC, abstractmethod
import random
import sys
import time
from typing import Iterable, Iterator, List, TextIO


class TapeHost(ABC):
    """Interface between a running Tape program and the outside world."""

    @abstractmethod
    def write(self, text: str) -> None:
        """
        Emit program output.

        Args:
            text: Text to output, in program order
        """

    @abstractmethod
    def read_line(self) -> str:
        """
        Block until a line of input is available.

        Returns:
            The line read, or an empty string if input is exhausted
        """

    @abstractmethod
    def random_below(self, upper: int) -> int:
        """
        Return a uniformly distributed integer in [0, upper).

        Args:
            upper: Exclusive upper bound
        """

    @abstractmethod
    def delay(self, seconds: float) -> None:
        """
        Block for a duration.

        Args:
            seconds: Duration of the delay
        """


class TapeConsoleHost(TapeHost):
    """Host that uses the process's standard streams and real time."""

    def __init__(self, stdout: TextIO | None = None, stdin: TextIO | None = None) -> None:
        """
        Initialize console host.

        Args:
            stdout: Output stream (defaults to sys.stdout at write time)
            stdin: Input stream (defaults to sys.stdin at read time)
        """
        self._stdout = stdout
        self._stdin = stdin

    def write(self, text: str) -> None:
        stream = self._stdout if self._stdout is not None else sys.stdout
        stream.write(text)
        stream.flush()

    def read_line(self) -> str:
        stream = self._stdin if self._stdin is not None else sys.stdin
        return stream.readline()

    def random_below(self, upper: int) -> int:
        return random.randrange(upper)

    def delay(self, seconds: float) -> None:
        time.sleep(seconds)


class TapeBufferingHost(TapeHost):
    """
    Host that keeps everything in memory for programmatic access.

    Output is buffered, input comes from a fixed list of lines, random numbers
    come from a scripted sequence or a seeded generator, and delays are
    recorded rather than slept.
    """

    def __init__(
        self,
        input_lines: Iterable[str] = (),
        random_values: Iterable[int] | None = None,
        seed: int | None = None
    ) -> None:
        """
        Initialize buffering host.

        Args:
            input_lines: Lines returned by successive reads
            random_values: Values returned by successive random requests, each
                within the requested range; when exhausted (or not given) the
                seeded generator is used
            seed: Seed for the fallback random generator
        """
        self._output: List[str] = []
        self._input: Iterator[str] = iter(input_lines)
        self._random_values: Iterator[int] = iter(random_values if random_values is not None else ())
        self._random = random.Random(seed)
        self.lines_read: List[str] = []
        self.delays: List[float] = []

    @property
    def output(self) -> str:
        """Everything written so far."""
        return "".join(self._output)

    def clear(self) -> None:
        """Discard buffered output and recorded delays."""
        self._output.clear()
        self.delays.clear()
        self.lines_read.clear()

    def write(self, text: str) -> None:
        self._output.append(text)

    def read_line(self) -> str:
        line = next(self._input, "")
        self.lines_read.append(line)
        return line

    def random_below(self, upper: int) -> int:
        """
        Return the next scripted value, or a seeded random one.

        Raises:
            ValueError: If a scripted value is outside [0, upper)
        """
        value = next(self._random_values, None)
        if value is None:
            return self._random.randrange(upper)

        if not 0 <= value < upper:
            raise ValueError(f"Scripted random value {value} is outside [0, {upper})")

        return value

    def delay(self, seconds: float) -> None:
        self.delays.append(seconds)
