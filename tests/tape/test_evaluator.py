"""Tests for evaluation of Tape primitives."""

import pytest

from tape import (
    TapeBufferingHost, TapeEvalError, TapeEvaluator, TapeProgram, TapeASTIncrementCell, TapeASTPrintChar,
    TapeASTPrintNumber, TapeASTRecycle
)


class TestTapeEvaluatorCells:
    """Test cell and register operations."""

    def test_increment_and_print(self, tape, host):
        """Test incrementing a cell and printing it."""
        tape.run("^^,")
        assert host.output == "2"

    def test_three_increments(self, tape, host):
        """Test incrementing a cell three times."""
        tape.run("^^^,")
        assert host.output == "3"

    def test_decrement_below_zero(self, tape, host):
        """Test that cells hold negative values."""
        tape.run("vvv,")
        assert host.output == "-3"

    def test_reset(self, tape, host):
        """Test resetting a cell."""
        tape.run("^^^^0,")
        assert host.output == "0"

    def test_write_and_read(self, tape, host):
        """Test copying a cell through the memory register."""
        result = tape.run("^^^W>R,")
        assert host.output == "3"
        assert result.root_frame.tape == [3, 3]
        assert result.root_frame.memory == 3

    def test_swap(self, tape, host):
        """Test swapping the cell with memory."""
        result = tape.run("^^W0^S,")
        assert host.output == "2"
        assert result.root_frame.memory == 1

    def test_keyword_swap(self, tape, host):
        """Test the keyword spelling of swap."""
        tape.run("^^W0^ swap nprint")
        assert host.output == "2"

    def test_move_and_return_to_start(self, tape, host):
        """Test moving the cursor and returning to the first cell."""
        result = tape.run("^>^^>^^^$,")
        assert host.output == "1"
        assert result.root_frame.tape == [1, 2, 3]
        assert result.root_frame.current == 0

    def test_unvisited_cells_read_zero(self, tape, helpers):
        """Test that cells reached by moving right start at zero."""
        result = tape.run(">>>>>,")
        assert helpers.root_tape(result) == [0, 0, 0, 0, 0, 0]

    def test_flush(self, tape, helpers):
        """Test that flush resets the whole frame."""
        result = tape.run("^^^W>>^^L")
        frame = result.root_frame
        assert helpers.root_tape(result) == [0]
        assert frame.current == 0
        assert frame.memory == 0
        assert frame.return_register == 0

    def test_flush_clears_return_register(self, tape):
        """Test that flush clears a return register set by a call."""
        result = tape.run("F1^^E 1 L")
        assert result.root_frame.return_register == 0

    def test_recycle_is_noop(self, tape, host):
        """Test that the reserved opcode does nothing."""
        result = tape.run("^^C clear ,")
        assert host.output == "2"
        assert result.root_frame.tape == [2]


class TestTapeEvaluatorOutput:
    """Test output opcodes."""

    def test_print_character(self, tape, host):
        """Test printing a character from its code point."""
        tape.run("^" * 72 + "." + "^" * 33 + ".")
        assert host.output == "Hi"

    def test_print_number_has_no_terminator(self, tape, host):
        """Test that numbers are printed without separators."""
        tape.run("^,^,^,")
        assert host.output == "123"

    def test_newline(self, tape, host):
        """Test printing line breaks."""
        tape.run("^,N^,N")
        assert host.output == "1\n2\n"

    def test_print_zero_character(self, tape, host):
        """Test that code point zero is valid."""
        tape.run(".")
        assert host.output == "\x00"

    def test_print_negative_character_is_fatal(self, tape):
        """Test printing an invalid code point."""
        with pytest.raises(TapeEvalError, match="Cannot print character for cell value -1") as exc_info:
            tape.run("v.")

        assert (exc_info.value.line, exc_info.value.column) == (1, 2)

    @pytest.mark.parametrize("value", [0x110000, 0xD800, 0xDFFF])
    def test_print_invalid_code_points_is_fatal(self, host, value):
        """Test code points outside the Unicode scalar range."""
        evaluator = TapeEvaluator(host)
        program = TapeProgram((TapeASTIncrementCell(value), TapeASTPrintChar()))
        with pytest.raises(TapeEvalError, match=f"Cannot print character for cell value {value}"):
            evaluator.run(program)

        assert host.output == ""

    def test_output_order_is_preserved(self, tape, host):
        """Test that output arrives in program order."""
        tape.run("^" * 65 + ".,N")
        assert host.output == "A65\n"


class TestTapeEvaluatorHostEffects:
    """Test random numbers, sleeping and pausing."""

    def test_random(self, tape_custom):
        """Test that random values come from the host."""
        host = TapeBufferingHost(random_values=[42, 7])
        tape = tape_custom(host)
        result = tape.run("%>%$,")
        assert host.output == "42"
        assert result.root_frame.tape == [42, 7]

    def test_random_is_in_range(self, tape, host):
        """Test that generated random values are within [0, 100)."""
        result = tape.run("%>" * 50)
        assert all(0 <= value < 100 for value in result.root_frame.tape)

    def test_sleep(self, tape, host):
        """Test that sleep asks the host for cell x 100 ms."""
        tape.run("^^^Z0Z")
        assert host.delays == pytest.approx([0.3, 0.0])

    def test_sleep_unit_is_configurable(self, tape_custom):
        """Test the sleep unit setting."""
        host = TapeBufferingHost()
        tape_custom(host, sleep_unit_ms=250).run("^^ sleep")
        assert host.delays == pytest.approx([0.5])

    def test_negative_sleep_is_fatal(self, tape, host):
        """Test that sleeping for a negative duration fails."""
        with pytest.raises(TapeEvalError, match="negative duration") as exc_info:
            tape.run("^\nvvZ")

        assert (exc_info.value.line, exc_info.value.column) == (2, 3)
        assert host.delays == []

    def test_pause_reads_and_discards_a_line(self, tape_custom):
        """Test that pause consumes one input line without changing state."""
        host = TapeBufferingHost(input_lines=["hello\n", "world\n"])
        result = tape_custom(host).run("^^P,")
        assert host.lines_read == ["hello\n"]
        assert host.output == "2"
        assert result.root_frame.tape == [2]

    def test_pause_with_exhausted_input(self, tape, host):
        """Test pausing when no input is left."""
        tape.run("PP^,")
        assert host.lines_read == ["", ""]
        assert host.output == "1"


class TestTapeEvaluatorFaults:
    """Test fatal runtime faults."""

    def test_move_left_from_start_is_fatal(self, tape):
        """Test moving before the first cell."""
        with pytest.raises(TapeEvalError, match="Cursor moved before the start of the tape") as exc_info:
            tape.run("^^>\n<<")

        assert (exc_info.value.line, exc_info.value.column) == (2, 2)

    def test_fault_stops_run(self, tape, host):
        """Test that output before a fault is kept and nothing after it runs."""
        with pytest.raises(TapeEvalError):
            tape.run("^,<^,")

        assert host.output == "1"

    def test_fault_includes_source_context(self, tape):
        """Test that runtime errors show the source line."""
        with pytest.raises(TapeEvalError) as exc_info:
            tape.run("^^^\n<")

        message = str(exc_info.value)
        assert "Location: Line 2, Column 1" in message
        assert "Source Context" in message

    def test_fault_without_source_context(self, tape_custom):
        """Test suppressing source context for runtime errors."""
        with pytest.raises(TapeEvalError) as exc_info:
            tape_custom(show_error_context=False).run("<")

        assert "Source Context" not in str(exc_info.value)

    def test_unknown_expression_type(self, host):
        """Test that only Tape AST nodes can be evaluated."""
        evaluator = TapeEvaluator(host)
        with pytest.raises(TypeError, match="Unknown expression type"):
            evaluator.run(TapeProgram(("not a node",)))  # type: ignore[arg-type]


class TestTapeEvaluatorRuns:
    """Test run lifecycle."""

    def test_each_run_starts_fresh(self, tape, host):
        """Test that runs do not share state."""
        first = tape.run("^^^F1E")
        second = tape.run(",")
        assert host.output == "0"
        assert first.root_frame.tape == [3]
        assert second.context.functions == {}

    def test_run_program_directly(self, host):
        """Test running a hand-built program."""
        program = TapeProgram((TapeASTIncrementCell(5), TapeASTRecycle(), TapeASTPrintNumber()))
        result = TapeEvaluator(host).run(program)
        assert host.output == "5"
        assert result.diagnostics == []
