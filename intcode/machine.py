import logging
from typing import Deque, Iterable, List, Optional

from intcode.errors import NegativeAddressError
from intcode.memory import Memory
from intcode.ops import ExecutionContext, MachineStatus, decode_instruction
from intcode.program_parser import parse_program

logger = logging.getLogger(__name__)

NEWLINE = 10


class Machine:
    """
    Interpreter for one integer program.

    The machine runs until the program halts or until an input instruction
    finds the input queue empty. In the latter case `run()` returns
    `MachineStatus.SUSPENDED_ON_INPUT` with the program counter still on
    that input instruction; queue more input and call `run()` again to resume.
    """

    def __init__(self, values: Iterable[int], capacity: int = 0):
        self.ec = ExecutionContext(Memory(values, capacity))
        self.status = MachineStatus.RUNNING
        self.executed_steps = 0

    @classmethod
    def from_text(cls, text: str, capacity: int = 0) -> 'Machine':
        return cls(parse_program(text), capacity)

    @classmethod
    def from_values(cls, values: Iterable[int], capacity: int = 0) -> 'Machine':
        return cls(values, capacity)

    @property
    def program_counter(self) -> int:
        return self.ec.ip

    @property
    def relative_base(self) -> int:
        return self.ec.relative_base

    @property
    def inputs(self) -> Deque[int]:
        return self.ec.inputs

    @property
    def outputs(self) -> Deque[int]:
        return self.ec.outputs

    @property
    def halted(self) -> bool:
        return self.status == MachineStatus.HALTED

    def get_mem(self, address: int) -> int:
        return self.ec.memory.read(address)

    def set_mem(self, address: int, value: int):
        self.ec.memory.write(address, value)

    def memory_size(self) -> int:
        return len(self.ec.memory)

    def step(self) -> MachineStatus:
        """Execute a single instruction and return the resulting status."""
        if self.status == MachineStatus.HALTED:
            return self.status
        if self.ec.ip < 0:
            raise NegativeAddressError(self.ec.ip, self.ec.ip)
        instr = decode_instruction(self.ec.memory, self.ec.ip)
        self.status = instr.apply(self.ec)
        if self.status == MachineStatus.SUSPENDED_ON_INPUT:
            logger.debug("Suspended on input at %d", self.ec.ip)
            return self.status
        self.executed_steps += 1
        if self.status == MachineStatus.HALTED:
            logger.debug("Halted at %d after %d steps", self.ec.ip, self.executed_steps)
        return self.status

    def run(self) -> MachineStatus:
        """Run until the program halts or blocks on an empty input queue."""
        while self.step() == MachineStatus.RUNNING:
            pass
        return self.status

    def push_input(self, *values: int):
        self.ec.inputs.extend(values)

    def input_line(self, line: str):
        """Queue `line` as character codes followed by a newline."""
        self.ec.inputs.extend(ord(c) for c in line)
        self.ec.inputs.append(NEWLINE)

    def pop_output(self) -> Optional[int]:
        return self.ec.outputs.popleft() if self.ec.outputs else None

    def pop_last_output(self) -> Optional[int]:
        return self.ec.outputs.pop() if self.ec.outputs else None

    def take_outputs(self) -> List[int]:
        result = list(self.ec.outputs)
        self.ec.outputs.clear()
        return result

    def outputs_as_ascii(self) -> str:
        return "".join(chr(v) if 0 <= v < 128 else f"<{v}>" for v in self.ec.outputs)

    def print_outputs_as_ascii(self):
        print(self.outputs_as_ascii(), end="")
        self.ec.outputs.clear()

    def copy(self) -> 'Machine':
        result = Machine.__new__(Machine)
        result.ec = self.ec.copy()
        result.status = self.status
        result.executed_steps = self.executed_steps
        return result
