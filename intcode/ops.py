from collections import deque
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Deque, List, Optional, Tuple

from intcode.errors import (
    IntcodeError, InvalidWriteTargetError, NegativeAddressError, UnknownOpcodeError, UnknownParameterModeError
)
from intcode.memory import Memory


class ParamMode(IntEnum):
    POSITION = 0
    IMMEDIATE = 1
    RELATIVE = 2


class MachineStatus(Enum):
    RUNNING = "running"
    SUSPENDED_ON_INPUT = "suspended_on_input"
    HALTED = "halted"


@dataclass
class ExecutionContext:
    memory: Memory
    ip: int = 0
    relative_base: int = 0
    inputs: Deque[int] = field(default_factory=deque)
    outputs: Deque[int] = field(default_factory=deque)

    def address(self, mode: ParamMode, raw: int) -> int:
        if mode == ParamMode.POSITION:
            target = raw
        elif mode == ParamMode.RELATIVE:
            target = self.relative_base + raw
        else:
            raise InvalidWriteTargetError(self.ip)
        if target < 0:
            raise NegativeAddressError(target, self.ip)
        return target

    def load(self, mode: ParamMode, raw: int) -> int:
        if mode == ParamMode.IMMEDIATE:
            return raw
        return self.memory.read(self.address(mode, raw))

    def store(self, mode: ParamMode, raw: int, value: int):
        self.memory.write(self.address(mode, raw), value)

    def copy(self):
        return ExecutionContext(self.memory.copy(), self.ip, self.relative_base,
                                deque(self.inputs), deque(self.outputs))


def format_param(mode: ParamMode, raw: int) -> str:
    if mode == ParamMode.IMMEDIATE:
        return str(raw)
    if mode == ParamMode.RELATIVE:
        return f"[rb{raw:+d}]"
    return f"[{raw}]"


@dataclass
class Instruction:
    modes: Tuple[ParamMode, ...] = ()
    params: Tuple[int, ...] = ()

    opcode = -1
    param_count = 0
    mnemonic = "?"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        raise ValueError()

    def __str__(self):
        args = [format_param(m, p) for m, p in zip(self.modes, self.params)]
        return " ".join([self.mnemonic] + args)

    def arg(self, ec: ExecutionContext, i: int) -> int:
        return ec.load(self.modes[i], self.params[i])

    def store(self, ec: ExecutionContext, i: int, value: int):
        ec.store(self.modes[i], self.params[i], value)

    def inc_ip(self, ec: ExecutionContext):
        ec.ip += 1 + self.param_count


@dataclass
class AddI(Instruction):
    opcode = 1
    param_count = 3
    mnemonic = "ADD"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        self.store(ec, 2, self.arg(ec, 0) + self.arg(ec, 1))
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class MulI(Instruction):
    opcode = 2
    param_count = 3
    mnemonic = "MUL"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        self.store(ec, 2, self.arg(ec, 0) * self.arg(ec, 1))
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class InputI(Instruction):
    opcode = 3
    param_count = 1
    mnemonic = "IN"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        target = ec.address(self.modes[0], self.params[0])
        if not ec.inputs:
            # ip stays on this instruction so the next run retries it
            return MachineStatus.SUSPENDED_ON_INPUT
        ec.memory.write(target, ec.inputs.popleft())
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class OutputI(Instruction):
    opcode = 4
    param_count = 1
    mnemonic = "OUT"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        ec.outputs.append(self.arg(ec, 0))
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class JumpIfTrueI(Instruction):
    opcode = 5
    param_count = 2
    mnemonic = "JNZ"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        if self.arg(ec, 0) != 0:
            ec.ip = self.arg(ec, 1)
        else:
            self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class JumpIfFalseI(Instruction):
    opcode = 6
    param_count = 2
    mnemonic = "JZ"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        if self.arg(ec, 0) == 0:
            ec.ip = self.arg(ec, 1)
        else:
            self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class LessI(Instruction):
    opcode = 7
    param_count = 3
    mnemonic = "LESS"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        self.store(ec, 2, 1 if self.arg(ec, 0) < self.arg(ec, 1) else 0)
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class EqualsI(Instruction):
    opcode = 8
    param_count = 3
    mnemonic = "EQ"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        self.store(ec, 2, 1 if self.arg(ec, 0) == self.arg(ec, 1) else 0)
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class AdjustBaseI(Instruction):
    opcode = 9
    param_count = 1
    mnemonic = "ARB"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        ec.relative_base += self.arg(ec, 0)
        self.inc_ip(ec)
        return MachineStatus.RUNNING


@dataclass
class HaltI(Instruction):
    opcode = 99
    param_count = 0
    mnemonic = "HALT"

    def apply(self, ec: ExecutionContext) -> MachineStatus:
        return MachineStatus.HALTED


INSTRUCTIONS = {
    cls.opcode: cls
    for cls in (AddI, MulI, InputI, OutputI, JumpIfTrueI, JumpIfFalseI, LessI, EqualsI, AdjustBaseI, HaltI)
}


def decode_modes(value: int, count: int, idx: Optional[int] = None) -> Tuple[ParamMode, ...]:
    modes = []
    for i in range(count):
        digit = (value // 10 ** (i + 2)) % 10
        try:
            modes.append(ParamMode(digit))
        except ValueError:
            raise UnknownParameterModeError(digit, idx) from None
    return tuple(modes)


def decode_instruction(memory: Memory, idx: int) -> Instruction:
    value = memory.read(idx)
    if value < 0 or value % 100 not in INSTRUCTIONS:
        raise UnknownOpcodeError(value % 100 if value >= 0 else value, idx)
    cls = INSTRUCTIONS[value % 100]
    modes = decode_modes(value, cls.param_count, idx)
    params = tuple(memory.read(idx + 1 + i) for i in range(cls.param_count))
    return cls(modes, params)


def disassemble(values: List[int]) -> List[Tuple[int, str]]:
    """
    Render a listing of `values` as (address, text) lines.

    Cells that do not decode, or whose parameters would run past the end,
    are shown as `DATA n` and the listing resumes at the next cell.
    """
    memory = Memory(values)
    result = []
    idx = 0
    while idx < len(values):
        try:
            instr = decode_instruction(memory, idx)
        except IntcodeError:
            instr = None
        if instr is None or idx + instr.param_count >= len(values):
            result.append((idx, f"DATA {values[idx]}"))
            idx += 1
        else:
            result.append((idx, str(instr)))
            idx += 1 + instr.param_count
    return result
