from typing import Optional


class IntcodeError(Exception):
    """Base class for all intcode errors."""
    pass


class MalformedProgramError(IntcodeError):
    """Raised when program text is not a comma-separated list of integers."""
    def __init__(self, fragment: str, column: int = 0):
        self.fragment = fragment
        self.column = column
        super().__init__(f"Malformed program at column {column}: {fragment!r}")


class MachineFault(IntcodeError):
    """Base class for fatal runtime faults. `address` is the faulting instruction."""
    def __init__(self, message: str, address: Optional[int] = None):
        self.address = address
        super().__init__(message + (f" (instruction at {address})" if address is not None else ""))


class UnknownOpcodeError(MachineFault):
    """Raised when an instruction decodes to an opcode outside the repertoire."""
    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        super().__init__(f"Unknown opcode: {opcode}", address)


class UnknownParameterModeError(MachineFault):
    """Raised when a parameter mode digit is not 0, 1 or 2."""
    def __init__(self, mode: int, address: Optional[int] = None):
        self.mode = mode
        super().__init__(f"Unknown parameter mode: {mode}", address)


class InvalidWriteTargetError(MachineFault):
    """Raised when an instruction would write through an immediate-mode parameter."""
    def __init__(self, address: Optional[int] = None):
        super().__init__("Immediate mode parameter used as write target", address)


class NegativeAddressError(MachineFault):
    """Raised when a resolved memory address is negative."""
    def __init__(self, target: int, address: Optional[int] = None):
        self.target = target
        super().__init__(f"Negative memory address: {target}", address)


class PipelineStalledError(IntcodeError):
    """Raised when no stage of a pipeline can make progress."""
    def __init__(self, waiting: list):
        self.waiting = waiting
        super().__init__(f"Pipeline stalled, stages waiting for input: {waiting}")
